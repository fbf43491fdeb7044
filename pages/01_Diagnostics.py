from __future__ import annotations

from pathlib import Path

import pandas as pd
import streamlit as st

from rate_finder.config import load_app_config
from rate_finder.fields import RATE_FIELDS
from rate_finder.normalize import normalize_key
from rate_finder.rate_sheets import load_rate_catalog


APP_DIR = Path(__file__).resolve().parents[1]


def main() -> None:
    st.set_page_config(page_title="Diagnóstico", layout="wide")

    st.title("Diagnóstico de lectura del Excel")
    st.caption("Cómo se interpretó la hoja de tarifas: fila de encabezados, alias y columnas resueltas.")

    st.header("Cómo funciona")
    st.markdown(
        """
1. **Fila de encabezados**: se revisan las primeras filas hasta encontrar una con POL y POD (o sinónimos).
   Si no aparece, se usa la primera fila.
2. **Normalización**: cada encabezado se pasa a minúsculas, sin signos ni espacios repetidos.
3. **Alias**: cada campo se busca primero por nombre exacto y, si no hay, por fragmentos
   (por ejemplo `40` + `hq` encuentra "40HQ ALL IN").
4. **40HC / 40HQ**: se prueban ambas familias y se usa la primera celda con valor.
5. **Filas**: se descartan las filas sin POL ni POD; los duplicados se conservan.
"""
    )

    config = load_app_config(APP_DIR / "config.toml")
    catalog = st.session_state.get("rate_catalog")

    if st.button("Analizar de nuevo", type="primary") or catalog is None:
        try:
            catalog = load_rate_catalog(config=config)
        except (FileNotFoundError, ValueError) as e:
            st.error(str(e))
            return

    st.header("Libro")
    st.write(f"Origen: `{catalog.source}`")
    st.write(f"Hojas: {list(catalog.sheet_names)}")
    if catalog.warnings:
        st.warning("Avisos:\n- " + "\n- ".join(catalog.warnings))

    st.header("Encabezados")
    st.write(f"Fila de encabezados: **{catalog.header_row}**")
    st.dataframe(
        pd.DataFrame(
            {
                "Columna": list(range(len(catalog.raw_headers))),
                "Original": list(catalog.raw_headers),
                "Normalizado": [normalize_key(h) for h in catalog.raw_headers],
            }
        ),
        use_container_width=True,
        hide_index=True,
    )

    st.header("Columnas resueltas")
    rows = []
    for field_spec in RATE_FIELDS:
        columns = catalog.column_plan.get(field_spec.name, ())
        rows.append(
            {
                "Campo": field_spec.label,
                "Columnas": ", ".join("-" if c is None else str(c) for c in columns),
                "Encabezado": ", ".join(catalog.raw_headers[c] for c in columns if c is not None),
            }
        )
    st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)

    st.header("Muestra")
    st.write(f"Tarifas: **{len(catalog.rates)}**, POL: {len(catalog.origins)}, POD: {len(catalog.destinations)}")
    st.dataframe(
        pd.DataFrame([r.to_display_row() for r in catalog.rates[:10]]),
        use_container_width=True,
        hide_index=True,
    )


if __name__ == "__main__":
    main()
