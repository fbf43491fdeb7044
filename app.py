from __future__ import annotations

from pathlib import Path

import pandas as pd
import streamlit as st

from rate_finder.config import AppConfig, load_app_config
from rate_finder.data_loader import source_mtime
from rate_finder.lookup import search
from rate_finder.models import DISPLAY_COLUMNS, RateCatalog
from rate_finder.rate_sheets import load_rate_catalog


APP_DIR = Path(__file__).resolve().parent
CONFIG_PATH = APP_DIR / "config.toml"

PLACEHOLDER_POL = "Selecciona POL"
PLACEHOLDER_POD = "Selecciona POD"


def _get_cached_catalog(config: AppConfig) -> RateCatalog | None:
    catalog: RateCatalog | None = st.session_state.get("rate_catalog")
    if catalog is None:
        return None
    if catalog.source != config.workbook.source:
        st.session_state.pop("rate_catalog", None)
        return None
    if st.session_state.get("rate_catalog_mtime") != source_mtime(config.workbook.source):
        st.session_state.pop("rate_catalog", None)
        return None
    return catalog


def _load_catalog(config: AppConfig) -> RateCatalog | None:
    try:
        with st.spinner("Cargando tarifas desde Excel..."):
            catalog = load_rate_catalog(config=config)
    except (FileNotFoundError, ValueError) as e:
        st.session_state["rate_catalog_error"] = str(e)
        return None
    st.session_state["rate_catalog"] = catalog
    st.session_state["rate_catalog_mtime"] = source_mtime(config.workbook.source)
    st.session_state.pop("rate_catalog_error", None)
    return catalog


def _render_local_charges(catalog: RateCatalog, config: AppConfig) -> None:
    st.subheader("Gastos locales")
    sheet = config.workbook.local_charges_sheet
    if sheet not in catalog.sheet_names:
        st.caption(f'No se encontraron gastos locales en la hoja "{sheet}".')
        return
    if not catalog.local_charges:
        st.caption(f'La hoja "{sheet}" no contiene filas legibles.')
        return
    st.dataframe(
        pd.DataFrame([c.to_display_row() for c in catalog.local_charges]),
        use_container_width=True,
        hide_index=True,
    )


def _render_remarks(catalog: RateCatalog) -> None:
    st.subheader("Remarks")
    if not catalog.remarks:
        st.caption("No remarks available.")
        return
    st.markdown("\n".join(f"- {line}" for line in catalog.remarks))


def main() -> None:
    config = load_app_config(CONFIG_PATH)
    st.set_page_config(page_title=config.ui.title, layout="wide")

    st.title(config.ui.title)

    catalog = _get_cached_catalog(config)

    with st.sidebar:
        st.header("Datos")
        st.write(f"Origen: `{config.workbook.source}`")
        if st.button("Recargar Excel", type="secondary"):
            _load_catalog(config)
            st.rerun()

    if catalog is None and "rate_catalog_error" not in st.session_state:
        catalog = _load_catalog(config)

    if catalog is None:
        st.error(f"Error: {st.session_state.get('rate_catalog_error', 'desconocido')}")
        st.info("No se pudo cargar el Excel. Revisa la ruta del archivo y los mensajes en la consola.")
        st.button("Buscar", type="primary", disabled=True)
        return

    with st.sidebar:
        st.write(f"Hojas: {', '.join(catalog.sheet_names)}")
        st.write(f"Tarifas: **{len(catalog.rates)}**")
        st.write(f"Cargado: {catalog.loaded_at:%Y-%m-%d %H:%M:%S}")
        if "rate_catalog_error" in st.session_state:
            st.error("La última recarga falló: " + st.session_state["rate_catalog_error"])
        if catalog.warnings:
            st.warning("Avisos:\n- " + "\n- ".join(catalog.warnings))

    col_pol, col_pod = st.columns(2)
    with col_pol:
        pol = st.selectbox("POL", options=["", *catalog.origins], format_func=lambda v: v or PLACEHOLDER_POL)
    with col_pod:
        pod = st.selectbox("POD", options=["", *catalog.destinations], format_func=lambda v: v or PLACEHOLDER_POD)

    if st.button("Buscar", type="primary"):
        result = search(catalog.rates, pol, pod)
        st.caption(result.message)
        if result.found:
            st.dataframe(
                pd.DataFrame([r.to_display_row() for r in result.rates], columns=list(DISPLAY_COLUMNS)),
                use_container_width=True,
                hide_index=True,
            )
    else:
        st.caption(f"Listo. Tarifas cargadas: {len(catalog.rates)}")

    st.divider()
    _render_local_charges(catalog, config)
    st.divider()
    _render_remarks(catalog)


if __name__ == "__main__":
    main()
