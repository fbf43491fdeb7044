"""
Shared fixtures: real .xlsx workbooks written through pandas + openpyxl.
"""

from pathlib import Path

import pandas as pd
import pytest

from rate_finder.config import AppConfig, UiConfig, WorkbookConfig


# ============================================================================
# WORKBOOK CONTENT
# ============================================================================

RATES_ROWS = [
    ["ACME LOGISTICS", None, None, None, None, None, None, None, None],
    ["Tarifas marítimas Q1", None, None, None, None, None, None, None, None],
    ["Vigencia: marzo", None, None, None, None, None, None, None, None],
    ["POL", "POD", "NOR", "20GP", "40HQ", "VALIDEZ", "DÍAS LIBRES", "NAVIERA", "AGENTE"],
    ["Valparaiso", "Rotterdam", "", 900, 1500, "31-03", 14, "Maersk", "Agente A"],
    ["Callao", "Rotterdam", "SI", 800, 1200, "31-03", 21, "MSC", "Agente B"],
    ["Callao", "Rotterdam", "", 850, 1250, "31-03", 21, "Hapag", "Agente C"],
    ["Valparaiso", "Hamburg", "N/A", 950, 1600, "31-03", 14, "CMA CGM", "Agente A"],
    ["", "", "", 100, 200, "", "", "Orphan", ""],
]

LOCAL_CHARGES_ROWS = [
    ["Concepto", "Detalle", "Cálculo", "IVA"],
    ["THC", "Terminal handling", "USD 150 / cntr", "Sí"],
    ["BL fee", "Emisión de BL", "USD 80 / BL", "N/A"],
    ["Gate in", "", "", "IVA incluido"],
    ["", "", "", "Sí"],
]

REMARKS_ROWS = [
    ["REMARKS", None],
    ["Tarifas sujetas a disponibilidad", "Incluye BAF"],
    [None, "No incluye seguro"],
]


def write_workbook(path: Path, sheets: dict[str, list[list]]) -> Path:
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for name, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=name, header=False, index=False)
    return path


def make_config(source: Path | str, *, debug: bool = False) -> AppConfig:
    return AppConfig(
        workbook=WorkbookConfig(
            source=str(source),
            rates_sheet="RATES",
            local_charges_sheet="GASTOS_LOCALES",
            remarks_sheet="REMARKS",
            header_scan_rows=25,
            fetch_timeout=5.0,
        ),
        ui=UiConfig(title="Rate Finder", debug=debug),
    )


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def full_workbook(tmp_path) -> Path:
    return write_workbook(
        tmp_path / "tarifas.xlsx",
        {"RATES": RATES_ROWS, "GASTOS_LOCALES": LOCAL_CHARGES_ROWS, "REMARKS": REMARKS_ROWS},
    )


@pytest.fixture
def rates_only_workbook(tmp_path) -> Path:
    return write_workbook(tmp_path / "solo_rates.xlsx", {"RATES": RATES_ROWS})


@pytest.fixture
def full_config(full_workbook) -> AppConfig:
    return make_config(full_workbook)
