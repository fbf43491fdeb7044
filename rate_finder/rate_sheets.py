from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from rate_finder.auxiliary import flatten_remarks, normalize_local_charges
from rate_finder.config import AppConfig
from rate_finder.data_loader import Workbook, open_workbook
from rate_finder.fields import RATE_FIELDS
from rate_finder.headers import DEFAULT_MAX_SCAN, build_header_map, is_header_row, locate_header_row
from rate_finder.lookup import build_index
from rate_finder.models import RateCatalog, RateRecord
from rate_finder.projector import plan_columns, project_rows


@dataclass(frozen=True)
class ParsedRateSheet:
    header_row: int = 0
    raw_headers: tuple[str, ...] = ()
    header_map: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    column_plan: Mapping[str, tuple[int | None, ...]] = field(default_factory=lambda: MappingProxyType({}))
    rates: tuple[RateRecord, ...] = ()
    warnings: tuple[str, ...] = ()


def _log(message: str) -> None:
    print(f"[RateFinder] {message}")


def parse_rate_matrix(
    matrix: list[list[str]],
    *,
    sheet_name: str = "RATES",
    max_scan: int = DEFAULT_MAX_SCAN,
    debug: bool = False,
) -> ParsedRateSheet:
    warnings: list[str] = []

    if len(matrix) < 2:
        warnings.append(f'La hoja "{sheet_name}" está vacía o no tiene filas de datos.')
        return ParsedRateSheet(warnings=tuple(warnings))

    header_row = locate_header_row(matrix, max_scan=max_scan)
    if not is_header_row(matrix[header_row]):
        warnings.append(
            f'No se encontró la fila de encabezados (POL/POD) en las primeras {max_scan} filas de "{sheet_name}"; '
            "se usa la primera fila."
        )

    raw_headers = tuple(str(h).strip() for h in matrix[header_row])
    header_map = build_header_map(raw_headers)
    column_plan = plan_columns(header_map, RATE_FIELDS)
    rates = project_rows(matrix[header_row + 1 :], header_map, RATE_FIELDS)

    if debug:
        _log(f"HeaderRowIdx: {header_row}")
        _log(f"Raw headers: {list(raw_headers)}")
        _log(f"Header map: {header_map}")
        _log(f"Column plan: {column_plan}")
        _log(f"Parsed sample (first 10): {rates[:10]}")

    if rates and not any(r.rate_40 for r in rates):
        candidates = [k for k in header_map if "40" in k]
        warnings.append(f"No se detectó 40HC/HQ. Encabezados que contienen '40': {candidates}")

    return ParsedRateSheet(
        header_row=header_row,
        raw_headers=raw_headers,
        header_map=MappingProxyType(header_map),
        column_plan=MappingProxyType(column_plan),
        rates=tuple(rates),
        warnings=tuple(warnings),
    )


def build_catalog(workbook: Workbook, *, config: AppConfig) -> RateCatalog:
    wb_config = config.workbook
    sheet_names = workbook.sheet_names
    _log(f"Sheets: {sheet_names}")

    if not workbook.has_sheet(wb_config.rates_sheet):
        raise ValueError(
            f'No existe la hoja "{wb_config.rates_sheet}". Hojas disponibles: {", ".join(sheet_names)}'
        )

    matrix = workbook.matrix(wb_config.rates_sheet)
    _log(f"{wb_config.rates_sheet} raw rows: {len(matrix)}")
    parsed = parse_rate_matrix(
        matrix,
        sheet_name=wb_config.rates_sheet,
        max_scan=wb_config.header_scan_rows,
        debug=config.ui.debug,
    )
    warnings = list(parsed.warnings)
    _log(f"Parsed rates: {len(parsed.rates)}")

    local_charges = []
    if workbook.has_sheet(wb_config.local_charges_sheet):
        local_charges = normalize_local_charges(workbook.records(wb_config.local_charges_sheet))
        _log(f"Local charges rows: {len(local_charges)}")
    else:
        warnings.append(f'No existe la hoja "{wb_config.local_charges_sheet}" (opcional).')

    remarks = []
    if workbook.has_sheet(wb_config.remarks_sheet):
        remarks = flatten_remarks(workbook.records(wb_config.remarks_sheet))
        _log(f"Remarks lines: {len(remarks)}")
    else:
        warnings.append(f'No existe la hoja "{wb_config.remarks_sheet}".')

    for w in warnings:
        _log(f"WARNING: {w}")

    origins, destinations = build_index(parsed.rates)

    return RateCatalog(
        source=workbook.source,
        sheet_names=tuple(sheet_names),
        header_row=parsed.header_row,
        raw_headers=parsed.raw_headers,
        header_map=parsed.header_map,
        column_plan=parsed.column_plan,
        rates=parsed.rates,
        origins=tuple(origins),
        destinations=tuple(destinations),
        local_charges=tuple(local_charges),
        remarks=tuple(remarks),
        warnings=tuple(warnings),
    )


def load_rate_catalog(*, config: AppConfig) -> RateCatalog:
    """
    Fetch the workbook and build a fresh catalog.

    Raises:
        FileNotFoundError: the workbook cannot be fetched
        ValueError: the workbook cannot be decoded or lacks the rate sheet
    """
    source = config.workbook.source
    _log(f"Loading workbook: {source}")
    workbook = open_workbook(source, timeout=config.workbook.fetch_timeout)
    catalog = build_catalog(workbook, config=config)
    _log(f"Ready. Rates loaded: {len(catalog.rates)}")
    return catalog
