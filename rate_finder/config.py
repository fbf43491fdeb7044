from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os
import tomllib

from dotenv import load_dotenv


@dataclass(frozen=True)
class WorkbookConfig:
    source: str
    rates_sheet: str
    local_charges_sheet: str
    remarks_sheet: str
    header_scan_rows: int
    fetch_timeout: float


@dataclass(frozen=True)
class UiConfig:
    title: str
    debug: bool


@dataclass(frozen=True)
class AppConfig:
    workbook: WorkbookConfig
    ui: UiConfig


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _resolve_source(source: str, base_dir: Path) -> str:
    if is_url(source):
        return source
    return str((base_dir / source).resolve())


def _as_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def load_app_config(config_path: Path) -> AppConfig:
    config_path = config_path.resolve()
    app_dir = config_path.parent

    env_path = app_dir / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    with config_path.open("rb") as f:
        raw = tomllib.load(f)

    workbook_raw = raw.get("workbook", {})
    ui_raw = raw.get("ui", {})

    source = os.getenv("RATE_FINDER_WORKBOOK") or str(workbook_raw.get("source", "data/tarifas.xlsx"))
    debug = os.getenv("RATE_FINDER_DEBUG")

    return AppConfig(
        workbook=WorkbookConfig(
            source=_resolve_source(source, app_dir),
            rates_sheet=str(workbook_raw.get("rates_sheet", "RATES")),
            local_charges_sheet=str(workbook_raw.get("local_charges_sheet", "GASTOS_LOCALES")),
            remarks_sheet=str(workbook_raw.get("remarks_sheet", "REMARKS")),
            header_scan_rows=int(workbook_raw.get("header_scan_rows", 25)),
            fetch_timeout=float(workbook_raw.get("fetch_timeout", 30.0)),
        ),
        ui=UiConfig(
            title=str(ui_raw.get("title", "Rate Finder")),
            debug=_as_bool(debug) if debug is not None else _as_bool(ui_raw.get("debug", False)),
        ),
    )
