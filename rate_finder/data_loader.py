from __future__ import annotations

from dataclasses import dataclass
import io
from pathlib import Path

import pandas as pd
import requests

from rate_finder.config import is_url
from rate_finder.models import AuxiliaryRecord
from rate_finder.normalize import cell_text


def read_source(source: str, *, timeout: float = 30.0) -> bytes:
    if is_url(source):
        try:
            resp = requests.get(source, timeout=timeout, headers={"Cache-Control": "no-store"})
            resp.raise_for_status()
        except requests.RequestException as e:
            raise FileNotFoundError(f"No se pudo cargar el archivo: {source} ({e})") from e
        return resp.content

    path = Path(source)
    if not path.is_file():
        raise FileNotFoundError(f"No se pudo cargar el archivo: {source}")
    return path.read_bytes()


def source_mtime(source: str) -> float | None:
    if is_url(source):
        return None
    path = Path(source)
    return path.stat().st_mtime if path.exists() else None


@dataclass(frozen=True)
class Workbook:
    """Decoded workbook; sheets are read on demand."""
    source: str
    excel: pd.ExcelFile

    @property
    def sheet_names(self) -> list[str]:
        return [str(name) for name in self.excel.sheet_names]

    def has_sheet(self, name: str) -> bool:
        return name in self.sheet_names

    def matrix(self, sheet_name: str) -> list[list[str]]:
        # na_filter=False keeps literal "N/A" / "NA" cells as text
        df = pd.read_excel(self.excel, sheet_name=sheet_name, header=None, dtype=object, na_filter=False)
        return [[cell_text(v) for v in row] for row in df.itertuples(index=False, name=None)]

    def records(self, sheet_name: str) -> list[AuxiliaryRecord]:
        df = pd.read_excel(self.excel, sheet_name=sheet_name, dtype=object, na_filter=False)
        columns = [str(c) for c in df.columns]
        return [
            AuxiliaryRecord({col: cell_text(v) for col, v in zip(columns, row)})
            for row in df.itertuples(index=False, name=None)
        ]


def open_workbook(source: str, *, timeout: float = 30.0) -> Workbook:
    data = read_source(source, timeout=timeout)
    try:
        excel = pd.ExcelFile(io.BytesIO(data))
    except Exception as e:
        raise ValueError(f"No se pudo leer el libro Excel {source}: {e}") from e
    return Workbook(source=source, excel=excel)
