"""
Data models for the rate finder.

RateRecord is the fixed-schema unit parsed from the rate sheet.
AuxiliaryRecord is the loose column -> value row of the secondary sheets,
whose headers are not fixed. RateCatalog bundles everything one load
produced; a reload builds a new catalog instead of mutating this one.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Literal


NOR_PLACEHOLDER = "N/A"

DISPLAY_COLUMNS = ("POL", "POD", "NOR", "20GP", "40HC", "Validez", "Dias libres", "Naviera", "Agente")


@dataclass(frozen=True)
class RateRecord:
    """One rate offer. Duplicate routes are distinct carrier/agent offers."""
    origin: str = ""
    destination: str = ""
    nor: str = ""
    rate_20: str = ""
    rate_40: str = ""
    validity: str = ""
    free_days: str = ""
    carrier: str = ""
    agent: str = ""

    @property
    def nor_display(self) -> str:
        return self.nor or NOR_PLACEHOLDER

    def to_display_row(self) -> dict[str, str]:
        return dict(
            zip(
                DISPLAY_COLUMNS,
                (
                    self.origin,
                    self.destination,
                    self.nor_display,
                    self.rate_20,
                    self.rate_40,
                    self.validity,
                    self.free_days,
                    self.carrier,
                    self.agent,
                ),
                strict=True,
            )
        )


@dataclass(frozen=True)
class AuxiliaryRecord(Mapping[str, str]):
    """Read-only row of a sheet with no fixed schema."""
    cells: dict[str, str] = field(default_factory=dict)

    def __getitem__(self, key: str) -> str:
        return self.cells[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def pick(self, names: tuple[str, ...] | list[str]) -> str:
        """Value of the first column name present in this row, else ""."""
        for name in names:
            if name in self.cells:
                return self.cells[name]
        return ""


@dataclass(frozen=True)
class LocalCharge:
    concept: str
    detail: str
    calculation: str
    tax: str

    def to_display_row(self) -> dict[str, str]:
        return {"Concepto": self.concept, "Detalle": self.detail, "Cálculo": self.calculation, "IVA": self.tax}


@dataclass(frozen=True)
class SearchResult:
    """Outcome of a POL/POD search as shown to the user."""
    status: Literal["ok", "no_matches", "incomplete"]
    origin: str
    destination: str
    rates: tuple[RateRecord, ...] = ()
    message: str = ""

    @property
    def found(self) -> bool:
        return self.status == "ok"


@dataclass(frozen=True)
class RateCatalog:
    """
    Everything produced by one workbook load.

    Attributes:
        source: Path or URL the workbook was read from
        sheet_names: Sheets present in the workbook
        header_row: Index of the located header row in the rate sheet
        raw_headers: Header cells as written in the sheet
        header_map: Normalized header -> column index
        column_plan: Field name -> resolved column per alias family
        rates: Parsed rate records, in sheet order
        origins / destinations: Sorted unique choice lists
        local_charges: Normalized local-charge rows
        remarks: Flattened remark lines
        warnings: Degradations noticed while loading
    """
    source: str
    sheet_names: tuple[str, ...] = ()
    header_row: int = 0
    raw_headers: tuple[str, ...] = ()
    header_map: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    column_plan: Mapping[str, tuple[int | None, ...]] = field(default_factory=lambda: MappingProxyType({}))
    rates: tuple[RateRecord, ...] = ()
    origins: tuple[str, ...] = ()
    destinations: tuple[str, ...] = ()
    local_charges: tuple[LocalCharge, ...] = ()
    remarks: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    loaded_at: datetime = field(default_factory=datetime.now)
