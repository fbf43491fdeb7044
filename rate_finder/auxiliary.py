from __future__ import annotations

import unicodedata
from collections.abc import Iterable, Mapping, Sequence

from rate_finder.fields import CALCULATION_COLUMNS, CONCEPT_COLUMNS, DETAIL_COLUMNS, TAX_COLUMNS
from rate_finder.models import AuxiliaryRecord, LocalCharge
from rate_finder.normalize import clean_cell


TAX_APPLIES = "+ IVA"
TAX_NOT_APPLICABLE = "N/A"

_AFFIRMATIVE = {"si", "sí", "yes", "true", "1"}
_NEGATIVE = {"n/a", "na", "no", "false", "0"}


def tax_indicator(value: object) -> str:
    """
    Collapse a free-text VAT column into "+ IVA" / "N/A".

    Text that is neither a yes/no token nor mentions IVA is shown as written.
    """
    raw = clean_cell(value)
    low = unicodedata.normalize("NFC", raw).lower()

    if not low:
        return TAX_NOT_APPLICABLE
    if "+ iva" in low or low == "iva":
        return TAX_APPLIES
    if low in _AFFIRMATIVE:
        return TAX_APPLIES
    if low in _NEGATIVE:
        return TAX_NOT_APPLICABLE
    if "iva" in low:
        return TAX_APPLIES
    return raw


def normalize_local_charges(records: Iterable[AuxiliaryRecord]) -> list[LocalCharge]:
    charges: list[LocalCharge] = []
    for record in records:
        charge = LocalCharge(
            concept=clean_cell(record.pick(CONCEPT_COLUMNS)),
            detail=clean_cell(record.pick(DETAIL_COLUMNS)),
            calculation=clean_cell(record.pick(CALCULATION_COLUMNS)),
            tax=tax_indicator(record.pick(TAX_COLUMNS)),
        )
        if charge.concept or charge.detail or charge.calculation:
            charges.append(charge)
    return charges


def flatten_remarks(rows: Iterable[Mapping[str, object] | Sequence[object]]) -> list[str]:
    # Remarks sheets have no fixed columns; every filled cell is one line.
    lines: list[str] = []
    for row in rows:
        cells = row.values() if isinstance(row, Mapping) else row
        for cell in cells:
            text = clean_cell(cell)
            if text:
                lines.append(text)
    return lines
