from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from rate_finder.fields import RATE_FIELDS, FieldSpec
from rate_finder.headers import find_alias, resolve_column
from rate_finder.models import RateRecord
from rate_finder.normalize import clean_cell


ColumnPlan = dict[str, tuple[int | None, ...]]


def _plan_field(header_map: Mapping[str, int], field_spec: FieldSpec) -> tuple[int | None, ...]:
    # Exact aliases of every family outrank any family's substring fallback.
    exact = tuple(find_alias(header_map, fam.aliases) for fam in field_spec.families)
    if any(idx is not None for idx in exact):
        return exact
    return tuple(resolve_column(header_map, (), fam.fallback_tokens) for fam in field_spec.families)


def plan_columns(header_map: Mapping[str, int], fields: Sequence[FieldSpec] = RATE_FIELDS) -> ColumnPlan:
    """Resolve every alias family of every field against one header row."""
    return {field_spec.name: _plan_field(header_map, field_spec) for field_spec in fields}


def _cell(row: Sequence[object], idx: int | None) -> str:
    if idx is None or idx >= len(row):
        return ""
    return clean_cell(row[idx])


def _first_filled(row: Sequence[object], columns: tuple[int | None, ...]) -> str:
    for idx in columns:
        value = _cell(row, idx)
        if value:
            return value
    return ""


def project_rows(
    rows: Iterable[Sequence[object]],
    header_map: Mapping[str, int],
    fields: Sequence[FieldSpec] = RATE_FIELDS,
) -> list[RateRecord]:
    """
    Turn raw data rows into RateRecords.

    Rows with neither origin nor destination are dropped. Everything else is
    kept in sheet order, duplicates included.
    """
    plan = plan_columns(header_map, fields)
    records: list[RateRecord] = []
    for row in rows:
        row = row or ()
        values = {name: _first_filled(row, columns) for name, columns in plan.items()}
        if not (values.get("origin") or values.get("destination")):
            continue
        records.append(RateRecord(**values))
    return records
