from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from rate_finder.fields import DESTINATION_SYNONYMS, ORIGIN_SYNONYMS
from rate_finder.normalize import normalize_key


DEFAULT_MAX_SCAN = 25

_ORIGIN_KEYS = frozenset(normalize_key(s) for s in ORIGIN_SYNONYMS)
_DESTINATION_KEYS = frozenset(normalize_key(s) for s in DESTINATION_SYNONYMS)


def is_header_row(row: Sequence[object] | None) -> bool:
    keys = {normalize_key(cell) for cell in (row or [])}
    return bool(keys & _ORIGIN_KEYS and keys & _DESTINATION_KEYS)


def locate_header_row(matrix: Sequence[Sequence[object]], max_scan: int = DEFAULT_MAX_SCAN) -> int:
    """
    Find the header row of a sheet that may carry title/logo rows on top.

    A row is the header when it holds both an origin-port and a
    destination-port column name. Falls back to row 0 when nothing within
    the scan window qualifies.
    """
    limit = min(max_scan, len(matrix))
    for i in range(limit):
        if is_header_row(matrix[i]):
            return i
    return 0


def build_header_map(header_row: Iterable[object]) -> dict[str, int]:
    header_map: dict[str, int] = {}
    for idx, cell in enumerate(header_row):
        key = normalize_key(cell)
        if key:
            header_map[key] = idx  # last column wins on duplicate headers
    return header_map


def find_alias(header_map: Mapping[str, int], aliases: Iterable[str]) -> int | None:
    for alias in aliases:
        idx = header_map.get(normalize_key(alias))
        if idx is not None:
            return idx
    return None


def find_column_containing(header_map: Mapping[str, int], tokens: Iterable[str]) -> int | None:
    wanted = [normalize_key(t) for t in tokens]
    for key, idx in header_map.items():
        if all(t in key for t in wanted):
            return idx
    return None


def resolve_column(
    header_map: Mapping[str, int],
    aliases: Iterable[str],
    fallback_tokens: Sequence[str] = (),
) -> int | None:
    """
    Locate the column of one logical field in a header map.

    Exact aliases are tried first, in declared order. Only when none of them
    is a header does the substring fallback run: the first header (in column
    order) containing every fallback token wins.

    Args:
        header_map: Normalized header text -> column index
        aliases: Known header texts for the field
        fallback_tokens: Substrings that must all appear in a decorated header

    Returns:
        Column index, or None when the sheet has no such column
    """
    idx = find_alias(header_map, aliases)
    if idx is not None:
        return idx

    if fallback_tokens:
        return find_column_containing(header_map, fallback_tokens)

    return None
