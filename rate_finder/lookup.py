"""
Lookup over parsed rate records.

Choice lists are built from the records themselves, so a value picked from
them always matches a stored record exactly; no normalization happens at
query time.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from rate_finder.models import RateRecord, SearchResult
from rate_finder.normalize import sort_key


MSG_INCOMPLETE = "Selecciona POL y POD para buscar."
MSG_NO_MATCHES = "No se encontraron tarifas para esa combinación."


def unique_sorted(values: Iterable[str]) -> list[str]:
    return sorted({v for v in values if v}, key=sort_key)


def build_index(records: Sequence[RateRecord]) -> tuple[list[str], list[str]]:
    """Return (origins, destinations) as sorted, de-duplicated lists."""
    origins = unique_sorted(r.origin for r in records)
    destinations = unique_sorted(r.destination for r in records)
    return origins, destinations


def query(records: Sequence[RateRecord], origin: str, destination: str) -> list[RateRecord]:
    origin = (origin or "").strip()
    destination = (destination or "").strip()
    if not origin or not destination:
        return []
    return [r for r in records if r.origin == origin and r.destination == destination]


def search(records: Sequence[RateRecord], origin: str, destination: str) -> SearchResult:
    origin = (origin or "").strip()
    destination = (destination or "").strip()

    if not origin or not destination:
        return SearchResult(status="incomplete", origin=origin, destination=destination, message=MSG_INCOMPLETE)

    matches = query(records, origin, destination)
    if not matches:
        return SearchResult(status="no_matches", origin=origin, destination=destination, message=MSG_NO_MATCHES)

    return SearchResult(
        status="ok",
        origin=origin,
        destination=destination,
        rates=tuple(matches),
        message=f"Mostrando resultados para: {origin} → {destination}",
    )
