"""
Tests for header-row detection and alias resolution.
"""

from rate_finder.headers import build_header_map, find_column_containing, locate_header_row, resolve_column


# ============================================================================
# HEADER ROW
# ============================================================================

def test_header_below_decorative_rows():
    matrix = [
        ["ACME LOGISTICS", "", "", ""],
        ["Tarifas Q1", "", "", ""],
        ["", "", "", ""],
        ["", "POL", "POD", "NOR"],
        ["", "Callao", "Rotterdam", ""],
    ]
    assert locate_header_row(matrix) == 3


def test_header_synonyms_in_spanish():
    matrix = [
        ["Logo"],
        ["Puerto de Embarque", "Puerto  Destino", "Naviera"],
    ]
    assert locate_header_row(matrix) == 1


def test_needs_both_origin_and_destination():
    matrix = [
        ["POL", "Naviera"],
        ["Destino", "Agente"],
    ]
    assert locate_header_row(matrix) == 0


def test_no_header_falls_back_to_first_row():
    matrix = [["a", "b"], ["c", "d"]]
    assert locate_header_row(matrix) == 0


def test_header_outside_scan_window_is_not_found():
    matrix = [["title"]] * 5 + [["POL", "POD"]]
    assert locate_header_row(matrix, max_scan=5) == 0
    assert locate_header_row(matrix, max_scan=6) == 5


def test_empty_matrix():
    assert locate_header_row([]) == 0


# ============================================================================
# HEADER MAP
# ============================================================================

def test_header_map_skips_blank_and_last_duplicate_wins():
    header_map = build_header_map(["POL", "", "POD", "  ", "pol"])
    assert header_map == {"pol": 4, "pod": 2}
    assert list(header_map) == ["pol", "pod"]


# ============================================================================
# ALIAS RESOLUTION
# ============================================================================

def test_exact_alias_wins_over_fallback():
    header_map = {"40hq all in": 2, "40hc": 4}
    assert resolve_column(header_map, ["40HC", "40HQ"], ["40", "hq"]) == 4


def test_substring_fallback():
    header_map = {"40hq all in": 5}
    assert resolve_column(header_map, ["40HC", "40HQ"], ["40", "hq"]) == 5


def test_alias_order_is_respected():
    header_map = {"carrier": 1, "naviera": 3}
    assert resolve_column(header_map, ["NAVIERA", "CARRIER"]) == 3


def test_fallback_tokens_are_order_independent():
    header_map = {"hc 40 usd": 7}
    assert find_column_containing(header_map, ["40", "hc"]) == 7


def test_fallback_uses_first_header_in_column_order():
    header_map = build_header_map(["40 HQ BASE", "40 HQ ALL IN"])
    assert resolve_column(header_map, [], ["40", "hq"]) == 0


def test_unresolved_column_is_none():
    header_map = {"pol": 0, "pod": 1}
    assert resolve_column(header_map, ["NAVIERA"], ["naviera"]) is None
    assert resolve_column(header_map, ["NAVIERA"]) is None
