"""
Tests for projecting raw rows into RateRecords.
"""

from rate_finder.headers import build_header_map
from rate_finder.projector import plan_columns, project_rows


HEADERS = ["POL", "POD", "NOR", "20GP", "40HC", "Validez", "Dias libres", "Naviera", "Agente"]


def test_projects_all_fields_and_trims():
    header_map = build_header_map(HEADERS)
    rows = [[" Callao ", "Rotterdam ", "", "800", "1200", "31-03", "21", " MSC", "Agente B"]]

    [record] = project_rows(rows, header_map)

    assert record.origin == "Callao"
    assert record.destination == "Rotterdam"
    assert record.rate_20 == "800"
    assert record.rate_40 == "1200"
    assert record.validity == "31-03"
    assert record.free_days == "21"
    assert record.carrier == "MSC"
    assert record.agent == "Agente B"
    assert record.nor == ""
    assert record.nor_display == "N/A"


def test_drops_rows_without_origin_and_destination():
    header_map = build_header_map(HEADERS)
    rows = [
        ["", "", "", "100", "200", "", "", "Orphan", ""],
        ["Callao", "", "", "", "", "", "", "", ""],
        ["", "Hamburg", "", "", "", "", "", "", ""],
    ]

    records = project_rows(rows, header_map)

    assert [(r.origin, r.destination) for r in records] == [("Callao", ""), ("", "Hamburg")]


def test_keeps_duplicate_routes_in_order():
    header_map = build_header_map(HEADERS)
    rows = [
        ["Callao", "Rotterdam", "", "800", "1200", "", "", "MSC", ""],
        ["Callao", "Rotterdam", "", "850", "1250", "", "", "Hapag", ""],
    ]

    records = project_rows(rows, header_map)

    assert [r.carrier for r in records] == ["MSC", "Hapag"]


def test_missing_columns_and_short_rows_give_empty_values():
    header_map = build_header_map(["POL", "POD", "Naviera"])
    records = project_rows([["Callao", "Rotterdam"]], header_map)

    assert records[0].carrier == ""
    assert records[0].rate_40 == ""
    assert records[0].agent == ""


def test_decorated_40hq_header_resolves_by_tokens():
    header_map = build_header_map(["POL", "POD", "40HQ ALL IN"])
    [record] = project_rows([["Callao", "Rotterdam", "1200"]], header_map)
    assert record.rate_40 == "1200"


def test_empty_hc_column_falls_through_to_hq():
    header_map = build_header_map(["POL", "POD", "40HC", "40HQ"])
    rows = [
        ["Callao", "Rotterdam", "", "1200"],
        ["Callao", "Hamburg", "1300", "9999"],
    ]

    records = project_rows(rows, header_map)

    assert [r.rate_40 for r in records] == ["1200", "1300"]


def test_exact_alias_wins_even_when_its_cell_is_blank():
    # "20GP" matches exactly, so the decorated "20 GP ALL IN" column is never consulted.
    header_map = build_header_map(["POL", "POD", "20GP", "20 GP ALL IN"])
    [record] = project_rows([["Callao", "Rotterdam", "", "750"]], header_map)
    assert record.rate_20 == ""


def test_plan_lists_one_column_per_family():
    header_map = build_header_map(["POL", "POD", "40HQ"])
    plan = plan_columns(header_map)

    assert plan["origin"] == (0,)
    assert plan["destination"] == (1,)
    assert plan["rate_40"] == (None, 2)
    assert plan["carrier"] == (None,)


def test_exact_hq_beats_hc_tokens_in_a_charge_header():
    # "THC 40" holds both "40" and "hc" but is a terminal handling charge.
    header_map = build_header_map(["POL", "POD", "40HQ", "THC 40"])
    [record] = project_rows([["Callao", "Rotterdam", "1200", "95"]], header_map)

    assert record.rate_40 == "1200"
    assert plan_columns(header_map)["rate_40"] == (None, 2)


def test_exact_hq_beats_decorated_hc_header():
    header_map = build_header_map(["POL", "POD", "40 HC ALL IN", "40HQ"])
    [record] = project_rows([["Callao", "Rotterdam", "9999", "1200"]], header_map)
    assert record.rate_40 == "1200"


def test_exact_hc_beats_decorated_hq_header():
    header_map = build_header_map(["POL", "POD", "40HC", "40HQ ALL IN"])
    rows = [
        ["Callao", "Rotterdam", "1300", "9999"],
        ["Callao", "Hamburg", "", "9999"],
    ]

    records = project_rows(rows, header_map)

    assert [r.rate_40 for r in records] == ["1300", ""]
    assert plan_columns(header_map)["rate_40"] == (2, None)


def test_decorated_headers_fall_back_hc_before_hq():
    header_map = build_header_map(["POL", "POD", "40HQ ALL IN", "40 HC (USD)"])
    rows = [
        ["Callao", "Rotterdam", "1200", "1300"],
        ["Callao", "Hamburg", "1200", ""],
    ]

    records = project_rows(rows, header_map)

    assert plan_columns(header_map)["rate_40"] == (3, 2)
    assert [r.rate_40 for r in records] == ["1300", "1200"]
