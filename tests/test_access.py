from restock.data.access import filter_rows, is_unrestricted

ROWS = [
    {"Marketid": "WEST", "Item": "a"},
    {"Marketid": "west", "Item": "b"},
    {"Marketid": "EAST", "Item": "c"},
    {"Marketid": "WESTERN", "Item": "d"},
    {"Marketid": "WEST", "Item": "e"},
]


def test_admin_is_identity():
    assert filter_rows(ROWS, "admin") == ROWS
    assert filter_rows([], "admin") == []


def test_market_role_is_exact_and_case_sensitive():
    visible = filter_rows(ROWS, "WEST")
    assert [r["Item"] for r in visible] == ["a", "e"]
    assert all(r["Marketid"] == "WEST" for r in visible)


def test_unknown_role_sees_nothing():
    assert filter_rows(ROWS, "NORTH") == []


def test_custom_field():
    events = [{"market_id": "EAST"}, {"market_id": "WEST"}]
    assert filter_rows(events, "EAST", field="market_id") == [{"market_id": "EAST"}]


def test_history_treats_blank_role_as_unrestricted():
    assert is_unrestricted("admin")
    assert is_unrestricted("")
    assert is_unrestricted("   ")
    assert is_unrestricted(None)
    assert not is_unrestricted("EAST")
