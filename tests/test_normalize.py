import datetime as dt
from decimal import Decimal

import numpy as np
import pytest

from restock.data.columns import HEADER_CONTRACT, INVENTORY_COLUMNS, SourceKind
from restock.data.normalize import coerce_cost, coerce_int, coerce_text, project


def relational_row(**overrides):
    row = {spec.relational: None for spec in INVENTORY_COLUMNS}
    row.update({
        "id": 17,
        "date": dt.date(2025, 1, 5),
        "marketid": "EAST",
        "custno": "1001",
        "company": "Acme Supply",
        "item": "ITM-1",
        "status": "Active",
        "itmdesc": "Gloves",
        "in_stock": None,
        "in_transit": 3,
        "total_stock": 15,
        "cost": Decimal("12.50"),
        "days_30": 20,
        "two_day_ship": 2,
        "to_order_cost_2day": Decimal("18.00"),
        "recommended_quantity": "12",
        "recommended_shipping": "GROUND",
    })
    row.update(overrides)
    return row


def file_row(**overrides):
    # What pandas hands back for the same record: inferred numbers, NaN for
    # blanks, display headers with stray whitespace and a legacy spelling.
    row = {
        "Date": "01/05/2025",
        " Marketid ": "EAST",
        "custno": np.int64(1001),
        "company": "Acme Supply",
        "Item": "ITM-1",
        "Status": "Active",
        "Itmdesc": "Gloves",
        "In_Stock": float("nan"),
        "In_Transit": np.int64(3),
        "Total _Stock": np.int64(15),
        "cost": np.float64(12.5),
        "30_days": np.int64(20),
        "2_DAY_SHIP": np.int64(2),
        "To_Order_Cost_2DAY": np.int64(18),
        "Recommended Quntitty": np.float64(12.0),
        "Recommended Shipping": "GROUND",
        "Unexpected Extra": "ignored",
    }
    row.update(overrides)
    return row


def test_header_contract_has_24_columns_in_fixed_order():
    assert len(HEADER_CONTRACT) == 24
    assert HEADER_CONTRACT[:3] == ["Date", "Marketid", "custno"]
    assert HEADER_CONTRACT[-2:] == ["Recommended Quntitty", "Recommended Shipping"]
    assert len(set(HEADER_CONTRACT)) == 24


def test_both_sources_project_identically():
    a = project(relational_row(), SourceKind.RELATIONAL)
    b = project(file_row(), SourceKind.DELIMITED_FILE)
    assert a == b
    assert list(a) == list(b) == HEADER_CONTRACT
    assert repr(a) == repr(b)


def test_null_quantity_projects_to_zero_either_way():
    a = project(relational_row(in_stock=None), SourceKind.RELATIONAL)
    b = project(file_row(In_Stock=None), SourceKind.DELIMITED_FILE)
    assert a["In_Stock"] == b["In_Stock"] == 0


def test_costs_leave_as_floats():
    rec = project(relational_row(), SourceKind.RELATIONAL)
    assert rec["cost"] == 12.5
    assert type(rec["cost"]) is float
    assert type(rec["To_Order_Cost_2DAY"]) is float
    assert rec["To_Order_Cost_GROUND"] == 0.0


def test_missing_fields_take_defaults():
    rec = project({"marketid": "WEST"}, SourceKind.RELATIONAL)
    assert list(rec) == HEADER_CONTRACT
    assert rec["Marketid"] == "WEST"
    assert rec["Date"] == ""
    assert rec["Itmdesc"] == ""
    assert rec["W1"] == 0
    assert rec["cost"] == 0.0
    assert rec["Recommended Quntitty"] == ""


def test_relational_source_does_not_read_display_headers():
    rec = project({"In_Stock": 9}, SourceKind.RELATIONAL)
    assert rec["In_Stock"] == 0


def test_date_shapes_all_render_us():
    for value in [dt.date(2025, 1, 5), dt.datetime(2025, 1, 5, 13, 0), "2025-01-05",
                  "05-01-2025", "2025-01-05 00:00:00"]:
        rec = project({"date": value}, SourceKind.RELATIONAL)
        assert rec["Date"] == "01/05/2025"


@pytest.mark.parametrize("value,expected", [
    (None, 0), (float("nan"), 0), ("1,200", 1200), ("abc", 0), (np.int64(7), 7), (7.0, 7),
    (Decimal("3"), 3), (float("inf"), 0),
])
def test_coerce_int(value, expected):
    assert coerce_int(value) == expected


@pytest.mark.parametrize("value,expected", [
    (None, 0.0), ("$1,234.50", 1234.5), (Decimal("2.25"), 2.25), ("n/a", 0.0), (np.float64("nan"), 0.0),
])
def test_coerce_cost(value, expected):
    assert coerce_cost(value) == expected


@pytest.mark.parametrize("value,expected", [
    (None, ""), (float("nan"), ""), (12.0, "12"), (12.5, "12.5"), (np.int64(101), "101"), ("x", "x"),
])
def test_coerce_text(value, expected):
    assert coerce_text(value) == expected
