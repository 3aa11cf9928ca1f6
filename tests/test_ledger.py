import datetime as dt

import pytest
from pydantic import ValidationError
from sqlalchemy import text

from restock.data.dates import to_inclusive_window
from restock.data.ledger import ApprovalEvent, HistoryLedger
from restock.data.schema import ensure_comments_column, make_engine
from restock.errors import UpstreamUnavailable, WriteFailure

LEGACY_PAYLOAD = {
    "Marketid": "EAST",
    "company": "Acme Supply",
    "Itmdesc": "Nitrile gloves, case",
    "cost": 4.25,
    "Total_Stock": 15,
    "Original_Recommended_Qty": "10",
    "Order_Qty": 12,
    "Total_Cost": 51.0,
    "Recommended_Shipping": "GROUND",
    "Approved_By": "east_user",
}


def event(**overrides):
    data = dict(LEGACY_PAYLOAD)
    data.update(overrides)
    return ApprovalEvent(**data)


def test_legacy_payload_keys_map_to_canonical_fields():
    e = event()
    assert e.market_id == "EAST"
    assert e.item_description == "Nitrile gloves, case"
    assert e.original_recommended_qty == "10"
    assert e.comments == ""
    assert e.approved_at is None


def test_null_optional_fields_default():
    e = ApprovalEvent(market_id="EAST", approved_by="x", Comments=None, cost=None, company=None)
    assert e.comments == ""
    assert e.unit_cost == 0.0
    assert e.company == ""


def test_numeric_market_and_approver_become_text():
    event = ApprovalEvent.model_validate({"Marketid": 101, "Approved_By": 7, "Order_Qty": 3})
    assert event.market_id == "101"
    assert event.approved_by == "7"


def test_market_and_approver_may_not_be_null():
    with pytest.raises(ValidationError):
        ApprovalEvent.model_validate({"Marketid": None, "Approved_By": "admin"})


def test_record_then_query_returns_the_event_once(ledger, clock):
    ack = ledger.record(event(Comments="rush it"))
    assert ack.approved_at == clock.now

    events = ledger.query(to_inclusive_window("2025-03-01", "2025-03-01"), "admin")
    assert len(events) == 1
    got = events[0]
    assert got.market_id == "EAST"
    assert got.total_stock == 15
    assert got.original_recommended_qty == "10"
    assert got.recommended_shipping == "GROUND"
    assert got.approved_by == "east_user"
    assert got.comments == "rush it"
    assert got.approved_at == clock.now
    assert list(got.model_dump()) == [
        "market_id", "company", "item_description", "unit_cost", "total_stock",
        "original_recommended_qty", "order_qty", "total_cost", "recommended_shipping",
        "approved_by", "comments", "approved_at",
    ]


def test_client_supplied_timestamp_is_ignored(ledger, clock):
    ack = ledger.record(event(approved_at="2001-01-01T00:00:00"))
    assert ack.approved_at == clock.now
    assert ack.event.approved_at == clock.now


def test_physical_column_names_are_preserved(ledger, engine):
    ledger.record(event())
    with engine.connect() as conn:
        row = conn.execute(text(
            'SELECT "Total_Stock", "Original_Recomr", "Order_Qty", "Total_Cost", '
            '"Recommended_", "Approved_By", itmdesc FROM history_data'
        )).one()
    assert tuple(row) == (15, "10", 12, 51.0, "GROUND", "east_user", "Nitrile gloves, case")


def test_end_of_day_boundary(ledger, clock):
    clock.now = dt.datetime(2025, 3, 1, 23, 59, 59)
    ledger.record(event(Order_Qty=1))
    clock.now = dt.datetime(2025, 3, 2, 0, 0, 0)
    ledger.record(event(Order_Qty=2))
    clock.now = dt.datetime(2025, 3, 1, 0, 0, 0)
    ledger.record(event(Order_Qty=3))

    day = ledger.query(to_inclusive_window("2025-03-01", "2025-03-01"), "")
    assert [e.order_qty for e in day] == [1, 3]


def test_query_is_most_recent_first(ledger, clock):
    for hour, qty in [(9, 1), (15, 2), (11, 3)]:
        clock.now = dt.datetime(2025, 3, 1, hour)
        ledger.record(event(Order_Qty=qty))
    events = ledger.query(to_inclusive_window("2025-03-01", "2025-03-31"), "admin")
    assert [e.order_qty for e in events] == [2, 3, 1]


def test_query_filters_by_market_exactly(ledger):
    ledger.record(event(Marketid="EAST"))
    ledger.record(event(Marketid="WEST"))
    ledger.record(event(Marketid="east"))
    window = to_inclusive_window("2025-03-01", "2025-03-01")

    assert [e.market_id for e in ledger.query(window, "WEST")] == ["WEST"]
    assert [e.market_id for e in ledger.query(window, "EAST")] == ["EAST"]
    assert len(ledger.query(window, "admin")) == 3
    assert len(ledger.query(window, None)) == 3


def test_query_outside_window_is_empty(ledger):
    ledger.record(event())
    assert ledger.query(to_inclusive_window("2025-04-01", "2025-04-30"), "admin") == []


def test_write_failure_surfaces(tmp_path, clock):
    bare = make_engine(f"sqlite:///{tmp_path / 'no_tables.db'}")
    with pytest.raises(WriteFailure):
        HistoryLedger(bare, clock=clock).record(event())


def test_read_failure_surfaces(tmp_path):
    bare = make_engine(f"sqlite:///{tmp_path / 'no_tables.db'}")
    with pytest.raises(UpstreamUnavailable):
        HistoryLedger(bare).query(to_inclusive_window("2025-03-01", "2025-03-01"), "admin")


def test_comments_column_migration(tmp_path):
    legacy = make_engine(f"sqlite:///{tmp_path / 'legacy.db'}")
    with legacy.begin() as conn:
        conn.execute(text(
            'CREATE TABLE history_data (id INTEGER PRIMARY KEY, marketid TEXT, company TEXT, '
            'itmdesc TEXT, cost NUMERIC, "Total_Stock" INTEGER, "Original_Recomr" TEXT, '
            '"Order_Qty" INTEGER, "Total_Cost" NUMERIC, "Recommended_" TEXT, '
            '"Approved_By" TEXT, approved_at TIMESTAMP)'
        ))
        conn.execute(text(
            "INSERT INTO history_data (marketid, approved_at, \"Approved_By\") "
            "VALUES ('EAST', '2025-03-01 08:00:00', 'old')"
        ))

    assert ensure_comments_column(legacy) is True
    assert ensure_comments_column(legacy) is False

    events = HistoryLedger(legacy).query(to_inclusive_window("2025-03-01", "2025-03-01"), "admin")
    assert len(events) == 1
    assert events[0].comments == ""
    assert events[0].approved_by == "old"
