# conftest.py: shared fixtures. A throwaway SQLite database per test, seeded
# with the EAST/WEST inventory scenario, plus an API client bound to it.

import datetime as dt
import logging

import pytest
from fastapi.testclient import TestClient

from restock import config
from restock.data.ledger import HistoryLedger
from restock.data.schema import init_schema, make_engine
from restock.data.snapshots import SnapshotQueryService
from restock.data.store import InventoryStore


def inventory_row(market, day, **overrides):
    """One inventory_data row (physical column names) for January 2025."""
    row = {
        "date": dt.date(2025, 1, day),
        "marketid": market,
        "custno": "C100",
        "company": "Acme Supply",
        "item": f"ITM-{market}-{day}",
        "status": "Active",
        "itmdesc": "Nitrile gloves, case",
        "in_stock": 12,
        "in_transit": 3,
        "total_stock": 15,
        "cost": 4.25,
        "allocations": 2,
        "w1": 4,
        "w2": 5,
        "w3": 6,
        "days_30": 20,
        "overnight": 1,
        "to_order_cost_overnight": 30.5,
        "two_day_ship": 2,
        "to_order_cost_2day": 18.0,
        "ground": 5,
        "to_order_cost_ground": 9.75,
        "recommended_quantity": "10",
        "recommended_shipping": "GROUND",
    }
    row.update(overrides)
    return row


SCENARIO_ROWS = [
    inventory_row("EAST", 7),
    inventory_row("EAST", 5, in_stock=None, recommended_shipping=None),
    inventory_row("WEST", 6),
    inventory_row("EAST", 6, cost=None, itmdesc=None),
    inventory_row("WEST", 6, item="ITM-WEST-6b"),
]


class FixedClock:
    """Settable stand-in for the ledger's server clock."""

    def __init__(self, now=dt.datetime(2025, 3, 1, 12, 0, 0)):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def engine(tmp_path):
    eng = make_engine(f"sqlite:///{tmp_path / 'restock_test.db'}")
    init_schema(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def store(engine):
    return InventoryStore(engine)


@pytest.fixture
def seeded_store(store):
    store.insert_rows(SCENARIO_ROWS)
    return store


@pytest.fixture
def service(seeded_store):
    return SnapshotQueryService(seeded_store)


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def ledger(engine, clock):
    return HistoryLedger(engine, clock=clock)


@pytest.fixture
def client(engine, seeded_store, tmp_path, monkeypatch):
    monkeypatch.setattr(config, "EXPORTS_FOLDER", tmp_path / "exports")
    monkeypatch.setattr(config, "LOGS_FOLDER", None)
    from restock.main import create_app

    with TestClient(create_app(engine)) as c:
        yield c


@pytest.fixture(autouse=True)
def _reset_restock_logger():
    # setup_logging binds sys.stdout once; drop handlers so the next test's capture is used
    yield
    logger = logging.getLogger("restock")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
