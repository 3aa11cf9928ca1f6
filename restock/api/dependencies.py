"""
FastAPI dependencies — service singletons, paging helpers.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from fastapi import HTTPException
from sqlalchemy.engine import Engine

from restock.config import DEFAULT_PAGE_SIZE
from restock.data.ledger import HistoryLedger
from restock.data.pagination import clamp_page, page_count, paginate
from restock.data.snapshots import SnapshotQueryService
from restock.data.store import InventoryStore


@dataclass
class Services:
    engine: Engine
    store: InventoryStore
    snapshots: SnapshotQueryService
    ledger: HistoryLedger

    @classmethod
    def from_engine(cls, engine: Engine) -> "Services":
        store = InventoryStore(engine)
        return cls(
            engine=engine,
            store=store,
            snapshots=SnapshotQueryService(store),
            ledger=HistoryLedger(engine),
        )


# ---------------------------------------------------------------------------
# Global singleton (set during startup)
# ---------------------------------------------------------------------------
_services: Services | None = None


def set_services(services: Services | None) -> None:
    global _services
    _services = services


def get_services() -> Services:
    if _services is None:
        raise HTTPException(503, "Server not initialized yet")
    return _services


# ---------------------------------------------------------------------------
# Paging
# ---------------------------------------------------------------------------

def page_rows(rows: Sequence[Any], page: int | None, page_size: int | None) -> tuple[list, dict]:
    """Slice rows when the client asked for a page; otherwise return them all.

    The requested page is clamped into range here, before slicing.
    """
    if page is None:
        return list(rows), {}
    size = page_size or DEFAULT_PAGE_SIZE
    number = clamp_page(page, page_count(len(rows), size))
    result = paginate(rows, size, number)
    return result.rows, result.summary()
