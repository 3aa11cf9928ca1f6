"""
InventoryStore — parameterised reads (and seeding writes) against inventory_data.

Stateless apart from the engine: every call checks out its own connection,
so concurrent requests never share anything mutable here.
"""
from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Iterable, Mapping

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from restock.config import INVENTORY_TABLE
from restock.data.columns import INVENTORY_COLUMNS
from restock.data.dates import DateWindow, parse_flexible_date
from restock.data.normalize import InventoryRecord, is_null
from restock.data.schema import inventory_table
from restock.errors import UnknownDateFormat, UpstreamUnavailable

logger = logging.getLogger(__name__)

_RANGE_SQL = text(
    f"SELECT * FROM {INVENTORY_TABLE} "
    "WHERE date BETWEEN :start AND :end "
    "ORDER BY date ASC"
)
_MARKETS_SQL = text(
    f"SELECT DISTINCT marketid FROM {INVENTORY_TABLE} "
    "WHERE marketid IS NOT NULL ORDER BY marketid ASC"
)
_PING_SQL = text("SELECT CURRENT_TIMESTAMP")


class InventoryStore:
    """Inventory snapshot table access."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def fetch_inventory(self, window: DateWindow) -> list[dict[str, Any]]:
        """Raw rows (physical column names) dated inside the window, oldest first."""
        try:
            with self.engine.connect() as conn:
                result = conn.execute(
                    _RANGE_SQL, {"start": window.start_param, "end": window.end_param}
                )
                rows = [dict(r) for r in result.mappings()]
        except SQLAlchemyError as exc:
            logger.exception("Inventory range query failed for %s", window.label)
            raise UpstreamUnavailable("Failed to query database.") from exc
        logger.debug("Inventory %s: %d rows", window.label, len(rows))
        return rows

    def distinct_markets(self) -> list[str]:
        """Market ids present in inventory, nulls dropped, ascending."""
        try:
            with self.engine.connect() as conn:
                values = conn.execute(_MARKETS_SQL).scalars().all()
        except SQLAlchemyError as exc:
            logger.exception("Market listing failed")
            raise UpstreamUnavailable("Failed to fetch markets.") from exc
        return sorted({str(v) for v in values if v is not None})

    def ping(self):
        """Database server time; raises UpstreamUnavailable when unreachable."""
        try:
            with self.engine.connect() as conn:
                return conn.execute(_PING_SQL).scalar()
        except SQLAlchemyError as exc:
            raise UpstreamUnavailable(str(exc)) from exc

    # ------------------------------------------------------------------
    # Writes (seeding / flat-file import)
    # ------------------------------------------------------------------

    def insert_rows(self, rows: Iterable[Mapping[str, Any]]) -> int:
        """Insert rows keyed by physical column name in one transaction."""
        rows = [dict(r) for r in rows]
        if not rows:
            return 0
        try:
            with self.engine.begin() as conn:
                conn.execute(inventory_table.insert(), rows)
        except SQLAlchemyError as exc:
            logger.exception("Inventory insert failed")
            raise UpstreamUnavailable("Failed to write inventory rows.") from exc
        logger.info("Inserted %d inventory rows", len(rows))
        return len(rows)

    def insert_records(self, records: Iterable[InventoryRecord]) -> int:
        """Insert canonical records (e.g. a projected CSV export)."""
        return self.insert_rows(to_relational(r) for r in records)


def _relational_date(value) -> dt.date | None:
    if is_null(value) or value == "":
        return None
    try:
        return parse_flexible_date(value)
    except UnknownDateFormat:
        return None


def to_relational(record: InventoryRecord) -> dict[str, Any]:
    """Canonical record -> inventory_data column values."""
    row = {}
    for spec in INVENTORY_COLUMNS:
        value = record.get(spec.header)
        if spec.kind == "date":
            value = _relational_date(value)
        row[spec.relational] = value
    return row
