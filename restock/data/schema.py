"""
Table definitions for the inventory snapshot table and the approval ledger.

Physical column names match the production database exactly, including the
mixed-case ledger columns, which PostgreSQL stores quoted.
"""
from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy import (
    Column, Date, DateTime, Integer, MetaData, Numeric, Table, Text,
    create_engine, inspect, text,
)
from sqlalchemy.engine import Engine, make_url

from restock.config import DATABASE_URL, HISTORY_TABLE, INVENTORY_TABLE

logger = logging.getLogger(__name__)

metadata = MetaData()

inventory_table = Table(
    INVENTORY_TABLE,
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("date", Date, index=True),
    Column("marketid", Text, index=True),
    Column("custno", Text),
    Column("company", Text),
    Column("item", Text),
    Column("status", Text),
    Column("itmdesc", Text),
    Column("in_stock", Integer),
    Column("in_transit", Integer),
    Column("total_stock", Integer),
    Column("cost", Numeric(12, 2)),
    Column("allocations", Integer),
    Column("w1", Integer),
    Column("w2", Integer),
    Column("w3", Integer),
    Column("days_30", Integer),
    Column("overnight", Integer),
    Column("to_order_cost_overnight", Numeric(12, 2)),
    Column("two_day_ship", Integer),
    Column("to_order_cost_2day", Numeric(12, 2)),
    Column("ground", Integer),
    Column("to_order_cost_ground", Numeric(12, 2)),
    Column("recommended_quantity", Text),
    Column("recommended_shipping", Text),
)

history_table = Table(
    HISTORY_TABLE,
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("marketid", Text, index=True),
    Column("company", Text),
    Column("itmdesc", Text),
    Column("cost", Numeric(12, 2)),
    Column("Total_Stock", Integer),
    Column("Original_Recomr", Text),
    Column("Order_Qty", Integer),
    Column("Total_Cost", Numeric(12, 2)),
    Column("Recommended_", Text),
    Column("Approved_By", Text),
    Column("approved_at", DateTime, index=True),
    Column("comments", Text, server_default=""),
)


def make_engine(url: str = DATABASE_URL, **kwargs) -> Engine:
    """Create the SQLAlchemy engine. Pooling is left to SQLAlchemy's defaults."""
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        database = make_url(url).database
        if database and database != ":memory:":
            Path(database).parent.mkdir(parents=True, exist_ok=True)
    else:
        kwargs.setdefault("pool_pre_ping", True)
    return create_engine(url, **kwargs)


def init_schema(engine: Engine) -> None:
    """Create both tables if they don't exist yet."""
    metadata.create_all(engine)
    logger.info("Schema ready (%s, %s)", INVENTORY_TABLE, HISTORY_TABLE)


def ensure_comments_column(engine: Engine) -> bool:
    """Add history_data.comments to ledgers created before it existed.

    Returns True when the column was added, False when it was already there.
    """
    columns = {c["name"] for c in inspect(engine).get_columns(HISTORY_TABLE)}
    if "comments" in columns:
        return False
    with engine.begin() as conn:
        conn.execute(text(f"ALTER TABLE {HISTORY_TABLE} ADD COLUMN comments TEXT DEFAULT ''"))
    logger.info("Added comments column to %s", HISTORY_TABLE)
    return True
