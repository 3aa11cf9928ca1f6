"""
HistoryLedger — append-only log of operator approvals.

Each approval becomes exactly one new history_data row stamped with the
server clock at the moment it is accepted. Rows are never updated or deleted
here. Two approvals accepted concurrently may land in either order; the only
guarantee is that each approved_at is that event's own acceptance time.
"""
from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from restock.config import HISTORY_TABLE
from restock.data.access import is_unrestricted
from restock.data.columns import HISTORY_COLUMNS
from restock.data.dates import DateWindow, utcnow
from restock.data.normalize import coerce, coerce_text, is_null
from restock.errors import UpstreamUnavailable, WriteFailure

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def _aliases(*names: str) -> AliasChoices:
    return AliasChoices(*names)


class ApprovalEvent(BaseModel):
    """One approval. Accepts both canonical names and the dashboard's legacy payload keys."""
    market_id: str = Field(validation_alias=_aliases("market_id", "Marketid", "marketid"))
    company: str = Field("", validation_alias=_aliases("company", "Company"))
    item_description: str = Field("", validation_alias=_aliases("item_description", "Itmdesc", "itmdesc"))
    unit_cost: float = Field(0.0, validation_alias=_aliases("unit_cost", "cost"))
    total_stock: int = Field(0, validation_alias=_aliases("total_stock", "Total_Stock"))
    original_recommended_qty: str = Field(
        "", validation_alias=_aliases("original_recommended_qty", "Original_Recommended_Qty")
    )
    order_qty: int = Field(0, validation_alias=_aliases("order_qty", "Order_Qty"))
    total_cost: float = Field(0.0, validation_alias=_aliases("total_cost", "Total_Cost"))
    recommended_shipping: str = Field(
        "", validation_alias=_aliases("recommended_shipping", "Recommended_Shipping")
    )
    approved_by: str = Field(validation_alias=_aliases("approved_by", "Approved_By"))
    comments: str = Field("", validation_alias=_aliases("comments", "Comments"))
    approved_at: Optional[dt.datetime] = Field(None, validation_alias=_aliases("approved_at", "Approved_At"))

    @field_validator("market_id", "approved_by", mode="before")
    @classmethod
    def _required_text(cls, v):
        # numeric ids (type-inferred from flat files) are stored as text
        return v if v is None else coerce_text(v)

    @field_validator(
        "company", "item_description", "original_recommended_qty",
        "recommended_shipping", "comments",
        mode="before",
    )
    @classmethod
    def _blank_text(cls, v):
        return coerce_text(v)

    @field_validator("unit_cost", "total_cost", "total_stock", "order_qty", mode="before")
    @classmethod
    def _null_number(cls, v):
        return 0 if is_null(v) else v


@dataclass(frozen=True)
class ApprovalAck:
    approved_at: dt.datetime
    event: ApprovalEvent


class HistoryLedger:
    """Append/read access to the approval history table."""

    def __init__(self, engine: Engine, clock: Callable[[], dt.datetime] = utcnow) -> None:
        self.engine = engine
        self.clock = clock
        quote = engine.dialect.identifier_preparer.quote
        physical = [quote(col) for _, col, _ in HISTORY_COLUMNS]

        self._insert_sql = text(
            f"INSERT INTO {HISTORY_TABLE} ({', '.join(physical)}) "
            f"VALUES ({', '.join(':' + field for field, _, _ in HISTORY_COLUMNS)})"
        )
        self._select = (
            "SELECT "
            + ", ".join(f"{col} AS {field}" for col, (field, _, _) in zip(physical, HISTORY_COLUMNS))
            + f" FROM {HISTORY_TABLE} WHERE approved_at BETWEEN :start AND :end"
        )
        self._market_col = quote("marketid")

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def record(self, event: ApprovalEvent) -> ApprovalAck:
        """Stamp and append one approval. The whole row is written or nothing is."""
        approved_at = self.clock()
        stored = event.model_copy(update={"approved_at": approved_at})
        params = stored.model_dump()
        params["approved_at"] = approved_at.strftime(TIMESTAMP_FORMAT)

        try:
            with self.engine.begin() as conn:
                conn.execute(self._insert_sql, params)
        except SQLAlchemyError as exc:
            logger.exception("Failed to save history for market %s", event.market_id)
            raise WriteFailure("Failed to save history.") from exc

        logger.info(
            "Approval recorded: market=%s qty=%s by=%s at=%s",
            stored.market_id, stored.order_qty, stored.approved_by, params["approved_at"],
        )
        return ApprovalAck(approved_at=approved_at, event=stored)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def query(self, window: DateWindow, role: str | None = None) -> list[ApprovalEvent]:
        """Approvals inside the window visible to role, most recent first."""
        sql = self._select
        params = {"start": window.start_param, "end": window.end_param}
        if not is_unrestricted(role):
            sql += f" AND {self._market_col} = :market"
            params["market"] = role.strip()
        sql += " ORDER BY approved_at DESC, id DESC"

        try:
            with self.engine.connect() as conn:
                rows = conn.execute(text(sql), params).mappings().all()
        except SQLAlchemyError as exc:
            logger.exception("History query failed for %s", window.label)
            raise UpstreamUnavailable("Failed to fetch history.") from exc

        events = [self._to_event(r) for r in rows]
        logger.debug("History %s role=%s: %d events", window.label, role or "-", len(events))
        return events

    @staticmethod
    def _to_event(row) -> ApprovalEvent:
        values = {field: coerce(row[field], kind) for field, _, kind in HISTORY_COLUMNS}
        return ApprovalEvent(**values)
