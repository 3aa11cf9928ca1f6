"""
Spreadsheet exports: one sheet, canonical column order, one row per record,
file name stamped with the export date.
"""
from __future__ import annotations

import datetime as dt
import logging
from pathlib import Path
from typing import Sequence

from restock.config import EXPORTS_FOLDER
from restock.data.columns import export_columns, history_export_columns
from restock.data.ledger import ApprovalEvent
from restock.data.snapshots import SnapshotResult
from restock.excel.writer import ExcelWriter

logger = logging.getLogger(__name__)

SNAPSHOT_SHEET = "Inventory"
HISTORY_SHEET = "Approval_History"


def _stamp(prefix: str, today: dt.date | None) -> str:
    return f"{prefix}_{(today or dt.date.today()).isoformat()}.xlsx"


def export_snapshot(
    result: SnapshotResult,
    folder: Path = EXPORTS_FOLDER,
    today: dt.date | None = None,
) -> Path:
    """Write a snapshot to inventory_snapshot_<date>.xlsx."""
    writer = ExcelWriter()
    ws = writer.add_sheet(SNAPSHOT_SHEET)
    writer.write_table(ws, 1, export_columns(), result.rows)
    path = writer.save(Path(folder) / _stamp("inventory_snapshot", today))
    logger.info("Exported %d inventory rows to %s", len(result.rows), path.name)
    return path


def _history_row(event: ApprovalEvent) -> dict:
    row = event.model_dump()
    if event.approved_at is not None:
        row["approved_at"] = event.approved_at.strftime("%Y-%m-%d %H:%M:%S")
    return row


def export_history(
    events: Sequence[ApprovalEvent],
    folder: Path = EXPORTS_FOLDER,
    today: dt.date | None = None,
) -> Path:
    """Write approval history to approval_history_<date>.xlsx."""
    writer = ExcelWriter()
    ws = writer.add_sheet(HISTORY_SHEET)
    writer.write_table(ws, 1, history_export_columns(), [_history_row(e) for e in events])
    path = writer.save(Path(folder) / _stamp("approval_history", today))
    logger.info("Exported %d approvals to %s", len(events), path.name)
    return path
