"""
SnapshotQueryService — date-ranged inventory snapshots in the canonical shape.

Two sources feed the same contract: the inventory_data table (the normal
path) and a flat CSV export (the legacy path). Both project through
restock.data.normalize and filter by role afterwards, so the role filter only
ever sees canonical headers.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Union

import pandas as pd

from restock.data.access import filter_rows
from restock.data.columns import HEADER_CONTRACT, SourceKind
from restock.data.dates import DateWindow, to_inclusive_window
from restock.data.normalize import InventoryRecord, project_many
from restock.data.store import InventoryStore
from restock.errors import MalformedFileError

logger = logging.getLogger(__name__)

CsvSource = Union[str, Path, IO]


@dataclass
class SnapshotResult:
    header: list[str] = field(default_factory=lambda: list(HEADER_CONTRACT))
    rows: list[InventoryRecord] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"header": list(self.header), "rows": self.rows}

    def __len__(self) -> int:
        return len(self.rows)


class SnapshotQueryService:
    """Validate -> window -> fetch -> project -> filter."""

    def __init__(self, store: InventoryStore) -> None:
        self.store = store

    def fetch_range(self, start_text, end_text, role: str | None = None) -> SnapshotResult:
        """Inventory rows dated within [start, end] inclusive, oldest first.

        ``role=None`` applies no visibility filter; otherwise admin sees every
        market and any other role only its own. Range errors are raised before
        the store is touched.
        """
        window = to_inclusive_window(start_text, end_text)
        return self.fetch_window(window, role)

    def fetch_window(self, window: DateWindow, role: str | None = None) -> SnapshotResult:
        raw = self.store.fetch_inventory(window)
        rows = project_many(raw, SourceKind.RELATIONAL)
        if role is not None:
            rows = filter_rows(rows, role)
        logger.info("Snapshot %s role=%s: %d rows", window.label, role or "-", len(rows))
        return SnapshotResult(rows=rows)

    def list_distinct_markets(self) -> list[str]:
        return self.store.distinct_markets()


# ---------------------------------------------------------------------------
# Legacy flat-file path
# ---------------------------------------------------------------------------

def read_delimited(source: CsvSource) -> list[dict]:
    """Parse a header-row CSV into one dict per data row.

    Header cells are trimmed; numeric-looking values come back as numbers.
    Only empty cells are treated as missing, so a market called "NA" survives.
    A file pandas cannot decode or parse, or with a row longer than the
    header, raises MalformedFileError before any row is returned.
    """
    try:
        df = pd.read_csv(source, skip_blank_lines=True, keep_default_na=False, na_values=[""])
    except UnicodeDecodeError as exc:
        raise MalformedFileError(f"File is not valid UTF-8 text: {exc.reason}") from exc
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise MalformedFileError(f"Could not parse CSV: {exc}") from exc

    # pandas moves surplus leading cells into the index instead of failing
    if len(df) and not isinstance(df.index, pd.RangeIndex):
        raise MalformedFileError("Could not parse CSV: a data row has more cells than the header")
    df.columns = [str(c).strip() for c in df.columns]
    df = df.dropna(how="all")
    return df.to_dict("records")


def load_delimited(source: CsvSource, role: str | None = None) -> SnapshotResult:
    """Canonical snapshot from a flat CSV export, in file order."""
    rows = project_many(read_delimited(source), SourceKind.DELIMITED_FILE)
    if role is not None:
        rows = filter_rows(rows, role)
    logger.info("Flat file snapshot role=%s: %d rows", role or "-", len(rows))
    return SnapshotResult(rows=rows)
