"""
Date parsing and inclusive query windows.

Operators type dates in whatever shape their browser or spreadsheet produced,
so three shapes are accepted, tried in order: ISO (YYYY-MM-DD), US
(MM/DD/YYYY) and day-first (DD-MM-YYYY). Nothing else is guessed at.

A window always runs from the start day's midnight to 23:59:59 on the end day,
so a single-day range covers that whole day. Timestamps are naive UTC.
"""
from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass

from restock.config import END_OF_DAY
from restock.errors import (
    InvalidFormatError,
    InvertedRangeError,
    MissingFieldError,
    UnknownDateFormat,
)

# (pattern, group order as year/month/day indexes)
_FORMATS = [
    (re.compile(r"^(\d{4})-(\d{2})-(\d{2})$"), (0, 1, 2)),   # ISO
    (re.compile(r"^(\d{2})/(\d{2})/(\d{4})$"), (2, 0, 1)),   # US
    (re.compile(r"^(\d{2})-(\d{2})-(\d{4})$"), (2, 1, 0)),   # day-first
]


def parse_flexible_date(text) -> dt.date:
    """Parse ISO, US or day-first text into a calendar date.

    Raises UnknownDateFormat for any other shape, and for shapes that match
    but name an impossible day (2025-02-30).
    """
    if isinstance(text, dt.datetime):
        return text.date()
    if isinstance(text, dt.date):
        return text
    if not isinstance(text, str):
        raise UnknownDateFormat(text)

    candidate = text.strip()
    for pattern, (yi, mi, di) in _FORMATS:
        m = pattern.match(candidate)
        if not m:
            continue
        parts = m.groups()
        try:
            return dt.date(int(parts[yi]), int(parts[mi]), int(parts[di]))
        except ValueError:
            raise UnknownDateFormat(text) from None
    raise UnknownDateFormat(text)


def end_of_day(day: dt.date) -> dt.datetime:
    """Last second of a calendar day."""
    return dt.datetime.combine(day, dt.time(*END_OF_DAY))


@dataclass(frozen=True)
class DateWindow:
    """Inclusive query window: start midnight through end_inclusive."""
    start: dt.date
    end_inclusive: dt.datetime

    @property
    def end(self) -> dt.date:
        return self.end_inclusive.date()

    @property
    def start_param(self) -> str:
        """Lower bound as bound into BETWEEN."""
        return self.start.isoformat()

    @property
    def end_param(self) -> str:
        """Upper bound as bound into BETWEEN."""
        return self.end_inclusive.strftime("%Y-%m-%d %H:%M:%S")

    def contains(self, value: dt.date | dt.datetime) -> bool:
        if not isinstance(value, dt.datetime):
            value = dt.datetime.combine(value, dt.time())
        return dt.datetime.combine(self.start, dt.time()) <= value <= self.end_inclusive

    @property
    def label(self) -> str:
        return f"{self.start.isoformat()} to {self.end.isoformat()}"


def to_inclusive_window(start_text, end_text) -> DateWindow:
    """Validate a raw (start, end) pair and widen the end to 23:59:59."""
    if start_text is None or (isinstance(start_text, str) and not start_text.strip()):
        raise MissingFieldError("startDate")
    if end_text is None or (isinstance(end_text, str) and not end_text.strip()):
        raise MissingFieldError("endDate")

    try:
        start = parse_flexible_date(start_text)
    except UnknownDateFormat:
        raise InvalidFormatError("startDate", start_text) from None
    try:
        end = parse_flexible_date(end_text)
    except UnknownDateFormat:
        raise InvalidFormatError("endDate", end_text) from None

    if end < start:
        raise InvertedRangeError(start.isoformat(), end.isoformat())
    return DateWindow(start=start, end_inclusive=end_of_day(end))


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------

def format_us_date(value: dt.date | dt.datetime) -> str:
    """MM/DD/YYYY, the format the dashboard shows dates in."""
    return f"{value.month:02d}/{value.day:02d}/{value.year:04d}"


def to_iso_text(text) -> str:
    return parse_flexible_date(text).isoformat()


def to_us_text(text) -> str:
    return format_us_date(parse_flexible_date(text))


def parse_timestamp(value) -> dt.datetime | None:
    """Store timestamps come back as datetimes (PostgreSQL) or text (SQLite)."""
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        if value.tzinfo is not None:
            value = value.astimezone(dt.timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, dt.date):
        return dt.datetime.combine(value, dt.time())
    text = str(value).strip().replace("Z", "+00:00")
    parsed = dt.datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(dt.timezone.utc).replace(tzinfo=None)
    return parsed


def utcnow() -> dt.datetime:
    """Server clock: naive UTC, second precision."""
    return dt.datetime.now(dt.timezone.utc).replace(tzinfo=None, microsecond=0)
