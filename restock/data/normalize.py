"""
Row projection onto the canonical header contract, with per-column coercion.
"""
from __future__ import annotations

import datetime as dt
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping

import numpy as np
import pandas as pd

from restock.data.columns import INVENTORY_COLUMNS, SourceKind
from restock.data.dates import format_us_date, parse_flexible_date, parse_timestamp
from restock.errors import UnknownDateFormat

InventoryRecord = dict[str, Any]


# ---------------------------------------------------------------------------
# Scalar coercion
# ---------------------------------------------------------------------------

def is_null(value) -> bool:
    """None, NaN, NaT and pd.NA all count as missing."""
    if value is None:
        return True
    return bool(pd.api.types.is_scalar(value) and pd.isna(value))


def _number_text(value) -> str:
    return str(value).replace("$", "").replace(",", "").strip()


def coerce_int(value) -> int:
    """Quantities: null or unparseable -> 0."""
    if is_null(value):
        return 0
    if isinstance(value, (bool, np.bool_)):
        return int(value)
    if isinstance(value, (int, np.integer)):
        return int(value)
    try:
        if isinstance(value, (float, np.floating, Decimal)):
            return int(value)
        return int(float(_number_text(value)))
    except (ValueError, OverflowError, InvalidOperation):
        return 0


def coerce_cost(value) -> float:
    """Costs always leave as floats, never as Decimal or text."""
    if is_null(value):
        return 0.0
    try:
        if isinstance(value, (int, float, np.integer, np.floating, Decimal)):
            result = float(value)
        else:
            result = float(_number_text(value))
    except (ValueError, InvalidOperation):
        return 0.0
    if np.isnan(result) or np.isinf(result):
        return 0.0
    return result


def coerce_text(value) -> str:
    if is_null(value):
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, np.bool_)):
        return str(bool(value))
    if isinstance(value, (int, np.integer)):
        return str(int(value))
    if isinstance(value, (float, np.floating)):
        # CSV type inference turns "12" into 12.0 when the column has gaps
        return str(int(value)) if float(value).is_integer() else str(float(value))
    return str(value)


def coerce_date(value) -> str:
    """Any date-ish value -> MM/DD/YYYY. Unparseable text passes through unchanged."""
    if is_null(value):
        return ""
    if isinstance(value, (dt.date, dt.datetime)):
        return format_us_date(value)
    text = coerce_text(value).strip()
    try:
        return format_us_date(parse_flexible_date(text))
    except UnknownDateFormat:
        pass
    try:
        return format_us_date(parse_timestamp(text))
    except ValueError:
        return text


def coerce_timestamp(value) -> dt.datetime | None:
    if is_null(value):
        return None
    return parse_timestamp(value)


_COERCERS = {
    "int": coerce_int,
    "cost": coerce_cost,
    "text": coerce_text,
    "date": coerce_date,
    "timestamp": coerce_timestamp,
}


def coerce(value, kind: str):
    return _COERCERS[kind](value)


# ---------------------------------------------------------------------------
# Projection
# ---------------------------------------------------------------------------

def _lookup(row: Mapping[str, Any], names: tuple[str, ...]):
    for name in names:
        if name in row:
            return row[name]
    return None


def project(source_row: Mapping[str, Any], kind: SourceKind) -> InventoryRecord:
    """Map one source row onto the canonical header contract.

    Fields the alias table doesn't know are ignored; fields it expects but the
    row lacks get their column default. Output key order is always the header
    contract, whichever source the row came from.
    """
    kind = SourceKind(kind)
    if kind == SourceKind.DELIMITED_FILE:
        source_row = {str(k).strip(): v for k, v in source_row.items()}

    return {
        spec.header: coerce(_lookup(source_row, spec.source_name(kind)), spec.kind)
        for spec in INVENTORY_COLUMNS
    }


def project_many(rows: Iterable[Mapping[str, Any]], kind: SourceKind) -> list[InventoryRecord]:
    return [project(r, kind) for r in rows]
