"""
Row-level visibility by access role.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping, TypeVar

from restock.config import ADMIN_ROLE
from restock.data.columns import MARKET_HEADER

Row = TypeVar("Row", bound=Mapping[str, Any])


def filter_rows(rows: Iterable[Row], role: str, field: str = MARKET_HEADER) -> list[Row]:
    """Admin sees everything; any other role sees only rows whose market equals it exactly."""
    if role == ADMIN_ROLE:
        return list(rows)
    return [r for r in rows if r.get(field) == role]


def is_unrestricted(role: str | None) -> bool:
    """History queries treat a blank role the same as admin."""
    return role is None or role.strip() == "" or role == ADMIN_ROLE
