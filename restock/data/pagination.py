"""
Client-side table paging.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Sequence


@dataclass(frozen=True)
class Page:
    rows: list[Any] = field(default_factory=list)
    page_count: int = 1
    total_count: int = 0
    page_number: int = 1
    page_size: int = 10

    def summary(self) -> dict:
        return {
            "page": self.page_number,
            "pageSize": self.page_size,
            "pageCount": self.page_count,
            "totalCount": self.total_count,
        }


def page_count(total_count: int, page_size: int) -> int:
    return max(1, math.ceil(total_count / page_size))


def clamp_page(page_number: int, pages: int) -> int:
    """Caller-side clamp into [1, pages]."""
    return min(max(1, page_number), max(1, pages))


def paginate(rows: Sequence[Any], page_size: int, page_number: int) -> Page:
    """Slice one page out of rows. Pure: no clamping, no sorting."""
    if page_size < 1:
        raise ValueError(f"page_size must be at least 1 (got {page_size})")
    total = len(rows)
    start = (page_number - 1) * page_size
    return Page(
        rows=list(rows[start:start + page_size]) if start >= 0 else [],
        page_count=page_count(total, page_size),
        total_count=total,
        page_number=page_number,
        page_size=page_size,
    )
