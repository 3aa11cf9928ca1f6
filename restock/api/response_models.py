"""
Pydantic request/response schemas for the API.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    ok: bool
    db_time: Optional[str] = None
    error: Optional[str] = None


class MarketsResponse(BaseModel):
    data: list[str]


class RangeRequest(BaseModel):
    """Date range as typed by the operator; validated server-side."""
    startDate: Optional[str] = None
    endDate: Optional[str] = None
    role: Optional[str] = None
    page: Optional[int] = Field(None, ge=1)
    pageSize: Optional[int] = Field(None, ge=1)


class HistoryRangeRequest(RangeRequest):
    # older dashboards send the market as "marketid"
    marketid: Optional[str] = None

    @property
    def effective_role(self) -> Optional[str]:
        return self.role if self.role is not None else self.marketid


class SnapshotResponse(BaseModel):
    header: list[str]
    rows: list[dict[str, Any]]
    page: Optional[int] = None
    pageSize: Optional[int] = None
    pageCount: Optional[int] = None
    totalCount: Optional[int] = None


class HistoryResponse(BaseModel):
    data: list[dict[str, Any]]
    page: Optional[int] = None
    pageSize: Optional[int] = None
    pageCount: Optional[int] = None
    totalCount: Optional[int] = None


class AddHistoryResponse(BaseModel):
    success: bool
    approved_at: str


class LoginRequest(BaseModel):
    username: str
    password: str
    role: str
    startDate: Optional[str] = None
    endDate: Optional[str] = None


class SessionResponse(BaseModel):
    userRole: str
    startDate: str
    endDate: str
    startDateISO: str
    endDateISO: str


class MigrationResponse(BaseModel):
    success: bool
    message: str
