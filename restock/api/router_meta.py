"""
Meta endpoints: health, markets, login, ledger migration.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from restock.api.dependencies import Services, get_services
from restock.api.response_models import (
    HealthResponse, LoginRequest, MarketsResponse, MigrationResponse, SessionResponse,
)
from restock.auth import CredentialTable
from restock.data.schema import ensure_comments_column
from restock.data.session import SessionContext
from restock.errors import UpstreamUnavailable

health_router = APIRouter(tags=["meta"])
router = APIRouter(prefix="/api", tags=["meta"])


@health_router.get("/health", response_model=HealthResponse, response_model_exclude_none=True)
def health(services: Services = Depends(get_services)):
    try:
        now = services.store.ping()
    except UpstreamUnavailable as exc:
        return JSONResponse(status_code=503, content={"ok": False, "error": str(exc)})
    return HealthResponse(ok=True, db_time=str(now))


@router.get("/get-all-markets", response_model=MarketsResponse)
def list_markets(services: Services = Depends(get_services)):
    """Distinct market ids, ascending. Feeds the login market picker."""
    return MarketsResponse(data=services.snapshots.list_distinct_markets())


@router.post("/login", response_model=SessionResponse)
def login(req: LoginRequest, services: Services = Depends(get_services)):
    """Check credentials and role, validate the dates, and hand back the session values."""
    table = CredentialTable.from_markets(services.snapshots.list_distinct_markets())
    role = table.authenticate(req.username, req.password, req.role)
    ctx = SessionContext(role=role, start_text=req.startDate, end_text=req.endDate)
    return SessionResponse(**ctx.to_dict())


@router.post("/setup-comments-column", response_model=MigrationResponse)
def setup_comments_column(services: Services = Depends(get_services)):
    if ensure_comments_column(services.engine):
        return MigrationResponse(success=True, message="Comments column added")
    return MigrationResponse(success=True, message="Column already exists")
