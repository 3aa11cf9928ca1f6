"""
Restock — FastAPI app factory with startup schema checks.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from restock import config
from restock.api.dependencies import Services, set_services
from restock.api.router_export import router as export_router
from restock.api.router_history import router as history_router
from restock.api.router_meta import health_router, router as meta_router
from restock.api.router_snapshot import router as snapshot_router
from restock.data.schema import ensure_comments_column, init_schema, make_engine
from restock.errors import (
    AccessDenied, MalformedFileError, RangeValidationError, UpstreamUnavailable, WriteFailure,
)
from restock.log import setup_logging

logger = logging.getLogger(__name__)


def _register_error_handlers(app: FastAPI) -> None:
    """Every failure aborts the request; no partial row lists are returned."""

    @app.exception_handler(RangeValidationError)
    async def _range_error(request: Request, exc: RangeValidationError):
        return JSONResponse(status_code=400, content={"message": str(exc)})

    @app.exception_handler(MalformedFileError)
    async def _malformed_file(request: Request, exc: MalformedFileError):
        return JSONResponse(status_code=400, content={"message": str(exc)})

    @app.exception_handler(AccessDenied)
    async def _access_denied(request: Request, exc: AccessDenied):
        status = 401 if exc.bad_credentials else 403
        return JSONResponse(status_code=status, content={"message": str(exc)})

    @app.exception_handler(UpstreamUnavailable)
    async def _upstream(request: Request, exc: UpstreamUnavailable):
        return JSONResponse(status_code=503, content={"message": str(exc), "retryable": True})

    @app.exception_handler(WriteFailure)
    async def _write_failure(request: Request, exc: WriteFailure):
        return JSONResponse(status_code=500, content={"message": str(exc)})


def create_app(engine: Engine | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Connect, make sure both tables exist, publish the services."""
        setup_logging(config.LOG_LEVEL, config.LOGS_FOLDER)
        config.EXPORTS_FOLDER.mkdir(parents=True, exist_ok=True)

        db = engine if engine is not None else make_engine(config.DATABASE_URL)
        init_schema(db)
        ensure_comments_column(db)
        set_services(Services.from_engine(db))
        logger.info("Restock ready, database %s", db.url.render_as_string(hide_password=True))
        try:
            yield
        finally:
            set_services(None)
            if engine is None:
                db.dispose()

    app = FastAPI(
        title="Restock API",
        description="Inventory replenishment: date-ranged snapshots and approval history",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    _register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(meta_router)
    app.include_router(snapshot_router)
    app.include_router(history_router)
    app.include_router(export_router)
    return app


app = create_app()
