"""FastAPI application factory for Jackpot Predictor.

Run with: uvicorn backend.main:app --reload
"""

from __future__ import annotations

import traceback
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app as make_metrics_app
from sqlalchemy import text
from starlette.middleware.gzip import GZipMiddleware

from backend.api.export import router as export_router
from backend.api.fixtures import router as fixtures_router
from backend.api.jackpots import router as jackpots_router
from backend.api.predictions import router as predictions_router
from backend.common.config import get_settings
from backend.common.database import get_session, init_models
from backend.common.exceptions import JackpotBaseException, NotFoundError
from backend.common.logging import get_logger
from backend.common.metrics import set_app_info
from backend.common.middleware import (
    PrometheusMiddleware,
    RequestIdMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
    request_id_var,
)
from backend.jackpot.store import ensure_default_jackpot

logger = get_logger("SYSTEM")

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncGenerator[None, None]:
    """Create tables and seed the default jackpot on startup."""
    settings = get_settings()
    await init_models()
    logger.info(
        "Database ready",
        extra={
            "data": {"database_url": settings.database_url, "environment": settings.environment}
        },
    )
    if settings.seed_default_jackpot:
        async with get_session() as db:
            jackpot = await ensure_default_jackpot(db, settings)
            await db.commit()
        logger.info("Default jackpot ready", extra={"data": {"jackpot_id": jackpot.id}})

    yield

    logger.info("App shutting down")


def _error_body(exc: Exception) -> dict:
    return {"error": type(exc).__name__, "message": str(exc)}


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title="Jackpot Predictor",
        version=VERSION,
        description="Assemble a 17-fixture jackpot, generate 1/X/2 predictions, export CSV",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Last added = outermost = runs first on request
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(PrometheusMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIdMiddleware)

    # ─── Exception Handlers ───

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        """Missing jackpots and other records map to 404."""
        logger.warning(
            f"{type(exc).__name__}: {exc}",
            extra={"data": {"path": str(request.url), "context": exc.context}},
        )
        return JSONResponse(status_code=404, content=_error_body(exc))

    @app.exception_handler(JackpotBaseException)
    async def jackpot_exception_handler(
        request: Request, exc: JackpotBaseException
    ) -> JSONResponse:
        """Validation, parse and export failures map to 400."""
        logger.error(
            f"{type(exc).__name__}: {exc}",
            extra={"data": {"path": str(request.url), "context": exc.context}},
        )
        return JSONResponse(status_code=400, content=_error_body(exc))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unhandled exceptions — log traceback, return 500."""
        rid = request_id_var.get("")
        logger.error(
            f"Unhandled {type(exc).__name__}: {exc}",
            extra={
                "data": {
                    "path": str(request.url),
                    "request_id": rid,
                    "traceback": traceback.format_exc(),
                }
            },
        )
        body: dict = {
            "error": "InternalServerError",
            "message": "An unexpected error occurred",
        }
        if rid:
            body["request_id"] = rid
        return JSONResponse(status_code=500, content=body)

    # ─── Health / Readiness ───

    @app.get("/health")
    async def health_check() -> dict:
        """Liveness check: confirms the process is running."""
        return {"status": "ok", "version": VERSION}

    @app.get("/ready")
    async def readiness_check() -> JSONResponse:
        """Readiness check: verifies database connectivity."""
        checks: dict[str, str] = {}
        all_ok = True

        try:
            from backend.common.database import _get_engine

            engine = _get_engine()
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            checks["database"] = "ok"
        except Exception as exc:
            checks["database"] = f"error: {type(exc).__name__}"
            all_ok = False

        return JSONResponse(
            status_code=200 if all_ok else 503,
            content={
                "status": "ok" if all_ok else "degraded",
                "version": VERSION,
                "checks": checks,
            },
        )

    # ─── Prometheus Metrics ───

    app.mount("/metrics", make_metrics_app())
    set_app_info(version=VERSION, environment=settings.environment)

    # ─── Router Mounting ───

    app.include_router(jackpots_router, prefix="/api/jackpot", tags=["jackpot"])
    app.include_router(fixtures_router, prefix="/api/fixtures", tags=["fixtures"])
    app.include_router(predictions_router, prefix="/api/predictions", tags=["predictions"])
    app.include_router(export_router, prefix="/api/export", tags=["export"])

    logger.info("App created", extra={"data": {"version": VERSION}})

    return app


app = create_app()
