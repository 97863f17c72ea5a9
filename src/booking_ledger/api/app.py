"""
booking_ledger.api.app

FastAPI app factory for the booking REST gateway.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Hold the optional in-process transport to the peer (tests, single-process demos).
- Render connection failures as `{"error": ...}` responses.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from booking_ledger import __version__
from booking_ledger.api.errors import LedgerUnavailableError
from booking_ledger.api.routers.assets import router as assets_router
from booking_ledger.api.routers.health import router as health_router
from booking_ledger.observability.logging import configure_logging, get_logger
from booking_ledger.observability.middleware import RequestContextMiddleware
from booking_ledger.settings import Settings

log = get_logger(__name__)


def create_app(
    *,
    settings: Settings,
    peer_transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        json_logs=settings.log_json,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info(
            "startup",
            env=settings.env,
            peer_endpoint=settings.peer_endpoint,
            channel=settings.channel_name,
            chaincode=settings.chaincode_name,
        )
        yield
        log.info("shutdown")

    app = FastAPI(
        title="Booking Ledger Gateway",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.peer_transport = peer_transport

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(assets_router)

    @app.exception_handler(LedgerUnavailableError)
    async def _ledger_unavailable(_: Request, exc: LedgerUnavailableError) -> JSONResponse:
        log.error("ledger_unavailable", error=str(exc))
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": f"Error connecting to ledger: {exc}"},
        )

    return app


# --- Module Notes -----------------------------------------------------------
# Ledger errors from the gateway are rendered by the assets router; only
# connection setup failures reach the app-level handler.
