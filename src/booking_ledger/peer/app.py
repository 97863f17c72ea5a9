"""
booking_ledger.peer.app

FastAPI app factory for the local ledger peer.

Responsibilities:
- Build the peer application and register routers/middleware.
- Initialize and dispose the world-state DB engine.
- Deploy the booking chaincode under the configured channel/chaincode name.
- Translate `PeerError` into JSON error responses.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from booking_ledger import __version__
from booking_ledger.contract import new_chaincode
from booking_ledger.observability.logging import configure_logging, get_logger
from booking_ledger.observability.middleware import RequestContextMiddleware
from booking_ledger.peer.db.init_db import init_db
from booking_ledger.peer.db.session import create_engine, create_sessionmaker
from booking_ledger.peer.errors import PeerError
from booking_ledger.peer.msp import MspVerifier
from booking_ledger.peer.routers.health import router as health_router
from booking_ledger.peer.routers.ledger import router as ledger_router
from booking_ledger.settings import Settings

log = get_logger(__name__)


def create_peer_app(*, settings: Settings) -> FastAPI:
    configure_logging(
        service_name=f"{settings.service_name}-peer",
        level=settings.log_level,
        json_logs=settings.log_json,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info(
            "peer_startup",
            env=settings.env,
            channel=settings.channel_name,
            chaincode=settings.chaincode_name,
        )
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        app.state.verifier = MspVerifier.from_settings(settings)
        app.state.channels = frozenset({settings.channel_name})
        app.state.commit_locks = {channel: asyncio.Lock() for channel in app.state.channels}
        app.state.chaincodes = {settings.chaincode_name: new_chaincode()}
        if settings.env in ("dev", "test"):
            # Dev/test convenience: create tables automatically. Prod should use Alembic migrations.
            await init_db(engine)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("peer_shutdown")

    app = FastAPI(
        title="Booking Ledger Peer",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(ledger_router)

    @app.exception_handler(PeerError)
    async def _peer_error(_: Request, exc: PeerError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})

    return app


# --- Module Notes -----------------------------------------------------------
# Tables are auto-created in dev/test only; run `alembic upgrade head` elsewhere.
