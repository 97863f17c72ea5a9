"""
booking_ledger.peer.db.session

Async SQLAlchemy engine + session factory helpers for the peer.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from booking_ledger.settings import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    connect_args: dict[str, object] = {}
    if settings.peer_database_url.startswith("sqlite"):
        # Concurrent endorse/submit calls wait on the file lock instead of failing fast.
        connect_args["timeout"] = 30
    return create_async_engine(
        settings.peer_database_url,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: committed transactions are still read for responses.
    return async_sessionmaker(
        bind=engine,
        expire_on_commit=False,
        autoflush=False,
    )


# --- Module Notes -----------------------------------------------------------
# Request-scoped sessions come from peer.deps.db_session.
