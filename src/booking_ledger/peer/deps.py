"""
booking_ledger.peer.deps

FastAPI dependency wiring for the peer.

Responsibilities:
- Provide request-scoped DB sessions from app.state.
- Build the request's `PeerService` from shared, startup-built pieces.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from booking_ledger.peer.service import PeerService


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Commit is explicit in PeerService; anything left uncommitted is rolled back on close.
    async with session_factory() as session:
        yield session


def peer_service(
    request: Request,
    session: AsyncSession = Depends(db_session),
) -> PeerService:
    state = request.app.state
    return PeerService(
        session=session,
        verifier=state.verifier,
        channels=state.channels,
        chaincodes=state.chaincodes,
        commit_locks=state.commit_locks,
    )


# --- Module Notes -----------------------------------------------------------
# PeerService is cheap to build; shared pieces (verifier, chaincodes, commit
# locks) live on app.state for the process lifetime.
