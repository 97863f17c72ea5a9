"""
booking_ledger.peer.db.repositories.state

Repository for world state (`StateEntry`), scoped to one channel + namespace.

Responsibilities:
- Point reads with version, ordered range scans.
- Apply a committed write set.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from booking_ledger.peer.db.models import StateEntry


class WorldStateRepo:
    def __init__(self, session: AsyncSession, *, channel: str, namespace: str) -> None:
        self._session = session
        self._channel = channel
        self._namespace = namespace

    async def get(self, key: str) -> StateEntry | None:
        return await self._session.get(StateEntry, (self._channel, self._namespace, key))

    async def version(self, key: str) -> str | None:
        entry = await self.get(key)
        return entry.version if entry is not None else None

    async def scan(self, start_key: str, end_key: str) -> AsyncIterator[StateEntry]:
        stmt = select(StateEntry).where(
            StateEntry.channel == self._channel,
            StateEntry.namespace == self._namespace,
        )
        if start_key:
            stmt = stmt.where(StateEntry.key >= start_key)
        if end_key:
            stmt = stmt.where(StateEntry.key < end_key)
        stmt = stmt.order_by(StateEntry.key)
        for entry in (await self._session.execute(stmt)).scalars().all():
            yield entry

    async def apply(self, writes: dict[str, bytes], *, version: str) -> None:
        for key, value in writes.items():
            entry = await self.get(key)
            if entry is None:
                self._session.add(
                    StateEntry(
                        channel=self._channel,
                        namespace=self._namespace,
                        key=key,
                        value=value,
                        version=version,
                    )
                )
            else:
                entry.value = value
                entry.version = version
        await self._session.flush()


# --- Module Notes -----------------------------------------------------------
# Versions are the committing transaction id; None in a read set means the key
# was absent at endorsement.
