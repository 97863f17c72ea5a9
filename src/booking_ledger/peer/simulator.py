"""
booking_ledger.peer.simulator

Transaction simulation against committed world state.

Responsibilities:
- Implement `ChaincodeStub` over `WorldStateRepo`.
- Record the version of every key read and buffer every write, so the peer
  can validate and apply them at commit time.
"""

from __future__ import annotations

import base64
from collections.abc import AsyncIterator

from booking_ledger.peer.db.repositories.state import WorldStateRepo


class SimulationStub:
    def __init__(self, state: WorldStateRepo) -> None:
        self._state = state
        self.reads: dict[str, str | None] = {}
        self.writes: dict[str, bytes] = {}

    async def get_state(self, key: str) -> bytes | None:
        # Committed state only: a transaction does not read its own writes.
        entry = await self._state.get(key)
        self.reads.setdefault(key, entry.version if entry is not None else None)
        return entry.value if entry is not None else None

    async def put_state(self, key: str, value: bytes) -> None:
        if not key:
            raise ValueError("key must not be an empty string")
        self.writes[key] = bytes(value)

    async def get_state_by_range(
        self, start_key: str, end_key: str
    ) -> AsyncIterator[tuple[str, bytes]]:
        async for entry in self._state.scan(start_key, end_key):
            self.reads.setdefault(entry.key, entry.version)
            yield entry.key, entry.value

    def encoded_writes(self) -> dict[str, str]:
        return {k: base64.b64encode(v).decode("ascii") for k, v in self.writes.items()}


# --- Module Notes -----------------------------------------------------------
# Range scans add every returned key to the read set, so a concurrent update of
# any listed record invalidates the reading transaction.
