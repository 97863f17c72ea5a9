"""
booking_ledger.contract.context

What a contract can see of the ledger while a transaction runs.

Responsibilities:
- Define the `ChaincodeStub` protocol (world-state reads/writes/range scans).
- Carry the transaction ID and the submitting client's identity.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Protocol


class ChaincodeStub(Protocol):
    async def get_state(self, key: str) -> bytes | None: ...

    async def put_state(self, key: str, value: bytes) -> None: ...

    def get_state_by_range(self, start_key: str, end_key: str) -> AsyncIterator[tuple[str, bytes]]:
        """
        Iterate `(key, value)` pairs with `start_key <= key < end_key`, ordered by key.
        Empty bounds are open.
        """
        ...


@dataclass(frozen=True, slots=True)
class ClientIdentity:
    msp_id: str
    subject: str


@dataclass(frozen=True, slots=True)
class TransactionContext:
    stub: ChaincodeStub
    tx_id: str
    client_identity: ClientIdentity


# --- Module Notes -----------------------------------------------------------
# The stub protocol is the only way contract code touches the ledger.
