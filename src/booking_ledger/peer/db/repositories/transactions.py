"""
booking_ledger.peer.db.repositories.transactions

Repository for the transaction log (`LedgerTransaction`).

Responsibilities:
- Record endorsed transactions with their read/write sets.
- Mark transactions committed (block number) or invalidated.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from booking_ledger.peer.db.models import LedgerTransaction, ValidationCode


class TransactionRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, tx_id: str) -> LedgerTransaction | None:
        return await self._session.get(LedgerTransaction, tx_id)

    async def add_endorsed(
        self,
        *,
        tx_id: str,
        channel: str,
        namespace: str,
        function: str,
        args: list[str],
        creator_msp_id: str,
        creator_cert: str,
        read_set: dict[str, Any],
        write_set: dict[str, str],
        result: bytes,
    ) -> LedgerTransaction:
        tx = LedgerTransaction(
            tx_id=tx_id,
            channel=channel,
            namespace=namespace,
            function=function,
            args=args,
            creator_msp_id=creator_msp_id,
            creator_cert=creator_cert,
            read_set=read_set,
            write_set=write_set,
            result=result,
            status=ValidationCode.endorsed,
        )
        self._session.add(tx)
        await self._session.flush()
        return tx

    async def next_block_number(self, channel: str) -> int:
        stmt = select(func.max(LedgerTransaction.block_number)).where(
            LedgerTransaction.channel == channel
        )
        current = (await self._session.execute(stmt)).scalar_one_or_none()
        return 0 if current is None else current + 1

    async def mark(
        self,
        tx: LedgerTransaction,
        *,
        status: ValidationCode,
        block_number: int | None = None,
    ) -> None:
        tx.status = status
        tx.block_number = block_number
        tx.committed_at = datetime.utcnow()
        await self._session.flush()


# --- Module Notes -----------------------------------------------------------
# Block numbers are dense per channel; callers hold the channel commit lock while
# numbering and marking.
