"""
booking_ledger.peer.db.models

Peer persistence schema.

Responsibilities:
- StateEntry: current world state per (channel, chaincode namespace, key),
  versioned by the transaction that last wrote it.
- LedgerTransaction: endorsed/committed transactions with their read and
  write sets, validation code and block number.
"""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Enum, Index, LargeBinary, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from booking_ledger.peer.db.base import Base


def _utcnow() -> datetime:
    return datetime.utcnow()


class ValidationCode(enum.StrEnum):
    # Values are returned to clients as commit status; treat as stable API contract.
    endorsed = "ENDORSED"
    valid = "VALID"
    mvcc_read_conflict = "MVCC_READ_CONFLICT"


class StateEntry(Base):
    __tablename__ = "state_entries"

    channel: Mapped[str] = mapped_column(String(128), primary_key=True)
    namespace: Mapped[str] = mapped_column(String(128), primary_key=True)
    key: Mapped[str] = mapped_column(String(512), primary_key=True)

    value: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    version: Mapped[str] = mapped_column(String(64), nullable=False)

    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)


class LedgerTransaction(Base):
    __tablename__ = "ledger_transactions"

    tx_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    channel: Mapped[str] = mapped_column(String(128), nullable=False)
    namespace: Mapped[str] = mapped_column(String(128), nullable=False)
    function: Mapped[str] = mapped_column(String(128), nullable=False)
    args: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    creator_msp_id: Mapped[str] = mapped_column(String(128), nullable=False)
    creator_cert: Mapped[str] = mapped_column(Text, nullable=False)

    # read_set: key -> version seen at endorsement (None = key absent)
    read_set: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    # write_set: key -> base64 value
    write_set: Mapped[dict[str, str]] = mapped_column(JSON, nullable=False, default=dict)
    result: Mapped[bytes] = mapped_column(LargeBinary, nullable=False, default=b"")

    status: Mapped[ValidationCode] = mapped_column(
        Enum(ValidationCode), nullable=False, index=True
    )
    block_number: Mapped[int | None] = mapped_column(nullable=True, index=True)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    committed_at: Mapped[datetime | None] = mapped_column(nullable=True)

    __table_args__ = (Index("ix_ledger_tx_channel_block", "channel", "block_number"),)
