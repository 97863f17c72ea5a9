"""
booking_ledger.peer.db.base

SQLAlchemy declarative base for the peer's tables.
"""

from __future__ import annotations

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
