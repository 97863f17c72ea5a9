"""
booking_ledger.peer.db

Persistence package for the peer (SQLAlchemy async).

Responsibilities:
- World-state and transaction-log ORM models, engine/session setup, repositories.
"""

# Package marker.
