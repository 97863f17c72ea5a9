"""
booking_ledger.peer.db.repositories

Repository package; repositories are imported directly from submodules.
"""

# Package marker.
