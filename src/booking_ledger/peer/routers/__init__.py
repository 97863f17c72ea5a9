"""
booking_ledger.peer.routers

Peer HTTP endpoints.
"""

# Package marker.
