"""
booking_ledger.api.routers

REST routers.
"""

# Package marker.
