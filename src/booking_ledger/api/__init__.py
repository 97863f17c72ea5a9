"""
booking_ledger.api

REST gateway package.

Responsibilities:
- FastAPI app factory and router modules.
- Per-request ledger connection wiring.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer stays thin: request validation + delegation to services.
