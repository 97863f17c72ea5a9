"""
booking_ledger.api.errors

REST-facing errors. Responses use the `{"error": "..."}` body shape.
"""

from __future__ import annotations


class LedgerUnavailableError(Exception):
    """
    Credentials or the peer connection could not be set up for this request.
    """
