"""
booking_ledger.peer.errors

Peer-side request errors, mapped to HTTP status codes by the peer app.
"""

from __future__ import annotations


class PeerError(Exception):
    status_code = 400


class BadRequestError(PeerError):
    status_code = 400


class InvalidSignatureError(PeerError):
    status_code = 401


class AccessDeniedError(PeerError):
    status_code = 403


class NotFoundError(PeerError):
    status_code = 404


class DuplicateTransactionError(PeerError):
    status_code = 409


class ChaincodeExecutionError(PeerError):
    status_code = 500
