"""
booking_ledger.gateway.errors

Gateway error hierarchy. Each stage of a transaction has its own error so
callers can tell whether a write may have reached the ledger.
"""

from __future__ import annotations


class GatewayError(Exception):
    def __init__(self, message: str, *, tx_id: str | None = None) -> None:
        super().__init__(message)
        self.tx_id = tx_id


class ConnectionSetupError(GatewayError):
    pass


class EvaluateError(GatewayError):
    pass


class EndorseError(GatewayError):
    pass


class SubmitError(GatewayError):
    pass


class CommitStatusError(GatewayError):
    pass


class CommitError(GatewayError):
    """
    The transaction was ordered but failed validation (e.g. MVCC_READ_CONFLICT).
    """

    def __init__(self, tx_id: str, code: str) -> None:
        super().__init__(f"transaction {tx_id} failed to commit with status code {code}", tx_id=tx_id)
        self.code = code
