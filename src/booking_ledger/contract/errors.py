"""
booking_ledger.contract.errors

Errors raised by chaincode. Their messages travel back to the client verbatim.
"""

from __future__ import annotations


class ContractError(Exception):
    pass


class AssetExistsError(ContractError):
    def __init__(self, booking_id: str) -> None:
        super().__init__(f"the asset with ID {booking_id} already exists")
        self.booking_id = booking_id


class AssetNotFoundError(ContractError):
    def __init__(self, booking_id: str) -> None:
        super().__init__(f"the asset with ID {booking_id} does not exist")
        self.booking_id = booking_id


class UnknownTransactionError(ContractError):
    pass


class ArgumentError(ContractError):
    pass
