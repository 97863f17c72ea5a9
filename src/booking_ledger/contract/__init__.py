"""
booking_ledger.contract

Chaincode package.

Responsibilities:
- Canonical booking schema and the booking smart contract.
- Runtime pieces (stub protocol, transaction context, dispatch) the peer hosts it with.
"""

from booking_ledger.contract.booking import BookingContract
from booking_ledger.contract.runtime import Chaincode

__all__ = ["BookingContract", "Chaincode", "new_chaincode"]


def new_chaincode() -> Chaincode:
    return Chaincode(BookingContract())
