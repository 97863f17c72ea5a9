"""
tests.test_booking_service

Payload -> transaction argument mapping.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from booking_ledger.services.booking_service import (
    BookingLedgerService,
    booking_from_payload,
    create_asset_args,
)


def test_args_follow_contract_order_not_payload_order() -> None:
    payload = {
        "incoTerms": "FOB",
        "isPartialLoadAllowed": True,
        "name": "tom",
        "bookingID": "BK-1",
        "phoneNumber": 42,
    }
    args = create_asset_args(booking_from_payload(payload))

    assert len(args) == 23
    assert args[0] == "BK-1"
    assert args[1] == "tom"
    assert args[3] == "42"
    assert args[14] == "true"
    assert args[15] == "false"
    assert args[21] == "FOB"


def test_generated_id_when_absent() -> None:
    booking = booking_from_payload({"name": "tom", "bookingID": ""})
    assert booking.booking_id.startswith("asset")
    assert booking.booking_id[len("asset"):].isdigit()


def test_lowercase_invoice_id_key_is_accepted() -> None:
    assert booking_from_payload({"bookingid": "INV-1"}).booking_id == "INV-1"


def test_bad_types_raise() -> None:
    with pytest.raises(ValidationError):
        booking_from_payload({"bookingID": "x", "isPartialLoadAllowed": "maybe"})


class RecordingContract:
    def __init__(self, result: bytes = b"") -> None:
        self.calls: list[tuple[str, str, tuple[str, ...]]] = []
        self._result = result

    async def submit_transaction(self, name: str, *args: str) -> bytes:
        self.calls.append(("submit", name, args))
        return self._result

    async def evaluate_transaction(self, name: str, *args: str) -> bytes:
        self.calls.append(("evaluate", name, args))
        return self._result


@pytest.mark.asyncio
async def test_invoice_is_submitted_as_single_json_argument() -> None:
    contract = RecordingContract()
    svc = BookingLedgerService(contract)  # type: ignore[arg-type]

    await svc.create_invoice(booking_from_payload({"bookingID": "INV-1", "vesselName": "V"}))

    kind, name, args = contract.calls[0]
    assert (kind, name) == ("submit", "CreateInvoice")
    assert len(args) == 1
    assert '"bookingID":"INV-1"' in args[0]


@pytest.mark.asyncio
async def test_empty_list_result_decodes_to_empty_list() -> None:
    svc = BookingLedgerService(RecordingContract(b""))  # type: ignore[arg-type]
    assert await svc.list_assets() == []
