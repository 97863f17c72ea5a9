"""
booking_ledger.services.booking_service

Booking operations over a gateway `Contract`.

Responsibilities:
- Map inbound REST payloads to ledger transaction arguments.
- Submit `CreateAsset` / `CreateInvoice`; evaluate `ReadAsset` / `GetAllAssets`.
- Decode ledger result bytes into JSON-ready values.
"""

from __future__ import annotations

import json
import time
from typing import Any

from booking_ledger.contract.models import CREATE_ASSET_FIELDS, Booking
from booking_ledger.gateway.client import Contract

COMMITTED = "Transaction committed successfully"

_ID_KEYS = ("bookingID", "bookingid", "booking_id")


def generate_asset_id() -> str:
    return f"asset{time.time_ns() // 1_000_000}"


def booking_from_payload(payload: dict[str, Any]) -> Booking:
    """
    Validate a request body as a booking; a missing ID gets a generated `asset<millis>` one.
    Raises pydantic.ValidationError on bad field types.
    """

    if not any(payload.get(k) for k in _ID_KEYS):
        payload = {**payload, "bookingID": generate_asset_id()}
    return Booking.model_validate(payload)


def _format_arg(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def create_asset_args(booking: Booking) -> list[str]:
    # Positional order is the contract's, never the payload's key order.
    data = booking.model_dump(by_alias=True)
    return [_format_arg(data[name]) for name in CREATE_ASSET_FIELDS]


def _decode(result: bytes) -> Any:
    if not result:
        return None
    return json.loads(result)


class BookingLedgerService:
    def __init__(self, contract: Contract) -> None:
        self._contract = contract

    async def create_asset(self, booking: Booking) -> str:
        await self._contract.submit_transaction("CreateAsset", *create_asset_args(booking))
        return COMMITTED

    async def create_invoice(self, booking: Booking) -> str:
        await self._contract.submit_transaction(
            "CreateInvoice", booking.to_json_bytes().decode("utf-8")
        )
        return COMMITTED

    async def read_asset(self, asset_id: str) -> dict[str, Any]:
        return _decode(await self._contract.evaluate_transaction("ReadAsset", asset_id))

    async def list_assets(self) -> list[dict[str, Any]]:
        return _decode(await self._contract.evaluate_transaction("GetAllAssets")) or []


# --- Module Notes -----------------------------------------------------------
# CreateAsset arguments are strings; booleans use the ledger's lowercase
# true/false spelling.
