"""
booking_ledger.contract.booking

Booking chaincode: create/read/list shipping bookings in world state.

Responsibilities:
- `CreateAsset` from positional fields and `CreateInvoice` from a JSON document.
- Reject duplicate booking IDs and report missing ones.
- Range-scan the namespace for `GetAllAssets`.
"""

from __future__ import annotations

import json

from pydantic import ValidationError

from booking_ledger.contract.context import TransactionContext
from booking_ledger.contract.errors import ArgumentError, AssetExistsError, AssetNotFoundError
from booking_ledger.contract.models import CREATE_ASSET_FIELDS, Booking
from booking_ledger.contract.runtime import transaction
from booking_ledger.observability.logging import get_logger

log = get_logger(__name__)


def _describe(e: ValidationError) -> str:
    parts = []
    for err in e.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "<root>"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


class BookingContract:
    """
    Shipping booking smart contract.

    Every record is stored as canonical `Booking` JSON under its booking ID, so
    flat assets and invoice documents share one key space.
    """

    @transaction("CreateAsset")
    async def create_asset(self, ctx: TransactionContext, *args: str) -> None:
        if len(args) != len(CREATE_ASSET_FIELDS):
            raise ArgumentError(
                f"incorrect number of params. Expected {len(CREATE_ASSET_FIELDS)}, "
                f"received {len(args)}"
            )
        try:
            booking = Booking.model_validate(dict(zip(CREATE_ASSET_FIELDS, args)))
        except ValidationError as e:
            raise ArgumentError(f"invalid asset arguments: {_describe(e)}") from e
        await self._put_new(ctx, booking)

    @transaction("CreateInvoice")
    async def create_invoice(self, ctx: TransactionContext, invoice_json: str) -> None:
        try:
            booking = Booking.model_validate(json.loads(invoice_json))
        except json.JSONDecodeError as e:
            raise ArgumentError(f"failed to unmarshal invoice JSON: {e}") from e
        except ValidationError as e:
            raise ArgumentError(f"failed to unmarshal invoice JSON: {_describe(e)}") from e
        await self._put_new(ctx, booking)

    @transaction("ReadAsset")
    async def read_asset(self, ctx: TransactionContext, booking_id: str) -> Booking:
        raw = await ctx.stub.get_state(booking_id)
        if raw is None:
            raise AssetNotFoundError(booking_id)
        return Booking.model_validate_json(raw)

    @transaction("GetAllAssets")
    async def get_all_assets(self, ctx: TransactionContext) -> list[Booking]:
        # Empty bounds: the whole namespace.
        return [
            Booking.model_validate_json(value)
            async for _, value in ctx.stub.get_state_by_range("", "")
        ]

    @transaction("AssetExists")
    async def asset_exists(self, ctx: TransactionContext, booking_id: str) -> bool:
        return await ctx.stub.get_state(booking_id) is not None

    async def _put_new(self, ctx: TransactionContext, booking: Booking) -> None:
        if await self.asset_exists(ctx, booking.booking_id):
            raise AssetExistsError(booking.booking_id)
        await ctx.stub.put_state(booking.booking_id, booking.to_json_bytes())
        log.info(
            "booking_written",
            booking_id=booking.booking_id,
            tx_id=ctx.tx_id,
            msp_id=ctx.client_identity.msp_id,
        )


# --- Module Notes -----------------------------------------------------------
# Reads only see committed state; a write is visible once its transaction commits.
