"""
booking_ledger.api.routers.assets

Public booking endpoints.

Responsibilities:
- `POST /assets` (CreateAsset), `POST /invoices` (CreateInvoice).
- `GET /assets` (GetAllAssets), `GET /assets/{asset_id}` (ReadAsset).
- Wrap results as `{"result": ...}` and failures as `{"error": "..."}`.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR

from booking_ledger.api.deps import booking_service
from booking_ledger.contract.models import Booking
from booking_ledger.gateway.errors import GatewayError
from booking_ledger.observability.logging import get_logger
from booking_ledger.services.booking_service import BookingLedgerService, booking_from_payload

log = get_logger(__name__)

router = APIRouter(tags=["assets"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _booking_from_request(request: Request) -> Booking | JSONResponse:
    try:
        payload = await request.json()
    except ValueError:
        return _error(HTTP_400_BAD_REQUEST, "Invalid request format")
    if not isinstance(payload, dict):
        return _error(HTTP_400_BAD_REQUEST, "Invalid request format")
    try:
        return booking_from_payload(payload)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        return _error(HTTP_400_BAD_REQUEST, f"Invalid request format: {fields}")


@router.post("/assets")
async def create_asset(
    request: Request,
    svc: BookingLedgerService = Depends(booking_service),
) -> Any:
    booking = await _booking_from_request(request)
    if isinstance(booking, JSONResponse):
        return booking
    try:
        result = await svc.create_asset(booking)
    except GatewayError as e:
        log.warning("create_asset_failed", booking_id=booking.booking_id, tx_id=e.tx_id, error=str(e))
        return _error(HTTP_500_INTERNAL_SERVER_ERROR, f"Error creating asset: {e}")
    return {"result": result}


@router.post("/invoices")
async def create_invoice(
    request: Request,
    svc: BookingLedgerService = Depends(booking_service),
) -> Any:
    booking = await _booking_from_request(request)
    if isinstance(booking, JSONResponse):
        return booking
    try:
        result = await svc.create_invoice(booking)
    except GatewayError as e:
        log.warning("create_invoice_failed", booking_id=booking.booking_id, tx_id=e.tx_id, error=str(e))
        return _error(HTTP_500_INTERNAL_SERVER_ERROR, f"Error creating invoice: {e}")
    return {"result": result}


@router.get("/assets")
async def get_all_assets(svc: BookingLedgerService = Depends(booking_service)) -> Any:
    try:
        result = await svc.list_assets()
    except GatewayError as e:
        return _error(HTTP_500_INTERNAL_SERVER_ERROR, f"Error getting all assets: {e}")
    return {"result": result}


@router.get("/assets/{asset_id}")
async def read_asset(
    asset_id: str,
    svc: BookingLedgerService = Depends(booking_service),
) -> Any:
    try:
        result = await svc.read_asset(asset_id)
    except GatewayError as e:
        return _error(HTTP_500_INTERNAL_SERVER_ERROR, f"Error reading asset: {e}")
    return {"result": result}


# --- Module Notes -----------------------------------------------------------
# Malformed bodies answer 400 {"error": ...}; FastAPI request validation (422)
# never runs on these routes.
