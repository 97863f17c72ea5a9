"""
booking_ledger.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`): the client identity and key load from disk.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from booking_ledger.api.deps import settings_dep
from booking_ledger.gateway import CredentialError, load_certificate, load_private_key_sign
from booking_ledger.settings import Settings

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(settings: Settings = Depends(settings_dep)):
    try:
        load_certificate(settings.cert_path)
        load_private_key_sign(settings.key_path)
    except CredentialError as e:
        return JSONResponse(
            status_code=HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable", "error": str(e)},
        )
    return {"status": "ready"}


# --- Module Notes -----------------------------------------------------------
# /readyz checks local credentials only; it does not call the peer.
