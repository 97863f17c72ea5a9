"""
booking_ledger.peer.routers.ledger

Ledger endpoints called by the gateway client.

Responsibilities:
- `/v1/evaluate`, `/v1/endorse`, `/v1/submit`, `/v1/commit-status`.
- Accept signed envelopes only; all checks live in `PeerService`.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from booking_ledger.peer.deps import peer_service
from booking_ledger.peer.service import PeerService
from booking_ledger.wire import (
    CommitStatusResponse,
    EndorseResponse,
    EvaluateResponse,
    SignedEnvelope,
    SubmitResponse,
)

router = APIRouter(prefix="/v1", tags=["ledger"])


@router.post("/evaluate", response_model=EvaluateResponse)
async def evaluate(
    envelope: SignedEnvelope, svc: PeerService = Depends(peer_service)
) -> EvaluateResponse:
    return await svc.evaluate(envelope)


@router.post("/endorse", response_model=EndorseResponse)
async def endorse(
    envelope: SignedEnvelope, svc: PeerService = Depends(peer_service)
) -> EndorseResponse:
    return await svc.endorse(envelope)


@router.post("/submit", response_model=SubmitResponse)
async def submit(
    envelope: SignedEnvelope, svc: PeerService = Depends(peer_service)
) -> SubmitResponse:
    return await svc.submit(envelope)


@router.post("/commit-status", response_model=CommitStatusResponse)
async def commit_status(
    envelope: SignedEnvelope, svc: PeerService = Depends(peer_service)
) -> CommitStatusResponse:
    return await svc.commit_status(envelope)


# --- Module Notes -----------------------------------------------------------
# Error bodies use FastAPI's {"detail": ...} shape; the gateway client reads it.
