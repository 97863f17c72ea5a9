"""
booking_ledger.wire

Message shapes exchanged between the gateway client and a ledger peer.

Responsibilities:
- Define signed envelopes and the proposal/transaction payloads they carry.
- Provide canonical bytes for signing and the transaction ID derivation.

Every request body is a `SignedEnvelope`: `payload` is the base64 of a JSON
document, `signature` is the creator's signature over those exact bytes.
"""

from __future__ import annotations

import base64
import hashlib
import json
from typing import Any, Literal

from pydantic import BaseModel, Field


class SerializedIdentity(BaseModel):
    msp_id: str
    # PEM-encoded X.509 certificate
    credentials: str


class SignedEnvelope(BaseModel):
    payload: str
    signature: str

    @classmethod
    def wrap(cls, payload: bytes, signature: bytes) -> SignedEnvelope:
        return cls(
            payload=base64.b64encode(payload).decode("ascii"),
            signature=base64.b64encode(signature).decode("ascii"),
        )

    def payload_bytes(self) -> bytes:
        return base64.b64decode(self.payload, validate=True)

    def signature_bytes(self) -> bytes:
        return base64.b64decode(self.signature, validate=True)


class ProposalPayload(BaseModel):
    kind: Literal["proposal"] = "proposal"
    channel: str
    chaincode: str
    transaction_name: str
    args: list[str] = Field(default_factory=list)
    tx_id: str
    nonce: str
    creator: SerializedIdentity
    timestamp: str


class TransactionPayload(BaseModel):
    # Used for submit and commit-status requests against an endorsed tx.
    kind: Literal["submit", "commit_status"]
    channel: str
    tx_id: str
    creator: SerializedIdentity
    timestamp: str


class EvaluateResponse(BaseModel):
    tx_id: str
    result: str = ""

    def result_bytes(self) -> bytes:
        return base64.b64decode(self.result)


class EndorseResponse(BaseModel):
    tx_id: str
    result: str = ""

    def result_bytes(self) -> bytes:
        return base64.b64decode(self.result)


class SubmitResponse(BaseModel):
    tx_id: str
    accepted: bool = True


class CommitStatusResponse(BaseModel):
    tx_id: str
    status: str
    block_number: int | None = None

    @property
    def successful(self) -> bool:
        return self.status == "VALID"


def canonical_bytes(model: BaseModel) -> bytes:
    data: dict[str, Any] = model.model_dump(mode="json")
    return json.dumps(data, sort_keys=True, separators=(",", ":")).encode("utf-8")


def compute_tx_id(nonce: bytes, creator: SerializedIdentity) -> str:
    # Transaction ID binds the nonce to the creator: sha256(nonce || creator).
    digest = hashlib.sha256()
    digest.update(nonce)
    digest.update(canonical_bytes(creator))
    return digest.hexdigest()


def encode_result(result: bytes) -> str:
    return base64.b64encode(result).decode("ascii")


# --- Module Notes -----------------------------------------------------------
# Signatures cover canonical_bytes(payload): sorted keys, compact separators.
# Any change to field names or JSON encoding invalidates existing signatures.
