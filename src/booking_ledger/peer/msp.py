"""
booking_ledger.peer.msp

Creator verification for signed envelopes.

Responsibilities:
- Enforce the allowed MSP IDs.
- Optionally require creator certificates issued by the MSP CA.
- Verify the envelope signature against the creator certificate.
"""

from __future__ import annotations

from cryptography import x509
from cryptography.exceptions import InvalidSignature

from booking_ledger.contract.context import ClientIdentity
from booking_ledger.gateway.identity import (
    CredentialError,
    certificate_from_pem,
    certificate_subject,
    load_certificate,
    verify_signature,
)
from booking_ledger.peer.errors import AccessDeniedError, BadRequestError, InvalidSignatureError
from booking_ledger.settings import Settings
from booking_ledger.wire import SerializedIdentity


class MspVerifier:
    def __init__(self, *, allowed_msp_ids: list[str], ca_certificate: x509.Certificate | None) -> None:
        self._allowed = frozenset(allowed_msp_ids)
        self._ca = ca_certificate

    @classmethod
    def from_settings(cls, settings: Settings) -> MspVerifier:
        ca = None
        if settings.peer_msp_ca_cert_path is not None:
            ca = load_certificate(settings.peer_msp_ca_cert_path)
        return cls(allowed_msp_ids=settings.peer_allowed_msp_ids, ca_certificate=ca)

    def verify(
        self, payload: bytes, signature: bytes, creator: SerializedIdentity
    ) -> ClientIdentity:
        if creator.msp_id not in self._allowed:
            raise AccessDeniedError(f"creator MSP {creator.msp_id} is not a member of this channel")

        try:
            cert = certificate_from_pem(creator.credentials.encode("utf-8"))
        except CredentialError as e:
            raise BadRequestError(str(e)) from e

        if self._ca is not None:
            try:
                cert.verify_directly_issued_by(self._ca)
            except (ValueError, TypeError, InvalidSignature) as e:
                raise AccessDeniedError(f"creator certificate not issued by MSP CA: {e}") from e

        if not verify_signature(cert, payload, signature):
            raise InvalidSignatureError("signature verification failed")

        return ClientIdentity(msp_id=creator.msp_id, subject=certificate_subject(cert))


# --- Module Notes -----------------------------------------------------------
# Only certificates issued directly by the MSP CA are accepted; intermediate
# CAs are not configured for the local peer.
