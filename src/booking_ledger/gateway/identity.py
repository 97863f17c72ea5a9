"""
booking_ledger.gateway.identity

Client identity and signing from pre-issued crypto material.

Responsibilities:
- Load and validate PEM certificates (`load_certificate`).
- Build an `X509Identity` (MSP ID + certificate) for the gateway session.
- Build a signing function from a private key or a keystore directory.
- Verify signatures against a certificate (peer side).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from cryptography import x509
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519

from booking_ledger.wire import SerializedIdentity

Sign = Callable[[bytes], bytes]


class CredentialError(Exception):
    pass


@dataclass(frozen=True, slots=True)
class X509Identity:
    msp_id: str
    certificate: x509.Certificate

    @property
    def credentials(self) -> bytes:
        return self.certificate.public_bytes(serialization.Encoding.PEM)

    def serialize(self) -> SerializedIdentity:
        return SerializedIdentity(msp_id=self.msp_id, credentials=self.credentials.decode("ascii"))


def certificate_from_pem(data: bytes) -> x509.Certificate:
    try:
        return x509.load_pem_x509_certificate(data)
    except ValueError as e:
        raise CredentialError(f"failed to parse certificate PEM: {e}") from e


def load_certificate(path: Path) -> x509.Certificate:
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise CredentialError(f"failed to read certificate file: {e}") from e
    return certificate_from_pem(data)


def new_x509_identity(msp_id: str, certificate: x509.Certificate) -> X509Identity:
    if not msp_id:
        raise CredentialError("MSP ID must not be empty")
    return X509Identity(msp_id=msp_id, certificate=certificate)


def private_key_from_pem(data: bytes):
    try:
        return serialization.load_pem_private_key(data, password=None)
    except (ValueError, TypeError) as e:
        raise CredentialError(f"failed to parse private key PEM: {e}") from e


def new_private_key_sign(private_key) -> Sign:
    """
    ECDSA keys sign SHA-256 digests (DER signatures); Ed25519 keys sign the
    message directly. Other key types are rejected.
    """

    if isinstance(private_key, ec.EllipticCurvePrivateKey):

        def sign(message: bytes) -> bytes:
            return private_key.sign(message, ec.ECDSA(hashes.SHA256()))

        return sign

    if isinstance(private_key, ed25519.Ed25519PrivateKey):
        return private_key.sign

    raise CredentialError(f"unsupported private key type: {type(private_key).__name__}")


def load_private_key_sign(keystore: Path) -> Sign:
    # Fabric CAs write exactly one key per keystore; take the first entry by name.
    try:
        entries = sorted(p for p in Path(keystore).iterdir() if p.is_file())
    except OSError as e:
        raise CredentialError(f"failed to read private key directory: {e}") from e
    if not entries:
        raise CredentialError(f"no private key found in {keystore}")
    try:
        data = entries[0].read_bytes()
    except OSError as e:
        raise CredentialError(f"failed to read private key file: {e}") from e
    return new_private_key_sign(private_key_from_pem(data))


def verify_signature(certificate: x509.Certificate, message: bytes, signature: bytes) -> bool:
    public_key = certificate.public_key()
    try:
        if isinstance(public_key, ec.EllipticCurvePublicKey):
            public_key.verify(signature, message, ec.ECDSA(hashes.SHA256()))
        elif isinstance(public_key, ed25519.Ed25519PublicKey):
            public_key.verify(signature, message)
        else:
            return False
    except InvalidSignature:
        return False
    return True


def certificate_subject(certificate: x509.Certificate) -> str:
    return certificate.subject.rfc4514_string()


# --- Module Notes -----------------------------------------------------------
# The first keystore file by name is the signer; Fabric CA client keystores hold
# a single *_sk file.
