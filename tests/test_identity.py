"""
tests.test_identity

Loading pre-issued credentials and signing with them.
"""

from __future__ import annotations

import pytest
from cryptography.hazmat.primitives.asymmetric import ed25519, rsa

from booking_ledger.gateway import (
    CredentialError,
    load_certificate,
    load_private_key_sign,
    new_private_key_sign,
    new_x509_identity,
)
from booking_ledger.gateway.identity import certificate_subject, verify_signature


def test_default_paths_follow_test_network_layout(settings, crypto_material) -> None:
    assert settings.cert_path == (
        crypto_material.root / "users/User1@org1.example.com/msp/signcerts/cert.pem"
    )
    assert settings.key_path == crypto_material.root / "users/User1@org1.example.com/msp/keystore"
    assert settings.tls_cert_path == (
        crypto_material.root / "peers/peer0.org1.example.com/tls/ca.crt"
    )


def test_identity_serializes_msp_and_pem(settings, crypto_material) -> None:
    identity = new_x509_identity("Org1MSP", load_certificate(settings.cert_path))
    serialized = identity.serialize()

    assert serialized.msp_id == "Org1MSP"
    assert serialized.credentials.startswith("-----BEGIN CERTIFICATE-----")
    assert "User1@org1.example.com" in certificate_subject(identity.certificate)


def test_keystore_signer_verifies_against_certificate(settings, crypto_material) -> None:
    sign = load_private_key_sign(settings.key_path)
    signature = sign(b"proposal bytes")

    assert verify_signature(crypto_material.user_cert, b"proposal bytes", signature)
    assert not verify_signature(crypto_material.user_cert, b"tampered bytes", signature)
    assert not verify_signature(crypto_material.ca_cert, b"proposal bytes", signature)


def test_ed25519_keys_are_supported() -> None:
    key = ed25519.Ed25519PrivateKey.generate()
    signature = new_private_key_sign(key)(b"msg")
    key.public_key().verify(signature, b"msg")


def test_unsupported_key_type() -> None:
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    with pytest.raises(CredentialError, match="unsupported private key type"):
        new_private_key_sign(key)


def test_missing_and_malformed_material(tmp_path) -> None:
    with pytest.raises(CredentialError, match="failed to read certificate file"):
        load_certificate(tmp_path / "missing.pem")

    bad = tmp_path / "bad.pem"
    bad.write_text("not a certificate")
    with pytest.raises(CredentialError, match="failed to parse certificate PEM"):
        load_certificate(bad)

    with pytest.raises(CredentialError, match="failed to read private key directory"):
        load_private_key_sign(tmp_path / "no-keystore")

    empty = tmp_path / "keystore"
    empty.mkdir()
    with pytest.raises(CredentialError, match="no private key found"):
        load_private_key_sign(empty)


def test_empty_msp_id_rejected(settings) -> None:
    with pytest.raises(CredentialError):
        new_x509_identity("", load_certificate(settings.cert_path))
