from __future__ import annotations

from booking_ledger.observability.logging import _fingerprint_sensitive


def test_sensitive_fields_are_fingerprinted() -> None:
    pem = "-----BEGIN CERTIFICATE-----\nMIIB\n-----END CERTIFICATE-----\n"
    event = _fingerprint_sensitive(
        None,
        "info",
        {"event": "identity_loaded", "credentials": pem, "signature": b"\x30\x45", "msp_id": "Org1MSP"},
    )

    assert event["event"] == "identity_loaded"
    assert event["msp_id"] == "Org1MSP"
    assert event["credentials"].startswith("sha256:")
    assert event["signature"].startswith("sha256:")
    assert len(event["credentials"]) == len("sha256:") + 16


def test_fingerprint_is_stable() -> None:
    a = _fingerprint_sensitive(None, "info", {"creator_cert": "same"})
    b = _fingerprint_sensitive(None, "info", {"creator_cert": "same"})
    assert a == b
