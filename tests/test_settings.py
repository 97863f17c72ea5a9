from __future__ import annotations

from booking_ledger.settings import Settings


def test_defaults(monkeypatch) -> None:
    for name in (
        "CHANNEL_NAME",
        "CHAINCODE_NAME",
        "BOOKING_CHANNEL_NAME",
        "BOOKING_CHAINCODE_NAME",
        "BOOKING_MSP_ID",
        "BOOKING_PEER_ENDPOINT",
        "BOOKING_GATEWAY_PEER",
    ):
        monkeypatch.delenv(name, raising=False)
    s = Settings()
    assert s.channel_name == "mychannel"
    assert s.chaincode_name == "basic"
    assert s.msp_id == "Org1MSP"
    assert s.peer_endpoint == "localhost:7051"
    assert s.gateway_peer == "peer0.org1.example.com"


def test_channel_and_chaincode_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("CHANNEL_NAME", "bookings")
    monkeypatch.setenv("CHAINCODE_NAME", "shipping")
    s = Settings()
    assert s.channel_name == "bookings"
    assert s.chaincode_name == "shipping"


def test_prefixed_env_is_accepted(monkeypatch) -> None:
    monkeypatch.delenv("CHANNEL_NAME", raising=False)
    monkeypatch.setenv("BOOKING_CHANNEL_NAME", "prefixed")
    assert Settings().channel_name == "prefixed"
