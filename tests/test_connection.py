"""
tests.test_connection

Gateway connection over real TLS: the peer serves a certificate for the gateway
peer host name and is dialled by IP address.
"""

from __future__ import annotations

import asyncio
import socket

import pytest
import pytest_asyncio
import uvicorn
from cryptography.hazmat.primitives.asymmetric import ec

from booking_ledger.gateway import (
    ConnectionSetupError,
    EvaluateError,
    Gateway,
    load_certificate,
    load_private_key_sign,
    new_peer_connection,
    new_x509_identity,
)
from booking_ledger.settings import Settings

from conftest import cert_pem, issue_certificate, key_pem


@pytest_asyncio.fixture
async def tls_peer(tmp_path, crypto_material, peer_app):
    server_key = ec.generate_private_key(ec.SECP256R1())
    server_cert = issue_certificate(
        "peer0.org1.example.com",
        server_key,
        issuer=crypto_material.ca_cert.subject,
        issuer_key=crypto_material.ca_key,
        dns_names=("peer0.org1.example.com",),
    )
    cert_file = tmp_path / "server.crt"
    key_file = tmp_path / "server.key"
    cert_file.write_bytes(cert_pem(server_cert))
    key_file.write_bytes(key_pem(server_key))

    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]

    config = uvicorn.Config(
        peer_app,
        ssl_certfile=str(cert_file),
        ssl_keyfile=str(key_file),
        lifespan="off",
        log_config=None,
        access_log=False,
    )
    server = uvicorn.Server(config)
    task = asyncio.create_task(server.serve(sockets=[sock]))
    async with asyncio.timeout(10):
        while not server.started:
            assert not task.done(), "peer server exited during startup"
            await asyncio.sleep(0.05)

    yield f"127.0.0.1:{port}"

    server.should_exit = True
    await task
    sock.close()


async def _evaluate(settings: Settings) -> bytes:
    identity = new_x509_identity(settings.msp_id, load_certificate(settings.cert_path))
    sign = load_private_key_sign(settings.key_path)
    async with new_peer_connection(settings) as connection:
        async with Gateway.connect(identity, sign=sign, connection=connection) as gateway:
            contract = gateway.get_network(settings.channel_name).get_contract(
                settings.chaincode_name
            )
            return await contract.evaluate_transaction("GetAllAssets")


@pytest.mark.asyncio
async def test_tls_with_server_name_override(settings, tls_peer) -> None:
    tls_settings = settings.model_copy(
        update={"peer_endpoint": tls_peer, "peer_tls_enabled": True}
    )
    assert await _evaluate(tls_settings) == b"[]"


@pytest.mark.asyncio
async def test_tls_rejects_wrong_server_name(settings, tls_peer) -> None:
    tls_settings = settings.model_copy(
        update={
            "peer_endpoint": tls_peer,
            "peer_tls_enabled": True,
            "gateway_peer": "peer1.org1.example.com",
        }
    )
    with pytest.raises(EvaluateError, match="/v1/evaluate failed"):
        await _evaluate(tls_settings)


@pytest.mark.asyncio
async def test_tls_rejects_untrusted_ca(tmp_path, settings, tls_peer) -> None:
    other_key = ec.generate_private_key(ec.SECP256R1())
    other_ca = tmp_path / "other-ca.crt"
    other_ca.write_bytes(cert_pem(issue_certificate("ca.org2.example.com", other_key, ca=True)))

    tls_settings = settings.model_copy(
        update={"peer_endpoint": tls_peer, "peer_tls_enabled": True, "tls_cert_path": other_ca}
    )
    with pytest.raises(EvaluateError, match="/v1/evaluate failed"):
        await _evaluate(tls_settings)


def test_missing_tls_ca_fails_connection_setup(tmp_path, settings) -> None:
    broken = settings.model_copy(update={"tls_cert_path": tmp_path / "absent.crt"})
    with pytest.raises(ConnectionSetupError, match="failed to load TLS CA certificate"):
        new_peer_connection(broken)
