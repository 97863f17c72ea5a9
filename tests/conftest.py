"""
tests.conftest

Shared fixtures: generated crypto material in the Fabric test-network layout,
a running local peer, and gateway/REST clients wired to it in-process.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from booking_ledger.api.app import create_app
from booking_ledger.gateway import (
    Gateway,
    load_certificate,
    load_private_key_sign,
    new_peer_connection,
    new_x509_identity,
)
from booking_ledger.peer.app import create_peer_app
from booking_ledger.settings import Settings


def _name(common_name: str) -> x509.Name:
    return x509.Name(
        [
            x509.NameAttribute(NameOID.ORGANIZATION_NAME, "org1.example.com"),
            x509.NameAttribute(NameOID.COMMON_NAME, common_name),
        ]
    )


def issue_certificate(
    common_name: str,
    key: ec.EllipticCurvePrivateKey,
    *,
    issuer: x509.Name | None = None,
    issuer_key: ec.EllipticCurvePrivateKey | None = None,
    ca: bool = False,
    dns_names: tuple[str, ...] = (),
) -> x509.Certificate:
    now = datetime.now(tz=UTC)
    subject = _name(common_name)
    signing_key = issuer_key or key
    builder = (
        x509.CertificateBuilder()
        .subject_name(subject)
        .issuer_name(issuer or subject)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(minutes=5))
        .not_valid_after(now + timedelta(days=1))
        .add_extension(x509.BasicConstraints(ca=ca, path_length=None), critical=True)
        .add_extension(x509.SubjectKeyIdentifier.from_public_key(key.public_key()), critical=False)
        .add_extension(
            x509.AuthorityKeyIdentifier.from_issuer_public_key(signing_key.public_key()),
            critical=False,
        )
    )
    if ca:
        builder = builder.add_extension(
            x509.KeyUsage(
                digital_signature=True,
                content_commitment=False,
                key_encipherment=False,
                data_encipherment=False,
                key_agreement=False,
                key_cert_sign=True,
                crl_sign=True,
                encipher_only=False,
                decipher_only=False,
            ),
            critical=True,
        )
    if dns_names:
        builder = builder.add_extension(
            x509.SubjectAlternativeName([x509.DNSName(n) for n in dns_names]), critical=False
        )
    return builder.sign(signing_key, hashes.SHA256())


def key_pem(key: ec.EllipticCurvePrivateKey) -> bytes:
    return key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    )


def cert_pem(cert: x509.Certificate) -> bytes:
    return cert.public_bytes(serialization.Encoding.PEM)


@dataclass
class CryptoMaterial:
    root: Path
    ca_key: ec.EllipticCurvePrivateKey
    ca_cert: x509.Certificate
    ca_cert_path: Path
    user_key: ec.EllipticCurvePrivateKey
    user_cert: x509.Certificate


@pytest.fixture
def crypto_material(tmp_path: Path) -> CryptoMaterial:
    root = tmp_path / "org1.example.com"
    msp = root / "users/User1@org1.example.com/msp"
    (msp / "signcerts").mkdir(parents=True)
    (msp / "keystore").mkdir(parents=True)
    tls_dir = root / "peers/peer0.org1.example.com/tls"
    tls_dir.mkdir(parents=True)

    ca_key = ec.generate_private_key(ec.SECP256R1())
    ca_cert = issue_certificate("ca.org1.example.com", ca_key, ca=True)
    user_key = ec.generate_private_key(ec.SECP256R1())
    user_cert = issue_certificate(
        "User1@org1.example.com", user_key, issuer=ca_cert.subject, issuer_key=ca_key
    )

    ca_cert_path = root / "ca.pem"
    ca_cert_path.write_bytes(cert_pem(ca_cert))
    (tls_dir / "ca.crt").write_bytes(cert_pem(ca_cert))
    (msp / "signcerts/cert.pem").write_bytes(cert_pem(user_cert))
    (msp / "keystore/priv_sk").write_bytes(key_pem(user_key))

    return CryptoMaterial(
        root=root,
        ca_key=ca_key,
        ca_cert=ca_cert,
        ca_cert_path=ca_cert_path,
        user_key=user_key,
        user_cert=user_cert,
    )


@pytest.fixture
def settings(tmp_path: Path, crypto_material: CryptoMaterial) -> Settings:
    return Settings(
        env="test",
        crypto_path=crypto_material.root,
        peer_database_url=f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}",
        peer_msp_ca_cert_path=crypto_material.ca_cert_path,
        channel_name="mychannel",
        chaincode_name="basic",
    )


@pytest_asyncio.fixture
async def peer_app(settings: Settings):
    app = create_peer_app(settings=settings)
    # httpx ASGITransport does not run lifespan; drive it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def peer_client(peer_app):
    transport = httpx.ASGITransport(app=peer_app)
    async with httpx.AsyncClient(transport=transport, base_url="https://peer") as client:
        yield client


@pytest_asyncio.fixture
async def gateway(settings: Settings, peer_app):
    identity = new_x509_identity(settings.msp_id, load_certificate(settings.cert_path))
    sign = load_private_key_sign(settings.key_path)
    connection = new_peer_connection(settings, transport=httpx.ASGITransport(app=peer_app))
    async with connection:
        async with Gateway.connect(identity, sign=sign, connection=connection) as gw:
            yield gw


@pytest.fixture
def contract(settings: Settings, gateway: Gateway):
    return gateway.get_network(settings.channel_name).get_contract(settings.chaincode_name)


@pytest_asyncio.fixture
async def api_client(settings: Settings, peer_app):
    app = create_app(settings=settings, peer_transport=httpx.ASGITransport(app=peer_app))
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
