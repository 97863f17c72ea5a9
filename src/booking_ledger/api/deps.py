"""
booking_ledger.api.deps

FastAPI dependency wiring for the REST gateway.

Responsibilities:
- Provide the app's settings.
- Open a ledger connection + gateway session per request and close both after it.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request

from booking_ledger.api.errors import LedgerUnavailableError
from booking_ledger.gateway import (
    ConnectionSetupError,
    Contract,
    CredentialError,
    Gateway,
    GatewayTimeouts,
    load_certificate,
    load_private_key_sign,
    new_peer_connection,
    new_x509_identity,
)
from booking_ledger.services.booking_service import BookingLedgerService
from booking_ledger.settings import Settings


def settings_dep(request: Request) -> Settings:
    # Settings passed to `create_app` win over the env-cached instance.
    return request.app.state.settings  # type: ignore[attr-defined]


async def ledger_contract(
    request: Request,
    settings: Settings = Depends(settings_dep),
) -> AsyncIterator[Contract]:
    try:
        identity = new_x509_identity(settings.msp_id, load_certificate(settings.cert_path))
        sign = load_private_key_sign(settings.key_path)
        connection = new_peer_connection(settings, transport=request.app.state.peer_transport)
    except (CredentialError, ConnectionSetupError) as e:
        raise LedgerUnavailableError(str(e)) from e

    async with connection:
        async with Gateway.connect(
            identity,
            sign=sign,
            connection=connection,
            timeouts=GatewayTimeouts.from_settings(settings),
        ) as gateway:
            network = gateway.get_network(settings.channel_name)
            yield network.get_contract(settings.chaincode_name)


def booking_service(contract: Contract = Depends(ledger_contract)) -> BookingLedgerService:
    return BookingLedgerService(contract)


# --- Module Notes -----------------------------------------------------------
# Connection and gateway are opened per request and torn down after the response;
# no pooling.
