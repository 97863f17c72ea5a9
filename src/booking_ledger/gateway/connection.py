"""
booking_ledger.gateway.connection

Secured channel to the gateway peer.

Responsibilities:
- Trust only the peer's TLS CA certificate.
- Override the TLS server name to the gateway peer's host name.
- POST signed envelopes with a per-call timeout.
"""

from __future__ import annotations

import ssl
from typing import Any

import httpx

from booking_ledger.gateway.errors import ConnectionSetupError
from booking_ledger.observability.middleware import REQUEST_ID_HEADER, current_request_id
from booking_ledger.settings import Settings
from booking_ledger.wire import SignedEnvelope


def _tls_context(settings: Settings) -> ssl.SSLContext:
    try:
        return ssl.create_default_context(cafile=str(settings.tls_cert_path))
    except (OSError, ssl.SSLError) as e:
        raise ConnectionSetupError(f"failed to load TLS CA certificate: {e}") from e


class PeerConnection:
    def __init__(self, *, client: httpx.AsyncClient, server_name: str | None) -> None:
        self._client = client
        self._server_name = server_name

    async def post(self, path: str, envelope: SignedEnvelope, *, timeout: float) -> httpx.Response:
        extensions: dict[str, Any] = {}
        if self._server_name:
            extensions["sni_hostname"] = self._server_name
        headers = {}
        if request_id := current_request_id():
            headers[REQUEST_ID_HEADER] = request_id
        return await self._client.post(
            path,
            json=envelope.model_dump(),
            headers=headers,
            timeout=timeout,
            extensions=extensions,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> PeerConnection:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()


def new_peer_connection(
    settings: Settings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> PeerConnection:
    """
    `transport` lets tests route calls in-process (httpx.ASGITransport) to the local peer.
    """

    verify: ssl.SSLContext | bool = False
    server_name = None
    if settings.peer_tls_enabled:
        verify = _tls_context(settings)
        server_name = settings.gateway_peer

    client = httpx.AsyncClient(
        base_url=settings.peer_base_url,
        verify=verify,
        transport=transport,
    )
    return PeerConnection(client=client, server_name=server_name)


# --- Module Notes -----------------------------------------------------------
# One PeerConnection per REST request; the httpx client is closed with it, so no
# pooled sockets outlive the request.
