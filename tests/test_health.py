from __future__ import annotations

import pytest


@pytest.mark.asyncio
async def test_gateway_health(api_client) -> None:
    r = await api_client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}

    r = await api_client.get("/readyz")
    assert r.status_code == 200
    assert r.json() == {"status": "ready"}


@pytest.mark.asyncio
async def test_peer_health(peer_client) -> None:
    r = await peer_client.get("/healthz")
    assert r.status_code == 200

    r = await peer_client.get("/readyz")
    assert r.status_code == 200
    assert r.json()["status"] == "ready"
