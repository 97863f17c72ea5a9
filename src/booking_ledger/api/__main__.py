"""
booking_ledger.api.__main__

Entrypoint for running the REST gateway via `python -m booking_ledger.api`.
"""

from __future__ import annotations

import uvicorn

from booking_ledger.api.app import create_app
from booking_ledger.observability.logging import get_logger
from booking_ledger.settings import get_settings

log = get_logger(__name__)


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)
    log.info(
        "gateway_listening",
        host=settings.api_host,
        port=settings.api_port,
        peer_endpoint=settings.peer_endpoint,
        tls=settings.peer_tls_enabled,
    )

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
        access_log=False,  # RequestContextMiddleware logs `request_completed`
    )


if __name__ == "__main__":
    main()
