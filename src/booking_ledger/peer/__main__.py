"""
booking_ledger.peer.__main__

Entrypoint for running the local peer via `python -m booking_ledger.peer`.
Serves TLS when both `BOOKING_PEER_TLS_CERT_FILE` and `BOOKING_PEER_TLS_KEY_FILE` are set.
"""

from __future__ import annotations

import uvicorn

from booking_ledger.peer.app import create_peer_app
from booking_ledger.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_peer_app(settings=settings)

    tls: dict[str, str] = {}
    if settings.peer_tls_cert_file is not None and settings.peer_tls_key_file is not None:
        tls = {
            "ssl_certfile": str(settings.peer_tls_cert_file),
            "ssl_keyfile": str(settings.peer_tls_key_file),
        }

    uvicorn.run(
        app,
        host=settings.peer_host,
        port=settings.peer_port,
        log_config=None,  # structlog
        access_log=False,  # RequestContextMiddleware logs `request_completed`
        **tls,
    )


if __name__ == "__main__":
    main()


# --- Module Notes -----------------------------------------------------------
# The gateway expects TLS by default (BOOKING_PEER_TLS_ENABLED); serve the peer
# with a certificate for BOOKING_GATEWAY_PEER or disable TLS on both sides.
