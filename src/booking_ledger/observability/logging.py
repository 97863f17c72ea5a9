"""
booking_ledger.observability.logging

Structured logging shared by the REST gateway and the local peer.

Responsibilities:
- Configure `structlog` (JSON lines, or a console renderer in dev).
- Keep key and certificate material out of log lines.
- Provide a small wrapper for obtaining bound loggers.
"""

from __future__ import annotations

import hashlib
import logging
import sys
from typing import Any

import structlog

# Fields that may carry PEM blocks or raw signatures.
_SENSITIVE_FIELDS = frozenset({"credentials", "creator_cert", "signature", "private_key"})

# Chatty client/driver loggers; WARNING unless running at DEBUG.
_NOISY_LOGGERS = ("httpx", "httpcore", "aiosqlite", "sqlalchemy.engine")


def configure_logging(*, service_name: str, level: str, json_logs: bool = True) -> None:
    """
    `service` is stamped on every event so gateway and peer lines can be told apart
    when both run in one process (tests, demos).
    """

    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_service_name(service_name),
            _fingerprint_sensitive,
            structlog.processors.dict_tracebacks,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _add_service_name(service_name: str):
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def _fingerprint_sensitive(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for key in _SENSITIVE_FIELDS.intersection(event_dict):
        value = event_dict[key]
        raw = value if isinstance(value, bytes) else str(value).encode("utf-8")
        event_dict[key] = f"sha256:{hashlib.sha256(raw).hexdigest()[:16]}"
    return event_dict


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# Request-scoped metadata is bound via contextvars in `observability.middleware`;
# the gateway forwards the bound request id to the peer as `x-request-id`.
