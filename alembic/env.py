"""
alembic.env

Alembic migration environment for the peer's world-state database.

Notes:
- Executed by Alembic, not imported by the peer runtime.
- The async `+aiosqlite` driver is swapped for the sync sqlite driver.
"""

from __future__ import annotations

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from booking_ledger.peer.db import models  # noqa: F401  # register tables on Base.metadata
from booking_ledger.peer.db.base import Base
from booking_ledger.settings import Settings

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

_SYNC_DRIVERS = {"+aiosqlite": ""}


def _get_database_url() -> str:
    url = os.environ.get("BOOKING_PEER_DATABASE_URL") or Settings().peer_database_url
    for async_driver, sync_driver in _SYNC_DRIVERS.items():
        url = url.replace(async_driver, sync_driver)
    return url


def run_migrations_offline() -> None:
    context.configure(
        url=_get_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    configuration = config.get_section(config.config_ini_section) or {}
    configuration["sqlalchemy.url"] = _get_database_url()
    connectable = engine_from_config(configuration, prefix="sqlalchemy.", poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
