"""
alembic.env

Migration environment for storehub.

Migrations run on the same async driver the service uses (aiosqlite by
default): Alembic's synchronous migration context is driven through
`AsyncConnection.run_sync`. The database URL comes from `STOREHUB_DATABASE_URL`
via `Settings`, never from alembic.ini.
"""

from __future__ import annotations

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection

from storehub.db import models  # noqa: F401  # registers tables and partial indexes on Base.metadata
from storehub.db.base import Base
from storehub.db.session import create_engine
from storehub.settings import Settings

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata
settings = Settings()


def _configure(**kwargs) -> None:
    # Batch mode: SQLite cannot ALTER most constraints in place.
    context.configure(target_metadata=target_metadata, render_as_batch=True, **kwargs)


def run_migrations_offline() -> None:
    _configure(
        url=settings.database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _run_sync(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    engine = create_engine(settings)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_run_sync)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
