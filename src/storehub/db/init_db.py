"""
storehub.db.init_db

Schema bootstrap without migrations (dev, test, seed script).

Responsibilities:
- Create tables (including the partial unique indexes) for local development,
  tests and the seed script.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from storehub.db import models  # noqa: F401  # ensure models are registered on Base.metadata
from storehub.db.base import Base


async def init_db(engine: AsyncEngine) -> None:
    """
    Create tables if they don't exist. Production relies on Alembic migrations.
    """

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# --- Module Notes -----------------------------------------------------------
# Not used for prod; deployments run `alembic upgrade head`.
