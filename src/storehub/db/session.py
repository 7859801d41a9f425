"""
storehub.db.session

Engine and session factory.

Responsibilities:
- Build one `AsyncEngine` per process from `Settings.database_url`.
- Turn on SQLite foreign-key enforcement (off by default per connection).
- Hand out `AsyncSession`s; request code gets them through
  `storehub.api.deps.db_session`, scripts through `session_scope`.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from storehub.settings import Settings

SessionFactory = async_sessionmaker[AsyncSession]


def _sqlite_pragmas(dbapi_connection, _record) -> None:
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()


def create_engine(settings: Settings) -> AsyncEngine:
    engine = create_async_engine(settings.database_url, pool_pre_ping=True)
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _sqlite_pragmas)
    return engine


def create_sessionmaker(engine: AsyncEngine) -> SessionFactory:
    # Objects stay readable after commit; services return them to routers.
    return async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)


@asynccontextmanager
async def session_scope(factory: SessionFactory) -> AsyncIterator[AsyncSession]:
    """Session for scripts. Anything uncommitted when the block fails is rolled back."""

    async with factory() as session:
        try:
            yield session
        except BaseException:
            await session.rollback()
            raise


# --- Module Notes -----------------------------------------------------------
# Nothing here commits. The service layer decides when a unit of work is done.
