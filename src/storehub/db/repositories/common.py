"""
storehub.db.repositories.common

Helpers shared by repositories.

Responsibilities:
- Flush pending writes and translate unique-index violations into the
  caller's domain conflict error.
"""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from storehub.errors import ConflictError


async def flush_unique(session: AsyncSession, conflict: type[ConflictError]) -> None:
    try:
        await session.flush()
    except IntegrityError as e:
        # A failed flush leaves the transaction unusable; discard it before reporting.
        await session.rollback()
        if "unique" in str(e.orig).lower():
            raise conflict() from e
        raise
