"""
storehub.db.base

SQLAlchemy declarative base and shared column mixins.

Responsibilities:
- Provide a shared DeclarativeBase for all ORM models.
- Provide timestamp and soft-delete columns, plus the single liveness
  predicate every repository filters on.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import ColumnElement
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    # Persist naive UTC timestamps; SQLite drops tzinfo anyway.
    return datetime.now(tz=UTC).replace(tzinfo=None)


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)
    updated_at: Mapped[datetime | None] = mapped_column(nullable=True, onupdate=utcnow)


class SoftDeleteMixin:
    # A row is "live" while deleted_at is NULL; rows are never hard-deleted.
    deleted_at: Mapped[datetime | None] = mapped_column(nullable=True, default=None)

    @classmethod
    def live(cls) -> ColumnElement[bool]:
        return cls.deleted_at.is_(None)


# --- Module Notes -----------------------------------------------------------
# All ORM models should inherit from `Base` so Alembic and metadata discovery work.
# Repositories must filter with `Model.live()` rather than touching deleted_at.
