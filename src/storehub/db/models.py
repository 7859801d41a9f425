"""
storehub.db.models

Core persistence schema.

Responsibilities:
- Define ORM models for the tenant hierarchy:
  - Entity: the tenant
  - User: belongs to exactly one entity for its lifetime
  - Store: owned by one entity
  - Seller: owned by one store (transitively by one entity)
- Back the uniqueness rules with partial unique indexes over live rows only.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Enum, ForeignKey, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storehub.auth.models import UserRole
from storehub.db.base import Base, SoftDeleteMixin, TimestampMixin

# Shared by every partial unique index; a soft-deleted row frees its email/name.
_LIVE_ROWS = text("deleted_at IS NULL")


class Entity(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "entities"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    users: Mapped[list[User]] = relationship(back_populates="entity")
    stores: Mapped[list[Store]] = relationship(back_populates="entity")


class User(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    # Case-sensitive as stored.
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # Immutable after creation; no update path writes this column.
    entity_id: Mapped[int] = mapped_column(ForeignKey("entities.id"), nullable=False, index=True)
    role: Mapped[UserRole] = mapped_column(Enum(UserRole), nullable=False)

    # Single-use password reset: only the SHA-256 digest of the token is kept.
    reset_token_hash: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    reset_token_expires_at: Mapped[datetime | None] = mapped_column(nullable=True)

    entity: Mapped[Entity] = relationship(back_populates="users")

    __table_args__ = (
        Index(
            "uq_users_email_live",
            "email",
            unique=True,
            sqlite_where=_LIVE_ROWS,
            postgresql_where=_LIVE_ROWS,
        ),
    )


class Store(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "stores"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    entity_id: Mapped[int] = mapped_column(ForeignKey("entities.id"), nullable=False, index=True)

    entity: Mapped[Entity] = relationship(back_populates="stores")
    sellers: Mapped[list[Seller]] = relationship(back_populates="store")

    __table_args__ = (
        Index(
            "uq_stores_entity_name_live",
            "entity_id",
            "name",
            unique=True,
            sqlite_where=_LIVE_ROWS,
            postgresql_where=_LIVE_ROWS,
        ),
    )


class Seller(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "sellers"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    store_id: Mapped[int] = mapped_column(ForeignKey("stores.id"), nullable=False, index=True)

    store: Mapped[Store] = relationship(back_populates="sellers")

    __table_args__ = (
        Index(
            "uq_sellers_email_live",
            "email",
            unique=True,
            sqlite_where=_LIVE_ROWS,
            postgresql_where=_LIVE_ROWS,
        ),
    )


# --- Module Notes -----------------------------------------------------------
# The partial indexes are the real safety net for concurrent creates; the
# read-before-write checks in services only produce friendlier errors.
