"""
storehub.db.repositories.users

Repository for `User` rows (the credential store).

Responsibilities:
- Look users up by email/id/reset-token digest, live rows only by default.
- Create and patch users; `entity_id` has no update path.
- Soft-delete users.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storehub.auth.models import UserRole
from storehub.db.base import utcnow
from storehub.db.models import User
from storehub.db.repositories.common import flush_unique
from storehub.errors import EmailInUse, EmailTaken, NotFound


class UserRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_email(self, email: str, *, include_deleted: bool = False) -> User | None:
        stmt = select(User).where(User.email == email)
        if not include_deleted:
            stmt = stmt.where(User.live())
        # Several soft-deleted rows may share an email; prefer the newest.
        stmt = stmt.order_by(User.id.desc()).limit(1)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def find_by_id(self, user_id: int) -> User | None:
        stmt = select(User).where(User.id == user_id, User.live())
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def find_by_reset_token_hash(self, digest: str) -> User | None:
        stmt = select(User).where(User.reset_token_hash == digest, User.live())
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list_for_entity(self, entity_id: int) -> list[User]:
        stmt = select(User).where(User.entity_id == entity_id, User.live()).order_by(User.id)
        return list((await self._session.execute(stmt)).scalars().all())

    async def create(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        entity_id: int,
        role: UserRole,
    ) -> User:
        user = User(
            name=name,
            email=email,
            password_hash=password_hash,
            entity_id=entity_id,
            role=role,
        )
        self._session.add(user)
        await flush_unique(self._session, EmailTaken)
        return user

    async def update(
        self,
        user_id: int,
        *,
        name: str | None = None,
        email: str | None = None,
        password_hash: str | None = None,
        role: UserRole | None = None,
    ) -> User:
        user = await self._get_for_update(user_id)
        if name is not None:
            user.name = name
        if email is not None:
            user.email = email
        if password_hash is not None:
            user.password_hash = password_hash
        if role is not None:
            user.role = role
        user.updated_at = utcnow()
        await flush_unique(self._session, EmailInUse)
        return user

    async def set_reset_token(
        self, user_id: int, *, digest: str | None, expires_at: datetime | None
    ) -> None:
        # digest=None clears the token (consumed or superseded).
        user = await self._get_for_update(user_id)
        user.reset_token_hash = digest
        user.reset_token_expires_at = expires_at
        await self._session.flush()

    async def soft_delete(self, user_id: int) -> None:
        user = await self._get_for_update(user_id)
        user.deleted_at = utcnow()
        await self._session.flush()

    async def _get_for_update(self, user_id: int) -> User:
        stmt = select(User).where(User.id == user_id, User.live()).with_for_update()
        user = (await self._session.execute(stmt)).scalar_one_or_none()
        if user is None:
            raise NotFound("User not found")
        return user


# --- Module Notes -----------------------------------------------------------
# Email conflicts surface from the partial unique index via `flush_unique`.
