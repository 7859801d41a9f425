"""
storehub.services.user_service

Administrative user management within a tenant.

Responsibilities:
- Create users in a live entity with a hashed password.
- Read/list users, always alongside their (live) entity.
- Patch users without ever touching `entity_id`; soft-delete users.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from storehub.auth.models import UserRole
from storehub.auth.passwords import PasswordHasher
from storehub.db.models import Entity, User
from storehub.db.repositories.entities import EntityRepo
from storehub.db.repositories.users import UserRepo
from storehub.errors import (
    EmailInUse,
    EmailTaken,
    EntityImmutableFieldChange,
    NoFieldsToUpdate,
    NotFound,
)
from storehub.observability.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class UserRecord:
    id: int
    name: str
    email: str
    role: UserRole
    entity_id: int
    entity_name: str
    created_at: datetime
    updated_at: datetime | None


def _record(user: User, entity: Entity) -> UserRecord:
    return UserRecord(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        entity_id=user.entity_id,
        entity_name=entity.name,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


class UserService:
    def __init__(self, *, session: AsyncSession, hasher: PasswordHasher) -> None:
        self._session = session
        self._hasher = hasher
        self._users = UserRepo(session)
        self._entities = EntityRepo(session)

    async def create_user(
        self,
        *,
        name: str,
        email: str,
        password: str,
        entity_id: int,
        role: UserRole,
    ) -> UserRecord:
        entity = await self._require_entity(entity_id)
        if await self._users.find_by_email(email) is not None:
            raise EmailTaken()
        user = await self._users.create(
            name=name,
            email=email,
            password_hash=self._hasher.hash(password),
            entity_id=entity.id,
            role=role,
        )
        await self._session.commit()
        log.info("user_created", user_id=user.id, entity_id=entity.id, role=role.value)
        return _record(user, entity)

    async def get_user(self, user_id: int) -> UserRecord | None:
        user = await self._users.find_by_id(user_id)
        if user is None:
            return None
        entity = await self._entities.find_by_id(user.entity_id)
        # A user under a soft-deleted entity is not reachable.
        return _record(user, entity) if entity is not None else None

    async def list_for_entity(self, entity_id: int) -> list[UserRecord]:
        entity = await self._require_entity(entity_id)
        return [_record(u, entity) for u in await self._users.list_for_entity(entity.id)]

    async def update_user(
        self,
        user_id: int,
        *,
        name: str | None = None,
        email: str | None = None,
        password: str | None = None,
        role: UserRole | None = None,
        entity_id: int | None = None,
    ) -> UserRecord:
        if entity_id is not None:
            raise EntityImmutableFieldChange()
        if name is None and email is None and password is None and role is None:
            raise NoFieldsToUpdate()

        current = await self.get_user(user_id)
        if current is None:
            raise NotFound("User not found")
        if email is not None:
            holder = await self._users.find_by_email(email)
            if holder is not None and holder.id != user_id:
                raise EmailInUse()

        user = await self._users.update(
            user_id,
            name=name,
            email=email,
            password_hash=self._hasher.hash(password) if password is not None else None,
            role=role,
        )
        await self._session.commit()
        log.info("user_updated", user_id=user_id)
        return UserRecord(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            entity_id=user.entity_id,
            entity_name=current.entity_name,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    async def delete_user(self, user_id: int) -> None:
        if await self.get_user(user_id) is None:
            raise NotFound("User not found")
        await self._users.soft_delete(user_id)
        await self._session.commit()
        log.info("user_deleted", user_id=user_id)

    async def _require_entity(self, entity_id: int) -> Entity:
        entity = await self._entities.find_by_id(entity_id)
        if entity is None:
            raise NotFound("Entity not found")
        return entity
