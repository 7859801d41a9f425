from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storehub.db.base import utcnow
from storehub.db.models import Entity


class EntityRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, name: str) -> Entity:
        entity = Entity(name=name)
        self._session.add(entity)
        await self._session.flush()
        return entity

    async def find_by_id(self, entity_id: int) -> Entity | None:
        stmt = select(Entity).where(Entity.id == entity_id, Entity.live())
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def find_by_name(self, name: str) -> Entity | None:
        stmt = select(Entity).where(Entity.name == name, Entity.live()).order_by(Entity.id).limit(1)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def find_first_live(self) -> Entity | None:
        # Oldest live entity; the open tenant for self-registration when none is configured.
        stmt = select(Entity).where(Entity.live()).order_by(Entity.id).limit(1)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def soft_delete(self, entity_id: int) -> bool:
        entity = await self.find_by_id(entity_id)
        if entity is None:
            return False
        entity.deleted_at = utcnow()
        await self._session.flush()
        return True
