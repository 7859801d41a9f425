"""
storehub.services.store_service

Store lifecycle within an entity.

Responsibilities:
- Create stores under a live entity with a per-entity unique name.
- Read/list/rename/soft-delete stores.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from storehub.db.models import Store
from storehub.db.repositories.entities import EntityRepo
from storehub.db.repositories.stores import StoreRepo
from storehub.errors import NoFieldsToUpdate, NotFound, StoreNameTaken
from storehub.observability.logging import get_logger

log = get_logger(__name__)


class StoreService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._stores = StoreRepo(session)
        self._entities = EntityRepo(session)

    async def create_store(self, *, name: str, entity_id: int) -> Store:
        if await self._stores.find_by_name(entity_id=entity_id, name=name) is not None:
            raise StoreNameTaken()
        if await self._entities.find_by_id(entity_id) is None:
            raise NotFound("Entity not found")

        store = await self._stores.create(name=name, entity_id=entity_id)
        await self._session.commit()
        log.info("store_created", store_id=store.id, entity_id=entity_id)
        return store

    async def get_store(self, store_id: int) -> Store | None:
        return await self._stores.find_by_id(store_id)

    async def list_for_entity(self, entity_id: int) -> list[Store]:
        return await self._stores.list_for_entity(entity_id)

    async def update_store(self, store_id: int, *, name: str | None = None) -> Store:
        if name is None:
            raise NoFieldsToUpdate()
        existing = await self._stores.find_by_id(store_id)
        if existing is None:
            raise NotFound("Store not found")
        clash = await self._stores.find_by_name(
            entity_id=existing.entity_id, name=name, exclude_id=store_id
        )
        if clash is not None:
            raise StoreNameTaken()

        store = await self._stores.update(store_id, name=name)
        await self._session.commit()
        log.info("store_updated", store_id=store_id)
        return store

    async def delete_store(self, store_id: int) -> None:
        await self._stores.soft_delete(store_id)
        await self._session.commit()
        log.info("store_deleted", store_id=store_id)


# --- Module Notes -----------------------------------------------------------
# Sellers of a deleted store stay in place but become unreachable: every seller
# read requires a live store.
