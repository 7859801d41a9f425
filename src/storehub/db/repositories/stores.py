"""
storehub.db.repositories.stores

Repository for `Store` rows.

Responsibilities:
- Fetch stores whose whole ownership chain (store -> entity) is live.
- Enforce name uniqueness per entity among live stores.
"""

from __future__ import annotations

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from storehub.db.base import utcnow
from storehub.db.models import Entity, Store
from storehub.db.repositories.common import flush_unique
from storehub.errors import NotFound, StoreNameTaken


class StoreRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _live_chain(self):
        return select(Store).join(Store.entity).where(Store.live(), Entity.live())

    async def find_by_id(self, store_id: int) -> Store | None:
        stmt = self._live_chain().where(Store.id == store_id)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def find_by_name(
        self, *, entity_id: int, name: str, exclude_id: int | None = None
    ) -> Store | None:
        stmt = select(Store).where(
            Store.entity_id == entity_id, Store.name == name, Store.live()
        )
        if exclude_id is not None:
            stmt = stmt.where(Store.id != exclude_id)
        return (await self._session.execute(stmt.limit(1))).scalar_one_or_none()

    async def list_for_entity(self, entity_id: int) -> list[Store]:
        # Newest first.
        stmt = (
            self._live_chain()
            .where(Store.entity_id == entity_id)
            .order_by(desc(Store.created_at), desc(Store.id))
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def create(self, *, name: str, entity_id: int) -> Store:
        store = Store(name=name, entity_id=entity_id)
        self._session.add(store)
        await flush_unique(self._session, StoreNameTaken)
        return store

    async def update(self, store_id: int, *, name: str | None = None) -> Store:
        store = await self._get_for_update(store_id)
        if name is not None:
            store.name = name
        store.updated_at = utcnow()
        await flush_unique(self._session, StoreNameTaken)
        return store

    async def soft_delete(self, store_id: int) -> None:
        store = await self._get_for_update(store_id)
        store.deleted_at = utcnow()
        await self._session.flush()

    async def _get_for_update(self, store_id: int) -> Store:
        stmt = self._live_chain().where(Store.id == store_id).with_for_update(of=Store)
        store = (await self._session.execute(stmt)).scalar_one_or_none()
        if store is None:
            raise NotFound("Store not found")
        return store
