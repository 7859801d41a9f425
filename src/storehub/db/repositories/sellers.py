"""
storehub.db.repositories.sellers

Repository for `Seller` rows.

Responsibilities:
- Fetch sellers together with their store, requiring every hop of the
  seller -> store -> entity chain to be live.
- Enforce global email uniqueness among live sellers.
"""

from __future__ import annotations

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from storehub.db.base import utcnow
from storehub.db.models import Entity, Seller, Store
from storehub.db.repositories.common import flush_unique
from storehub.errors import NotFound, SellerEmailTaken


class SellerRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _live_chain(self):
        return (
            select(Seller)
            .join(Seller.store)
            .join(Store.entity)
            .where(Seller.live(), Store.live(), Entity.live())
            .options(contains_eager(Seller.store))
        )

    async def find_by_id(self, seller_id: int) -> Seller | None:
        stmt = self._live_chain().where(Seller.id == seller_id)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def find_by_email(self, email: str, *, exclude_id: int | None = None) -> Seller | None:
        stmt = select(Seller).where(Seller.email == email, Seller.live())
        if exclude_id is not None:
            stmt = stmt.where(Seller.id != exclude_id)
        return (await self._session.execute(stmt.limit(1))).scalar_one_or_none()

    async def list_for_store(self, store_id: int) -> list[Seller]:
        stmt = (
            self._live_chain()
            .where(Seller.store_id == store_id)
            .order_by(desc(Seller.created_at), desc(Seller.id))
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def create(self, *, name: str, email: str, store_id: int) -> Seller:
        seller = Seller(name=name, email=email, store_id=store_id)
        self._session.add(seller)
        await flush_unique(self._session, SellerEmailTaken)
        return seller

    async def update(
        self, seller_id: int, *, name: str | None = None, email: str | None = None
    ) -> Seller:
        seller = await self._get_for_update(seller_id)
        if name is not None:
            seller.name = name
        if email is not None:
            seller.email = email
        seller.updated_at = utcnow()
        await flush_unique(self._session, SellerEmailTaken)
        return seller

    async def soft_delete(self, seller_id: int) -> None:
        seller = await self._get_for_update(seller_id)
        seller.deleted_at = utcnow()
        await self._session.flush()

    async def _get_for_update(self, seller_id: int) -> Seller:
        stmt = self._live_chain().where(Seller.id == seller_id).with_for_update(of=Seller)
        seller = (await self._session.execute(stmt)).scalar_one_or_none()
        if seller is None:
            raise NotFound("Seller not found")
        return seller


# --- Module Notes -----------------------------------------------------------
# `contains_eager` populates `Seller.store` from the join so the access guard can
# read `seller.store.entity_id` without a lazy load under asyncio.
