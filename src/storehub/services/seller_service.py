from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from storehub.db.models import Seller
from storehub.db.repositories.sellers import SellerRepo
from storehub.db.repositories.stores import StoreRepo
from storehub.errors import NoFieldsToUpdate, NotFound, SellerEmailTaken
from storehub.observability.logging import get_logger

log = get_logger(__name__)


class SellerService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._sellers = SellerRepo(session)
        self._stores = StoreRepo(session)

    async def create_seller(self, *, name: str, email: str, store_id: int) -> Seller:
        if await self._sellers.find_by_email(email) is not None:
            raise SellerEmailTaken()
        if await self._stores.find_by_id(store_id) is None:
            raise NotFound("Store not found")

        seller = await self._sellers.create(name=name, email=email, store_id=store_id)
        await self._session.commit()
        log.info("seller_created", seller_id=seller.id, store_id=store_id)
        return seller

    async def get_seller(self, seller_id: int) -> Seller | None:
        return await self._sellers.find_by_id(seller_id)

    async def list_for_store(self, store_id: int) -> list[Seller]:
        return await self._sellers.list_for_store(store_id)

    async def update_seller(
        self, seller_id: int, *, name: str | None = None, email: str | None = None
    ) -> Seller:
        if name is None and email is None:
            raise NoFieldsToUpdate()
        if await self._sellers.find_by_id(seller_id) is None:
            raise NotFound("Seller not found")
        if email is not None and await self._sellers.find_by_email(email, exclude_id=seller_id):
            raise SellerEmailTaken()

        seller = await self._sellers.update(seller_id, name=name, email=email)
        await self._session.commit()
        log.info("seller_updated", seller_id=seller_id)
        return seller

    async def delete_seller(self, seller_id: int) -> None:
        await self._sellers.soft_delete(seller_id)
        await self._session.commit()
        log.info("seller_deleted", seller_id=seller_id)
