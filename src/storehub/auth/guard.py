"""
storehub.auth.guard

Role gating and tenant-scoped access checks.

Responsibilities:
- Exact-role checks (no implied hierarchy between roles).
- Ownership-chain checks: store -> entity and seller -> store -> entity.

Every check returns a bool. Turning `False` into a denied response is the
caller's job (see `storehub.api`).
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from storehub.auth.models import Principal, UserRole
from storehub.db.repositories.sellers import SellerRepo
from storehub.db.repositories.stores import StoreRepo


def require_exact_role(principal: Principal, role: UserRole) -> bool:
    # admin does not satisfy a manager check; each action names its exact role.
    return principal.role is UserRole(role)


def validate_entity_access(target_entity_id: int, principal: Principal) -> bool:
    return principal.entity_id == target_entity_id


class AccessGuard:
    def __init__(self, session: AsyncSession) -> None:
        self._stores = StoreRepo(session)
        self._sellers = SellerRepo(session)

    async def validate_store_access(self, store_id: int, entity_id: int) -> bool:
        store = await self._stores.find_by_id(store_id)
        return store is not None and store.entity_id == entity_id

    async def validate_seller_access(self, seller_id: int, entity_id: int) -> bool:
        # find_by_id only resolves when seller, store and entity are all live.
        seller = await self._sellers.find_by_id(seller_id)
        return seller is not None and seller.store.entity_id == entity_id


# --- Module Notes -----------------------------------------------------------
# The guard holds no state beyond repositories bound to the request session.
