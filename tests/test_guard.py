"""
tests.test_guard

Role gating and the store/seller ownership chain.
"""

from __future__ import annotations

import pytest

from conftest import make_entity
from storehub.auth.guard import AccessGuard, require_exact_role, validate_entity_access
from storehub.auth.models import Principal, UserRole
from storehub.db.repositories.entities import EntityRepo
from storehub.errors import StoreNameTaken
from storehub.services.seller_service import SellerService
from storehub.services.store_service import StoreService


@pytest.mark.parametrize(
    ("role", "required", "expected"),
    [
        (UserRole.admin, UserRole.admin, True),
        (UserRole.manager, UserRole.manager, True),
        (UserRole.admin, UserRole.manager, False),
        (UserRole.manager, UserRole.admin, False),
        (UserRole.seller, UserRole.manager, False),
    ],
)
def test_require_exact_role(role: UserRole, required: UserRole, expected: bool) -> None:
    principal = Principal(id=1, entity_id=1, role=role)
    assert require_exact_role(principal, required) is expected


def test_validate_entity_access() -> None:
    principal = Principal(id=1, entity_id=4, role=UserRole.manager)
    assert validate_entity_access(4, principal)
    assert not validate_entity_access(5, principal)


@pytest.mark.asyncio
async def test_store_and_seller_access_follow_owning_entity(session) -> None:
    mine = await make_entity(session, name="Mine")
    theirs = await make_entity(session, name="Theirs")
    store = await StoreService(session=session).create_store(name="S1", entity_id=mine.id)
    seller = await SellerService(session=session).create_seller(
        name="Sam", email="sam@x.com", store_id=store.id
    )

    guard = AccessGuard(session)

    assert await guard.validate_store_access(store.id, mine.id)
    assert not await guard.validate_store_access(store.id, theirs.id)
    assert await guard.validate_seller_access(seller.id, mine.id)
    assert not await guard.validate_seller_access(seller.id, theirs.id)
    assert not await guard.validate_store_access(9999, mine.id)
    assert not await guard.validate_seller_access(9999, mine.id)


@pytest.mark.asyncio
async def test_deleting_a_store_cuts_off_its_sellers(app, session) -> None:
    entity = await make_entity(session)
    stores = StoreService(session=session)
    store = await stores.create_store(name="S1", entity_id=entity.id)
    seller = await SellerService(session=session).create_seller(
        name="Sam", email="sam@x.com", store_id=store.id
    )

    await stores.delete_store(store.id)

    async with app.state.sessionmaker() as fresh:
        guard = AccessGuard(fresh)
        assert not await guard.validate_store_access(store.id, entity.id)
        assert not await guard.validate_seller_access(seller.id, entity.id)


@pytest.mark.asyncio
async def test_deleting_a_seller_denies_access_to_it(app, session) -> None:
    entity = await make_entity(session)
    store = await StoreService(session=session).create_store(name="S1", entity_id=entity.id)
    sellers = SellerService(session=session)
    seller = await sellers.create_seller(name="Sam", email="sam@x.com", store_id=store.id)

    await sellers.delete_seller(seller.id)

    async with app.state.sessionmaker() as fresh:
        guard = AccessGuard(fresh)
        assert await guard.validate_store_access(store.id, entity.id)
        assert not await guard.validate_seller_access(seller.id, entity.id)


@pytest.mark.asyncio
async def test_deleting_an_entity_denies_everything_under_it(app, session) -> None:
    entity = await make_entity(session)
    store = await StoreService(session=session).create_store(name="S1", entity_id=entity.id)
    seller = await SellerService(session=session).create_seller(
        name="Sam", email="sam@x.com", store_id=store.id
    )

    await EntityRepo(session).soft_delete(entity.id)
    await session.commit()

    async with app.state.sessionmaker() as fresh:
        guard = AccessGuard(fresh)
        assert not await guard.validate_store_access(store.id, entity.id)
        assert not await guard.validate_seller_access(seller.id, entity.id)


@pytest.mark.asyncio
async def test_store_names_are_unique_per_entity_among_live_stores(session) -> None:
    first = await make_entity(session, name="E1")
    second = await make_entity(session, name="E2")
    stores = StoreService(session=session)

    original = await stores.create_store(name="S1", entity_id=first.id)
    with pytest.raises(StoreNameTaken):
        await stores.create_store(name="S1", entity_id=first.id)

    # Same name under another entity is fine.
    await stores.create_store(name="S1", entity_id=second.id)

    await stores.delete_store(original.id)
    again = await stores.create_store(name="S1", entity_id=first.id)
    assert again.id != original.id


@pytest.mark.asyncio
async def test_store_rename_ignores_itself_but_not_siblings(session) -> None:
    entity = await make_entity(session)
    stores = StoreService(session=session)
    s1 = await stores.create_store(name="S1", entity_id=entity.id)
    await stores.create_store(name="S2", entity_id=entity.id)

    assert (await stores.update_store(s1.id, name="S1")).name == "S1"
    with pytest.raises(StoreNameTaken):
        await stores.update_store(s1.id, name="S2")
