"""
tests.test_repositories

Uniqueness enforced by the partial unique indexes, bypassing the service-layer
pre-checks: a duplicate live key must surface as the domain conflict, and a
soft-deleted row must not count.
"""

from __future__ import annotations

import pytest

from conftest import make_entity
from storehub.auth.models import UserRole
from storehub.db.repositories.sellers import SellerRepo
from storehub.db.repositories.stores import StoreRepo
from storehub.db.repositories.users import UserRepo
from storehub.errors import EmailTaken, SellerEmailTaken, StoreNameTaken


async def _user(repo: UserRepo, entity_id: int, email: str):
    return await repo.create(
        name="Dup",
        email=email,
        password_hash="$2b$04$placeholderplaceholderplaceholderplaceholderplace",
        entity_id=entity_id,
        role=UserRole.seller,
    )


@pytest.mark.asyncio
async def test_duplicate_live_user_email_raises_email_taken(session) -> None:
    entity_id = (await make_entity(session)).id
    users = UserRepo(session)
    await _user(users, entity_id, "dup@x.com")
    await session.commit()

    with pytest.raises(EmailTaken):
        await _user(users, entity_id, "dup@x.com")


@pytest.mark.asyncio
async def test_duplicate_live_store_name_raises_store_name_taken(session) -> None:
    first_id = (await make_entity(session, name="E1")).id
    second_id = (await make_entity(session, name="E2")).id
    stores = StoreRepo(session)
    await stores.create(name="S1", entity_id=first_id)
    # The index is per entity.
    await stores.create(name="S1", entity_id=second_id)
    await session.commit()

    with pytest.raises(StoreNameTaken):
        await stores.create(name="S1", entity_id=first_id)


@pytest.mark.asyncio
async def test_duplicate_live_seller_email_raises_seller_email_taken(session) -> None:
    entity_id = (await make_entity(session)).id
    store_a = await StoreRepo(session).create(name="A", entity_id=entity_id)
    store_b = await StoreRepo(session).create(name="B", entity_id=entity_id)
    store_a_id, store_b_id = store_a.id, store_b.id
    sellers = SellerRepo(session)
    await sellers.create(name="Sam", email="sam@x.com", store_id=store_a_id)
    await session.commit()

    with pytest.raises(SellerEmailTaken):
        await sellers.create(name="Sam", email="sam@x.com", store_id=store_b_id)


@pytest.mark.asyncio
async def test_soft_deleted_rows_do_not_trip_the_unique_indexes(session) -> None:
    entity_id = (await make_entity(session)).id
    users, stores, sellers = UserRepo(session), StoreRepo(session), SellerRepo(session)

    old_user = await _user(users, entity_id, "reuse@x.com")
    old_store = await stores.create(name="S1", entity_id=entity_id)
    keep_store = await stores.create(name="S2", entity_id=entity_id)
    old_seller = await sellers.create(name="Sam", email="sam@x.com", store_id=keep_store.id)
    await session.commit()

    await users.soft_delete(old_user.id)
    await stores.soft_delete(old_store.id)
    await sellers.soft_delete(old_seller.id)
    await session.commit()

    new_user = await _user(users, entity_id, "reuse@x.com")
    new_store = await stores.create(name="S1", entity_id=entity_id)
    new_seller = await sellers.create(name="Sam", email="sam@x.com", store_id=keep_store.id)
    await session.commit()

    assert new_user.id != old_user.id
    assert new_store.id != old_store.id
    assert new_seller.id != old_seller.id
