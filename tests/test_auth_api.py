"""
tests.test_auth_api

/api/auth over HTTP: status codes, bodies and the bearer-token boundary.
"""

from __future__ import annotations

import pytest

from conftest import TEST_PASSWORD, bearer, make_entity, make_user
from storehub.db.repositories.entities import EntityRepo


@pytest.mark.asyncio
async def test_register_then_login(client, session) -> None:
    await make_entity(session)

    r = await client.post(
        "/api/auth/register",
        json={"email": "a@x.com", "password": "pw123456", "name": "Alice"},
    )
    assert r.status_code == 201
    registered = r.json()
    assert registered["user"]["role"] == "seller"
    assert registered["token_type"] == "bearer"

    r = await client.post("/api/auth/login", json={"email": "a@x.com", "password": "pw123456"})
    assert r.status_code == 200
    body = r.json()
    assert body["user"]["email"] == "a@x.com"
    assert body["user"]["id"] == registered["user"]["id"]
    assert "password_hash" not in body["user"]


@pytest.mark.asyncio
async def test_register_validates_payload(client, session) -> None:
    await make_entity(session)

    short_password = await client.post(
        "/api/auth/register", json={"email": "a@x.com", "password": "123", "name": "Alice"}
    )
    bad_email = await client.post(
        "/api/auth/register", json={"email": "nope", "password": "pw123456", "name": "Alice"}
    )
    short_name = await client.post(
        "/api/auth/register", json={"email": "a@x.com", "password": "pw123456", "name": "A"}
    )

    assert {short_password.status_code, bad_email.status_code, short_name.status_code} == {422}


@pytest.mark.asyncio
async def test_register_duplicate_email_conflicts(client, session) -> None:
    entity = await make_entity(session)
    await make_user(session, entity=entity, email="dup@x.com")

    r = await client.post(
        "/api/auth/register",
        json={"email": "dup@x.com", "password": "pw123456", "name": "Again"},
    )

    assert r.status_code == 409
    assert r.json()["error"] == "email_taken"


@pytest.mark.asyncio
async def test_login_failures_are_indistinguishable(client, session) -> None:
    entity = await make_entity(session)
    await make_user(session, entity=entity, email="known@x.com")

    wrong_password = await client.post(
        "/api/auth/login", json={"email": "known@x.com", "password": "wrong-one"}
    )
    unknown_email = await client.post(
        "/api/auth/login", json={"email": "ghost@x.com", "password": "wrong-one"}
    )

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()


@pytest.mark.asyncio
async def test_profile_requires_a_valid_bearer_token(client, app, session) -> None:
    entity = await make_entity(session, name="Demo Account")
    user = await make_user(session, entity=entity, email="p@x.com")

    missing = await client.get("/api/auth/profile")
    assert missing.status_code == 401
    assert missing.headers["www-authenticate"] == "Bearer"

    invalid = await client.get(
        "/api/auth/profile", headers={"Authorization": "Bearer not-a-token"}
    )
    assert invalid.status_code == 401
    assert invalid.json()["error"] == "invalid_token"

    r = await client.get("/api/auth/profile", headers=bearer(app, user))
    assert r.status_code == 200
    assert r.json()["entity_name"] == "Demo Account"


@pytest.mark.asyncio
async def test_update_profile_rejects_entity_change(client, app, session) -> None:
    home = await make_entity(session, name="Home")
    other = await make_entity(session, name="Other")
    user = await make_user(session, entity=home, email="u@x.com")

    r = await client.put(
        "/api/auth/profile",
        json={"name": "Renamed", "entity_id": other.id},
        headers=bearer(app, user),
    )
    assert r.status_code == 400
    assert r.json()["error"] == "entity_immutable"

    r = await client.put(
        "/api/auth/profile", json={"name": "Renamed"}, headers=bearer(app, user)
    )
    assert r.status_code == 200
    assert (r.json()["name"], r.json()["entity_id"]) == ("Renamed", home.id)


@pytest.mark.asyncio
async def test_update_profile_without_fields_is_rejected(client, app, session) -> None:
    entity = await make_entity(session)
    user = await make_user(session, entity=entity, email="u@x.com")

    r = await client.put("/api/auth/profile", json={}, headers=bearer(app, user))

    assert r.status_code == 400
    assert r.json()["error"] == "no_fields_to_update"


@pytest.mark.asyncio
async def test_login_into_deleted_entity_is_forbidden(client, app, session) -> None:
    entity = await make_entity(session)
    await make_user(session, entity=entity, email="m@x.com")
    await EntityRepo(session).soft_delete(entity.id)
    await session.commit()

    r = await client.post("/api/auth/login", json={"email": "m@x.com", "password": TEST_PASSWORD})

    assert r.status_code == 403
    assert r.json()["error"] == "entity_inactive"


@pytest.mark.asyncio
async def test_forgot_password_answers_the_same_for_unknown_email(
    client, session, reset_tokens
) -> None:
    entity = await make_entity(session)
    await make_user(session, entity=entity, email="known@x.com")

    known = await client.post("/api/auth/forgot-password", json={"email": "known@x.com"})
    unknown = await client.post("/api/auth/forgot-password", json={"email": "ghost@x.com"})

    assert known.status_code == unknown.status_code == 204
    assert [email for email, _ in reset_tokens] == ["known@x.com"]


@pytest.mark.asyncio
async def test_reset_password_with_delivered_token(client, session, reset_tokens) -> None:
    entity = await make_entity(session)
    await make_user(session, entity=entity, email="known@x.com")
    await client.post("/api/auth/forgot-password", json={"email": "known@x.com"})
    (_, reset_token), = reset_tokens

    r = await client.post(
        "/api/auth/reset-password", json={"token": reset_token, "password": "newpass1"}
    )
    assert r.status_code == 204

    r = await client.post("/api/auth/login", json={"email": "known@x.com", "password": "newpass1"})
    assert r.status_code == 200

    reused = await client.post(
        "/api/auth/reset-password", json={"token": reset_token, "password": "again123"}
    )
    assert reused.status_code == 400
    assert reused.json()["error"] == "invalid_reset_token"


@pytest.mark.asyncio
async def test_refresh_requires_token_of_the_same_user(client, app, session) -> None:
    entity = await make_entity(session)
    alice = await make_user(session, entity=entity, email="alice@x.com")
    bob = await make_user(session, entity=entity, email="bob@x.com")

    anonymous = await client.post("/api/auth/refresh", json={"email": "alice@x.com"})
    assert anonymous.status_code == 401

    someone_else = await client.post(
        "/api/auth/refresh", json={"email": "alice@x.com"}, headers=bearer(app, bob)
    )
    assert someone_else.status_code == 403

    r = await client.post(
        "/api/auth/refresh", json={"email": "alice@x.com"}, headers=bearer(app, alice)
    )
    assert r.status_code == 200
    assert app.state.codec.verify(r.json()["token"]).user_id == alice.id


@pytest.mark.asyncio
async def test_refresh_does_not_reveal_whether_an_email_exists(client, app, session) -> None:
    home = await make_entity(session, name="Home")
    closed = await make_entity(session, name="Closed")
    bob = await make_user(session, entity=home, email="bob@x.com")
    await make_user(session, entity=home, email="alice@x.com")
    await make_user(session, entity=closed, email="carol@x.com")
    await EntityRepo(session).soft_delete(closed.id)
    await session.commit()

    responses = [
        await client.post("/api/auth/refresh", json={"email": email}, headers=bearer(app, bob))
        for email in ("alice@x.com", "nobody@x.com", "carol@x.com")
    ]

    assert {r.status_code for r in responses} == {403}
    assert len({str(r.json()) for r in responses}) == 1
