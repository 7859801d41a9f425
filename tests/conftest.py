"""
tests.conftest

Shared fixtures.

Responsibilities:
- Boot the FastAPI app against a per-test SQLite file (tables created by the
  app lifespan in test mode).
- Expose an httpx client, a raw session, and helpers to create tenants/users
  and mint bearer tokens.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession

from storehub.api.app import create_app
from storehub.auth.jwt import JwtConfig, TokenCodec
from storehub.auth.models import UserRole
from storehub.auth.passwords import PasswordHasher
from storehub.db.models import Entity, User
from storehub.db.repositories.entities import EntityRepo
from storehub.db.repositories.users import UserRepo
from storehub.settings import Settings

TEST_PASSWORD = "pw123456"


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'storehub-test.db'}",
        jwt_secret="test-secret",
        bcrypt_rounds=4,
        log_level="WARNING",
    )


@pytest.fixture()
def reset_tokens() -> list[tuple[str, str]]:
    return []


@pytest_asyncio.fixture()
async def app(settings: Settings, reset_tokens: list[tuple[str, str]]) -> AsyncIterator[FastAPI]:
    application = create_app(
        settings=settings,
        reset_token_sink=lambda email, token: reset_tokens.append((email, token)),
    )
    # httpx ASGITransport does not run lifespan; drive it explicitly.
    async with application.router.lifespan_context(application):
        yield application


@pytest_asyncio.fixture()
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest_asyncio.fixture()
async def session(app: FastAPI) -> AsyncIterator[AsyncSession]:
    async with app.state.sessionmaker() as s:
        yield s


@pytest.fixture()
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture()
def codec() -> TokenCodec:
    return TokenCodec(
        JwtConfig(alg="HS256", issuer="storehub", audience="storehub-api", secret="test-secret")
    )


async def make_entity(session: AsyncSession, name: str = "Demo Account") -> Entity:
    entity = await EntityRepo(session).create(name=name)
    await session.commit()
    return entity


async def make_user(
    session: AsyncSession,
    *,
    entity: Entity,
    email: str,
    role: UserRole = UserRole.manager,
    password: str = TEST_PASSWORD,
    name: str = "Test User",
) -> User:
    user = await UserRepo(session).create(
        name=name,
        email=email,
        password_hash=PasswordHasher(rounds=4).hash(password),
        entity_id=entity.id,
        role=role,
    )
    await session.commit()
    return user


def bearer(app: FastAPI, user: User) -> dict[str, str]:
    token = app.state.codec.issue(user_id=user.id, entity_id=user.entity_id, role=user.role)
    return {"Authorization": f"Bearer {token}"}


# --- Module Notes -----------------------------------------------------------
# Every test gets a fresh database file under pytest's tmp_path.
