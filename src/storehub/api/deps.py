"""
storehub.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide the request-scoped DB session.
- Hand out the process-wide auth components stashed on app.state
  (password hasher, token codec, auth policy).
- Build request-scoped services and the access guard on the request session.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storehub.auth.guard import AccessGuard
from storehub.auth.jwt import TokenCodec
from storehub.auth.passwords import PasswordHasher
from storehub.services.auth_service import Authenticator, AuthPolicy
from storehub.services.seller_service import SellerService
from storehub.services.store_service import StoreService
from storehub.services.user_service import UserService


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # The sessionmaker is created on app startup in `storehub.api.app.create_app`.
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session. Commit/rollback is managed explicitly by the service layer.
    async with session_factory() as session:
        yield session


def password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher  # type: ignore[attr-defined]


def token_codec(request: Request) -> TokenCodec:
    return request.app.state.codec  # type: ignore[attr-defined]


def auth_policy(request: Request) -> AuthPolicy:
    return request.app.state.auth_policy  # type: ignore[attr-defined]


def authenticator(
    session: AsyncSession = Depends(db_session),
    hasher: PasswordHasher = Depends(password_hasher),
    codec: TokenCodec = Depends(token_codec),
    policy: AuthPolicy = Depends(auth_policy),
) -> Authenticator:
    return Authenticator(session=session, hasher=hasher, codec=codec, policy=policy)


def access_guard(session: AsyncSession = Depends(db_session)) -> AccessGuard:
    return AccessGuard(session)


def user_service(
    session: AsyncSession = Depends(db_session),
    hasher: PasswordHasher = Depends(password_hasher),
) -> UserService:
    return UserService(session=session, hasher=hasher)


def store_service(session: AsyncSession = Depends(db_session)) -> StoreService:
    return StoreService(session=session)


def seller_service(session: AsyncSession = Depends(db_session)) -> SellerService:
    return SellerService(session=session)


# --- Module Notes -----------------------------------------------------------
# FastAPI caches `db_session` per request, so every service and the guard built
# for one request share a single session.
