"""
storehub.services.auth_service

Authentication flows (login, registration, profile, refresh, password reset).

Responsibilities:
- Verify credentials and issue bearer tokens carrying {user, entity, role}.
- Self-service registration into the designated default tenant.
- Token-gated, single-use password reset.
- Own the commit boundary for every write it performs.
"""

from __future__ import annotations

import hashlib
import secrets
from dataclasses import dataclass
from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from storehub.auth.jwt import TokenCodec
from storehub.auth.models import UserRole
from storehub.auth.passwords import PasswordHasher
from storehub.db.base import utcnow
from storehub.db.models import Entity, User
from storehub.db.repositories.entities import EntityRepo
from storehub.db.repositories.users import UserRepo
from storehub.errors import (
    EmailInUse,
    EmailTaken,
    EntityImmutableFieldChange,
    EntityInactive,
    InvalidCredentials,
    InvalidResetToken,
    NoDefaultEntity,
    NoFieldsToUpdate,
    NotFound,
)
from storehub.observability.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class AuthPolicy:
    # Tenant for self-registered users; None means "first live entity".
    default_entity_id: int | None = None
    reset_token_ttl: timedelta = timedelta(minutes=30)


@dataclass(frozen=True, slots=True)
class Identity:
    id: int
    email: str
    name: str
    role: UserRole
    entity_id: int


@dataclass(frozen=True, slots=True)
class AuthResult:
    user: Identity
    token: str


@dataclass(frozen=True, slots=True)
class Profile:
    id: int
    email: str
    name: str
    role: UserRole
    entity_id: int
    entity_name: str


def _identity(user: User) -> Identity:
    return Identity(
        id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
        entity_id=user.entity_id,
    )


def _profile(user: User, entity: Entity) -> Profile:
    return Profile(
        id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
        entity_id=entity.id,
        entity_name=entity.name,
    )


def _digest(reset_token: str) -> str:
    return hashlib.sha256(reset_token.encode("utf-8")).hexdigest()


class Authenticator:
    """
    Stateless orchestration over the user/entity repositories, the password
    hasher and the token codec. Build one per request.
    """

    def __init__(
        self,
        *,
        session: AsyncSession,
        hasher: PasswordHasher,
        codec: TokenCodec,
        policy: AuthPolicy,
    ) -> None:
        self._session = session
        self._hasher = hasher
        self._codec = codec
        self._policy = policy

        self._users = UserRepo(session)
        self._entities = EntityRepo(session)

    async def login(self, *, email: str, password: str) -> AuthResult:
        user = await self._users.find_by_email(email)
        if user is None:
            # Same cost and same error as a wrong password.
            self._hasher.dummy_verify(password)
            log.info("login_failed")
            raise InvalidCredentials()
        if not self._hasher.verify(password, user.password_hash):
            log.info("login_failed")
            raise InvalidCredentials()

        entity = await self._entities.find_by_id(user.entity_id)
        if entity is None:
            log.info("login_rejected_entity_inactive", user_id=user.id, entity_id=user.entity_id)
            raise EntityInactive()

        log.info("login_succeeded", user_id=user.id, entity_id=user.entity_id)
        return self._issue(user)

    async def register(self, *, email: str, password: str, name: str) -> AuthResult:
        # Uniqueness is checked among live users only, matching login/update.
        if await self._users.find_by_email(email) is not None:
            raise EmailTaken()

        entity = await self._default_entity()
        user = await self._users.create(
            name=name,
            email=email,
            password_hash=self._hasher.hash(password),
            entity_id=entity.id,
            role=UserRole.seller,
        )
        await self._session.commit()
        log.info("user_registered", user_id=user.id, entity_id=entity.id)
        return self._issue(user)

    async def get_profile(self, user_id: int) -> Profile:
        user = await self._users.find_by_id(user_id)
        entity = await self._entities.find_by_id(user.entity_id) if user is not None else None
        if user is None or entity is None:
            raise NotFound("User or entity not found")
        return _profile(user, entity)

    async def refresh_token(self, *, email: str) -> AuthResult:
        # No password check: callers must gate this behind an authenticated channel.
        user = await self._users.find_by_email(email)
        if user is None:
            raise NotFound("User not found")
        if await self._entities.find_by_id(user.entity_id) is None:
            raise EntityInactive()
        log.info("token_refreshed", user_id=user.id)
        return self._issue(user)

    async def forgot_password(self, *, email: str) -> str | None:
        """
        Issue a single-use reset token for a live user.

        Returns the raw token for out-of-band delivery, or None when no live
        user has this email. Only the token's SHA-256 digest is persisted.
        """

        user = await self._users.find_by_email(email)
        if user is None:
            log.info("password_reset_requested", matched=False)
            return None

        reset_token = secrets.token_urlsafe(32)
        await self._users.set_reset_token(
            user.id,
            digest=_digest(reset_token),
            expires_at=utcnow() + self._policy.reset_token_ttl,
        )
        await self._session.commit()
        log.info("password_reset_requested", matched=True, user_id=user.id)
        return reset_token

    async def reset_password(self, *, token: str, new_password: str) -> dict[str, str]:
        user = await self._users.find_by_reset_token_hash(_digest(token))
        if (
            user is None
            or user.reset_token_expires_at is None
            or user.reset_token_expires_at < utcnow()
        ):
            raise InvalidResetToken()

        await self._users.update(user.id, password_hash=self._hasher.hash(new_password))
        await self._users.set_reset_token(user.id, digest=None, expires_at=None)
        await self._session.commit()
        log.info("password_reset_completed", user_id=user.id)
        return {"email": user.email}

    async def update_profile(
        self,
        user_id: int,
        *,
        name: str | None = None,
        email: str | None = None,
        password: str | None = None,
        entity_id: int | None = None,
    ) -> Profile:
        if entity_id is not None:
            raise EntityImmutableFieldChange()
        if name is None and email is None and password is None:
            raise NoFieldsToUpdate()

        if email is not None:
            holder = await self._users.find_by_email(email)
            if holder is not None and holder.id != user_id:
                raise EmailInUse()

        user = await self._users.update(
            user_id,
            name=name,
            email=email,
            password_hash=self._hasher.hash(password) if password is not None else None,
        )
        entity = await self._entities.find_by_id(user.entity_id)
        if entity is None:
            await self._session.rollback()
            raise NotFound("Entity not found")
        await self._session.commit()
        log.info("profile_updated", user_id=user_id)
        return _profile(user, entity)

    async def _default_entity(self) -> Entity:
        if self._policy.default_entity_id is not None:
            entity = await self._entities.find_by_id(self._policy.default_entity_id)
        else:
            entity = await self._entities.find_first_live()
        if entity is None:
            raise NoDefaultEntity()
        return entity

    def _issue(self, user: User) -> AuthResult:
        token = self._codec.issue(user_id=user.id, entity_id=user.entity_id, role=user.role)
        return AuthResult(user=_identity(user), token=token)


# --- Module Notes -----------------------------------------------------------
# The legacy "reset by email + new password" flow is intentionally absent: a
# reset always requires a token minted by `forgot_password`.
