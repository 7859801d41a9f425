"""
storehub.auth.jwt

Bearer token issuing and validation (JWT, HS256 by default).

Responsibilities:
- Issue signed tokens carrying {user id, entity id, role} with an expiry.
- Decode and validate tokens with strict claim requirements, normalizing
  the claims into a typed `TokenPayload`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError

from storehub.auth.models import Principal, UserRole
from storehub.errors import InvalidToken

DEFAULT_TTL = timedelta(days=1)


@dataclass(frozen=True, slots=True)
class JwtConfig:
    # Algorithm/issuer/audience are enforced during decoding.
    alg: str
    issuer: str
    audience: str
    secret: str


@dataclass(frozen=True, slots=True)
class TokenPayload:
    user_id: int
    entity_id: int
    role: UserRole
    issued_at: datetime
    expires_at: datetime

    def to_principal(self) -> Principal:
        return Principal(id=self.user_id, entity_id=self.entity_id, role=self.role)


class TokenCodec:
    """
    Signs and verifies self-describing bearer tokens.

    Tokens are not stored server-side: validity is signature + expiry only,
    so a token cannot be revoked before it expires.
    """

    def __init__(self, cfg: JwtConfig, *, ttl: timedelta = DEFAULT_TTL) -> None:
        self._cfg = cfg
        self._ttl = ttl

    def issue(
        self,
        *,
        user_id: int,
        entity_id: int,
        role: UserRole,
        ttl: timedelta | None = None,
    ) -> str:
        issued_at = int(datetime.now(tz=UTC).timestamp())
        lifetime = ttl if ttl is not None else self._ttl
        payload: dict[str, Any] = {
            "iss": self._cfg.issuer,
            "aud": self._cfg.audience,
            "sub": str(user_id),
            "entity_id": entity_id,
            "role": UserRole(role).value,
            "iat": issued_at,
            "exp": issued_at + int(lifetime.total_seconds()),
        }
        return jwt.encode(payload, self._cfg.secret, algorithm=self._cfg.alg)

    def verify(self, token: str) -> TokenPayload:
        try:
            # No leeway: expiry is judged against this process's clock.
            claims = jwt.decode(
                token,
                self._cfg.secret,
                algorithms=[self._cfg.alg],
                issuer=self._cfg.issuer,
                audience=self._cfg.audience,
                options={
                    "require": ["exp", "iat", "iss", "aud", "sub"],
                },
            )
        except InvalidTokenError as e:
            raise InvalidToken(str(e)) from e
        return _payload_from_claims(claims)


def _payload_from_claims(claims: dict[str, Any]) -> TokenPayload:
    sub = claims.get("sub")
    entity_id = claims.get("entity_id")
    role = claims.get("role")

    if not isinstance(sub, str) or not sub.isdigit():
        raise InvalidToken("Invalid token subject")
    # bool is an int subclass; reject it explicitly.
    if not isinstance(entity_id, int) or isinstance(entity_id, bool):
        raise InvalidToken("Invalid token entity")
    try:
        parsed_role = UserRole(role)
    except ValueError as e:
        raise InvalidToken("Invalid token role") from e

    return TokenPayload(
        user_id=int(sub),
        entity_id=entity_id,
        role=parsed_role,
        issued_at=datetime.fromtimestamp(claims["iat"], tz=UTC),
        expires_at=datetime.fromtimestamp(claims["exp"], tz=UTC),
    )


# --- Module Notes -----------------------------------------------------------
# Token issuing is used by `services.auth_service` (login/register/refresh);
# verification by `auth.deps.get_principal`.
