"""
tests.test_jwt

Bearer token codec: round trip, expiry, tampering and claim validation.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from storehub.auth.jwt import JwtConfig, TokenCodec
from storehub.auth.models import Principal, UserRole
from storehub.errors import InvalidToken


def _claims(**overrides):
    now = int(datetime.now(tz=UTC).timestamp())
    claims = {
        "iss": "storehub",
        "aud": "storehub-api",
        "sub": "7",
        "entity_id": 3,
        "role": "manager",
        "iat": now,
        "exp": now + 60,
    }
    claims.update(overrides)
    return claims


def test_round_trip_preserves_identity(codec: TokenCodec) -> None:
    token = codec.issue(user_id=7, entity_id=3, role=UserRole.manager)

    payload = codec.verify(token)

    assert (payload.user_id, payload.entity_id, payload.role) == (7, 3, UserRole.manager)
    assert payload.to_principal() == Principal(id=7, entity_id=3, role=UserRole.manager)
    # Default lifetime is one day.
    assert payload.expires_at - payload.issued_at == timedelta(days=1)


def test_expired_token_is_rejected(codec: TokenCodec) -> None:
    token = codec.issue(user_id=1, entity_id=1, role=UserRole.seller, ttl=timedelta(seconds=-5))
    with pytest.raises(InvalidToken):
        codec.verify(token)


def test_tampered_token_is_rejected(codec: TokenCodec) -> None:
    token = codec.issue(user_id=1, entity_id=1, role=UserRole.seller)
    header, _, signature = token.split(".")
    forged = jwt.encode(_claims(sub="1", entity_id=2, role="admin"), "other", algorithm="HS256")
    spliced = ".".join([header, forged.split(".")[1], signature])

    with pytest.raises(InvalidToken):
        codec.verify(spliced)


def test_token_signed_with_another_secret_is_rejected(codec: TokenCodec) -> None:
    other = TokenCodec(
        JwtConfig(alg="HS256", issuer="storehub", audience="storehub-api", secret="rotated")
    )
    with pytest.raises(InvalidToken):
        codec.verify(other.issue(user_id=1, entity_id=1, role=UserRole.admin))


@pytest.mark.parametrize(
    "overrides",
    [
        {"role": "root"},
        {"sub": "abc"},
        {"entity_id": "3"},
        {"entity_id": True},
        {"aud": "someone-else"},
    ],
)
def test_malformed_claims_are_rejected(codec: TokenCodec, overrides) -> None:
    token = jwt.encode(_claims(**overrides), "test-secret", algorithm="HS256")
    with pytest.raises(InvalidToken):
        codec.verify(token)


def test_garbage_is_rejected(codec: TokenCodec) -> None:
    with pytest.raises(InvalidToken):
        codec.verify("not.a.token")


def test_token_carries_no_password_material(codec: TokenCodec) -> None:
    token = codec.issue(user_id=1, entity_id=1, role=UserRole.seller)
    claims = jwt.decode(token, options={"verify_signature": False})
    assert set(claims) == {"iss", "aud", "sub", "entity_id", "role", "iat", "exp"}
