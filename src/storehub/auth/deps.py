"""
storehub.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Convert a bearer token into a typed `Principal` (or reject the request).
- Gate endpoints on an exact role via a reusable dependency factory.
"""

from __future__ import annotations

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from storehub.api.deps import token_codec
from storehub.auth.guard import require_exact_role
from storehub.auth.jwt import TokenCodec
from storehub.auth.models import Principal, UserRole
from storehub.errors import AccessDenied, InvalidToken

_bearer = HTTPBearer(auto_error=False)


def get_principal(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    codec: TokenCodec = Depends(token_codec),
) -> Principal:
    # Either a fully verified identity or a rejection; never a partial one.
    if creds is None or not creds.credentials:
        raise InvalidToken("Missing bearer token")
    return codec.verify(creds.credentials).to_principal()


def require_role(role: UserRole):
    def _dep(principal: Principal = Depends(get_principal)) -> Principal:
        if not require_exact_role(principal, role):
            raise AccessDenied("Access restricted")
        return principal

    return _dep


require_admin = require_role(UserRole.admin)


# --- Module Notes -----------------------------------------------------------
# Failures raise `storehub.errors` types; `storehub.api.errors` renders them
# as 401/403 responses.
