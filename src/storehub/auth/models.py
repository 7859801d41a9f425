"""
storehub.auth.models

Auth domain models.

Responsibilities:
- Define the closed role enumeration (`UserRole`).
- Define the authenticated identity type (`Principal`) injected into endpoints.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class UserRole(enum.StrEnum):
    # Enum values are stored in DB and carried in tokens; treat as stable API contract.
    admin = "admin"
    manager = "manager"
    seller = "seller"


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity, decoded from a verified bearer token.
    """

    id: int
    entity_id: int
    role: UserRole


# --- Module Notes -----------------------------------------------------------
# Keep this model minimal; it is used across API, services and the access guard.
