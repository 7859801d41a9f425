"""
storehub.errors

Domain failure taxonomy.

Responsibilities:
- Define the typed, expected outcomes of business rules (bad credentials,
  inactive tenant, uniqueness conflicts, missing rows, denied access...).
- Keep the core transport-agnostic: the API layer maps these to HTTP
  responses in `storehub.api.errors`.
"""

from __future__ import annotations

from typing import Any


class StorehubError(Exception):
    """
    Base class for all domain failures.

    `code` is a stable machine-readable identifier surfaced to clients.
    """

    code: str = "storehub_error"
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None, **details: Any) -> None:
        self.details = details
        super().__init__(message or self.default_message)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.code, "detail": str(self)}


class InvalidCredentials(StorehubError):
    # Same message for "no such user" and "wrong password".
    code = "invalid_credentials"
    default_message = "Invalid credentials"


class EntityInactive(StorehubError):
    code = "entity_inactive"
    default_message = "Entity not found or inactive"


class NotFound(StorehubError):
    code = "not_found"
    default_message = "Not found"


class ConflictError(StorehubError):
    code = "conflict"
    default_message = "Conflicting record"


class EmailTaken(ConflictError):
    code = "email_taken"
    default_message = "Email already registered"


class EmailInUse(ConflictError):
    code = "email_in_use"
    default_message = "Email already in use"


class StoreNameTaken(ConflictError):
    code = "store_name_taken"
    default_message = "Store name must be unique within the entity"


class SellerEmailTaken(ConflictError):
    code = "seller_email_taken"
    default_message = "Seller email must be unique"


class NoDefaultEntity(StorehubError):
    code = "no_default_entity"
    default_message = "No entity available for registration"


class NoFieldsToUpdate(StorehubError):
    code = "no_fields_to_update"
    default_message = "No fields to update"


class EntityImmutableFieldChange(StorehubError):
    code = "entity_immutable"
    default_message = "entity_id cannot be changed"


class InvalidToken(StorehubError):
    code = "invalid_token"
    default_message = "Invalid token"


class InvalidResetToken(StorehubError):
    code = "invalid_reset_token"
    default_message = "Invalid or expired reset token"


class AccessDenied(StorehubError):
    code = "access_denied"
    default_message = "Access denied"


# --- Module Notes -----------------------------------------------------------
# None of these represent corrupted state; they are never retried by the core.
