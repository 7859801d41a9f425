"""
storehub.api.routers.users

User management endpoints, scoped to the caller's entity.

Responsibilities:
- Admin-only create/update/delete.
- Listing and lookup restricted to the caller's own entity.
"""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, EmailStr, Field
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from storehub.api.deps import user_service
from storehub.auth.deps import get_principal, require_admin
from storehub.auth.guard import validate_entity_access
from storehub.auth.models import Principal, UserRole
from storehub.errors import AccessDenied, NotFound
from storehub.services.user_service import UserRecord, UserService

router = APIRouter(prefix="/api/users", tags=["users"])


class UserCreateRequest(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(min_length=6)
    role: UserRole
    # Defaults to the caller's entity; any other entity is refused.
    entity_id: int | None = None


class UserUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=2, max_length=100)
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=6)
    role: UserRole | None = None
    entity_id: int | None = None


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    role: UserRole
    entity_id: int
    entity_name: str
    created_at: datetime
    updated_at: datetime | None

    model_config = {"from_attributes": True}


async def _user_in_entity(users: UserService, user_id: int, principal: Principal) -> UserRecord:
    record = await users.get_user(user_id)
    if record is None:
        raise NotFound("User not found")
    if not validate_entity_access(record.entity_id, principal):
        raise AccessDenied("Access denied to this user")
    return record


@router.post("/register", response_model=UserResponse, status_code=HTTP_201_CREATED)
async def create_user(
    body: UserCreateRequest,
    principal: Principal = Depends(require_admin),
    users: UserService = Depends(user_service),
) -> UserResponse:
    entity_id = body.entity_id if body.entity_id is not None else principal.entity_id
    if not validate_entity_access(entity_id, principal):
        raise AccessDenied("Access denied to this entity")
    record = await users.create_user(
        name=body.name,
        email=body.email,
        password=body.password,
        entity_id=entity_id,
        role=body.role,
    )
    return UserResponse.model_validate(record)


@router.get("", response_model=list[UserResponse])
async def list_users(
    principal: Principal = Depends(get_principal),
    users: UserService = Depends(user_service),
) -> list[UserResponse]:
    return [UserResponse.model_validate(r) for r in await users.list_for_entity(principal.entity_id)]


@router.get("/entity/{entity_id}", response_model=list[UserResponse])
async def list_users_by_entity(
    entity_id: int,
    principal: Principal = Depends(get_principal),
    users: UserService = Depends(user_service),
) -> list[UserResponse]:
    if not validate_entity_access(entity_id, principal):
        raise AccessDenied("Access denied to this entity's users")
    return [UserResponse.model_validate(r) for r in await users.list_for_entity(entity_id)]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    principal: Principal = Depends(get_principal),
    users: UserService = Depends(user_service),
) -> UserResponse:
    return UserResponse.model_validate(await _user_in_entity(users, user_id, principal))


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    body: UserUpdateRequest,
    principal: Principal = Depends(require_admin),
    users: UserService = Depends(user_service),
) -> UserResponse:
    await _user_in_entity(users, user_id, principal)
    record = await users.update_user(
        user_id,
        name=body.name,
        email=body.email,
        password=body.password,
        role=body.role,
        entity_id=body.entity_id,
    )
    return UserResponse.model_validate(record)


@router.delete("/{user_id}", status_code=HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    principal: Principal = Depends(require_admin),
    users: UserService = Depends(user_service),
) -> Response:
    await _user_in_entity(users, user_id, principal)
    await users.delete_user(user_id)
    return Response(status_code=HTTP_204_NO_CONTENT)
