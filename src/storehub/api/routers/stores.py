"""
storehub.api.routers.stores

Store endpoints, scoped to the caller's entity.

Responsibilities:
- Create/read/list/rename/soft-delete stores.
- Gate every store-addressed call through `AccessGuard.validate_store_access`.
"""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from storehub.api.deps import access_guard, store_service
from storehub.auth.deps import get_principal
from storehub.auth.guard import AccessGuard, validate_entity_access
from storehub.auth.models import Principal
from storehub.db.models import Store
from storehub.errors import AccessDenied, NotFound
from storehub.services.store_service import StoreService

router = APIRouter(prefix="/api/stores", tags=["stores"])


class StoreCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    entity_id: int


class StoreUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)


class StoreResponse(BaseModel):
    id: int
    name: str
    entity_id: int
    created_at: datetime
    updated_at: datetime | None

    model_config = {"from_attributes": True}


async def _accessible_store(
    store_id: int, principal: Principal, stores: StoreService, guard: AccessGuard
) -> Store:
    store = await stores.get_store(store_id)
    if store is None:
        raise NotFound("Store not found")
    if not await guard.validate_store_access(store_id, principal.entity_id):
        raise AccessDenied("Access denied to this store")
    return store


@router.post("/register", response_model=StoreResponse, status_code=HTTP_201_CREATED)
async def create_store(
    body: StoreCreateRequest,
    principal: Principal = Depends(get_principal),
    stores: StoreService = Depends(store_service),
) -> StoreResponse:
    if not validate_entity_access(body.entity_id, principal):
        raise AccessDenied("Access denied to this entity")
    store = await stores.create_store(name=body.name, entity_id=body.entity_id)
    return StoreResponse.model_validate(store)


@router.get("/entity/{entity_id}", response_model=list[StoreResponse])
async def list_stores_by_entity(
    entity_id: int,
    principal: Principal = Depends(get_principal),
    stores: StoreService = Depends(store_service),
) -> list[StoreResponse]:
    if not validate_entity_access(entity_id, principal):
        raise AccessDenied("Access denied to this entity's stores")
    return [StoreResponse.model_validate(s) for s in await stores.list_for_entity(entity_id)]


@router.get("/{store_id}", response_model=StoreResponse)
async def get_store(
    store_id: int,
    principal: Principal = Depends(get_principal),
    stores: StoreService = Depends(store_service),
    guard: AccessGuard = Depends(access_guard),
) -> StoreResponse:
    store = await _accessible_store(store_id, principal, stores, guard)
    return StoreResponse.model_validate(store)


@router.put("/{store_id}", response_model=StoreResponse)
async def update_store(
    store_id: int,
    body: StoreUpdateRequest,
    principal: Principal = Depends(get_principal),
    stores: StoreService = Depends(store_service),
    guard: AccessGuard = Depends(access_guard),
) -> StoreResponse:
    await _accessible_store(store_id, principal, stores, guard)
    store = await stores.update_store(store_id, name=body.name)
    return StoreResponse.model_validate(store)


@router.delete("/{store_id}", status_code=HTTP_204_NO_CONTENT)
async def delete_store(
    store_id: int,
    principal: Principal = Depends(get_principal),
    stores: StoreService = Depends(store_service),
    guard: AccessGuard = Depends(access_guard),
) -> Response:
    await _accessible_store(store_id, principal, stores, guard)
    await stores.delete_store(store_id)
    return Response(status_code=HTTP_204_NO_CONTENT)
