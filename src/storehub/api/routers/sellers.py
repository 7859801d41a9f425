"""
storehub.api.routers.sellers

Seller endpoints, reachable only through a store the caller's entity owns.
"""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, EmailStr, Field
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from storehub.api.deps import access_guard, seller_service, store_service
from storehub.auth.deps import get_principal
from storehub.auth.guard import AccessGuard
from storehub.auth.models import Principal
from storehub.db.models import Seller
from storehub.errors import AccessDenied, NotFound
from storehub.services.seller_service import SellerService
from storehub.services.store_service import StoreService

router = APIRouter(prefix="/api/sellers", tags=["sellers"])


class SellerCreateRequest(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    store_id: int


class SellerUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=2, max_length=100)
    email: EmailStr | None = None


class SellerResponse(BaseModel):
    id: int
    name: str
    email: str
    store_id: int
    created_at: datetime
    updated_at: datetime | None

    model_config = {"from_attributes": True}


async def _require_store_access(
    store_id: int, principal: Principal, stores: StoreService, guard: AccessGuard
) -> None:
    if await stores.get_store(store_id) is None:
        raise NotFound("Store not found")
    if not await guard.validate_store_access(store_id, principal.entity_id):
        raise AccessDenied("Access denied to this store")


async def _accessible_seller(
    seller_id: int, principal: Principal, sellers: SellerService, guard: AccessGuard
) -> Seller:
    seller = await sellers.get_seller(seller_id)
    if seller is None:
        raise NotFound("Seller not found")
    if not await guard.validate_seller_access(seller_id, principal.entity_id):
        raise AccessDenied("Access denied to this seller")
    return seller


@router.post("/register", response_model=SellerResponse, status_code=HTTP_201_CREATED)
async def create_seller(
    body: SellerCreateRequest,
    principal: Principal = Depends(get_principal),
    sellers: SellerService = Depends(seller_service),
    stores: StoreService = Depends(store_service),
    guard: AccessGuard = Depends(access_guard),
) -> SellerResponse:
    await _require_store_access(body.store_id, principal, stores, guard)
    seller = await sellers.create_seller(name=body.name, email=body.email, store_id=body.store_id)
    return SellerResponse.model_validate(seller)


@router.get("/store/{store_id}", response_model=list[SellerResponse])
async def list_sellers_by_store(
    store_id: int,
    principal: Principal = Depends(get_principal),
    sellers: SellerService = Depends(seller_service),
    stores: StoreService = Depends(store_service),
    guard: AccessGuard = Depends(access_guard),
) -> list[SellerResponse]:
    await _require_store_access(store_id, principal, stores, guard)
    return [SellerResponse.model_validate(s) for s in await sellers.list_for_store(store_id)]


@router.get("/{seller_id}", response_model=SellerResponse)
async def get_seller(
    seller_id: int,
    principal: Principal = Depends(get_principal),
    sellers: SellerService = Depends(seller_service),
    guard: AccessGuard = Depends(access_guard),
) -> SellerResponse:
    return SellerResponse.model_validate(
        await _accessible_seller(seller_id, principal, sellers, guard)
    )


@router.put("/{seller_id}", response_model=SellerResponse)
async def update_seller(
    seller_id: int,
    body: SellerUpdateRequest,
    principal: Principal = Depends(get_principal),
    sellers: SellerService = Depends(seller_service),
    guard: AccessGuard = Depends(access_guard),
) -> SellerResponse:
    await _accessible_seller(seller_id, principal, sellers, guard)
    seller = await sellers.update_seller(seller_id, name=body.name, email=body.email)
    return SellerResponse.model_validate(seller)


@router.delete("/{seller_id}", status_code=HTTP_204_NO_CONTENT)
async def delete_seller(
    seller_id: int,
    principal: Principal = Depends(get_principal),
    sellers: SellerService = Depends(seller_service),
    guard: AccessGuard = Depends(access_guard),
) -> Response:
    await _accessible_seller(seller_id, principal, sellers, guard)
    await sellers.delete_seller(seller_id)
    return Response(status_code=HTTP_204_NO_CONTENT)
