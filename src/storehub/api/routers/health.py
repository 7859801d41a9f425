"""
storehub.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) with DB connectivity validation and a
  flag telling whether self-registration has a tenant to land in.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from storehub.api.deps import auth_policy, db_session
from storehub.db.repositories.entities import EntityRepo
from storehub.services.auth_service import AuthPolicy

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(
    session: AsyncSession = Depends(db_session),
    policy: AuthPolicy = Depends(auth_policy),
) -> dict[str, Any]:
    await session.execute(text("SELECT 1"))
    entities = EntityRepo(session)
    if policy.default_entity_id is not None:
        target = await entities.find_by_id(policy.default_entity_id)
    else:
        target = await entities.find_first_live()
    return {"status": "ready", "registration_open": target is not None}
