"""
tests.test_smoke

Smoke tests to validate the service can boot and serve core endpoints.

Responsibilities:
- Ensure the FastAPI app starts and the DB readiness probe works in test mode.
- Ensure readiness reports whether self-registration has a tenant.
"""

from __future__ import annotations

import httpx
import jwt
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from conftest import make_entity
from storehub.api.app import create_app
from storehub.auth.models import UserRole


@pytest.mark.asyncio
async def test_health_endpoints(client: httpx.AsyncClient) -> None:
    r = await client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
    assert r.headers["x-request-id"]

    r = await client.get("/readyz")
    assert r.status_code == 200
    assert r.json() == {"status": "ready", "registration_open": False}


@pytest.mark.asyncio
async def test_readiness_reports_open_registration(
    client: httpx.AsyncClient, session: AsyncSession
) -> None:
    await make_entity(session)

    r = await client.get("/readyz")
    assert r.json()["registration_open"] is True


@pytest.mark.asyncio
async def test_request_id_is_propagated(client: httpx.AsyncClient) -> None:
    r = await client.get("/healthz", headers={"x-request-id": "req-123"})
    assert r.headers["x-request-id"] == "req-123"


def test_app_components_follow_the_settings_it_was_built_with(settings) -> None:
    custom = settings.model_copy(update={"jwt_issuer": "custom-issuer", "bcrypt_rounds": 5})
    app = create_app(settings=custom)

    token = app.state.codec.issue(user_id=1, entity_id=1, role=UserRole.seller)

    assert jwt.decode(token, options={"verify_signature": False})["iss"] == "custom-issuer"
    assert app.state.hasher.hash("pw123456").startswith("$2b$05$")
