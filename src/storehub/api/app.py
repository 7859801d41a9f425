"""
storehub.api.app

FastAPI app factory for the storehub service.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers.
- Build the immutable auth components (hasher, token codec, policy) once from
  settings and share them through app.state.
- Initialize and dispose shared infrastructure (DB engine/session factory).
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI

from storehub.api.errors import register_error_handlers
from storehub.api.routers.auth import router as auth_router
from storehub.api.routers.health import router as health_router
from storehub.api.routers.sellers import router as sellers_router
from storehub.api.routers.stores import router as stores_router
from storehub.api.routers.users import router as users_router
from storehub.auth.jwt import JwtConfig, TokenCodec
from storehub.auth.passwords import PasswordHasher
from storehub.db.init_db import init_db
from storehub.db.session import create_engine, create_sessionmaker
from storehub.observability.logging import configure_logging, get_logger
from storehub.observability.middleware import RequestContextMiddleware
from storehub.services.auth_service import AuthPolicy
from storehub.settings import Settings

log = get_logger(__name__)

# Receives (email, raw reset token) for out-of-band delivery.
ResetTokenSink = Callable[[str, str], None]


def jwt_config(settings: Settings) -> JwtConfig:
    return JwtConfig(
        alg=settings.jwt_alg,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        secret=settings.jwt_secret,
    )


def create_app(*, settings: Settings, reset_token_sink: ResetTokenSink | None = None) -> FastAPI:
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        # Routers obtain sessions via dependencies (see `storehub.api.deps`).
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Dev/test convenience: create tables automatically. Prod should use Alembic migrations.
            await init_db(engine)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="storehub",
        version="0.1.0",
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Process-wide and never mutated after this point.
    app.state.hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.codec = TokenCodec(
        jwt_config(settings), ttl=timedelta(seconds=settings.token_ttl_seconds)
    )
    app.state.auth_policy = AuthPolicy(
        default_entity_id=settings.default_entity_id,
        reset_token_ttl=timedelta(minutes=settings.password_reset_ttl_minutes),
    )
    app.state.reset_token_sink = reset_token_sink

    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)
    app.include_router(health_router, tags=["health"])
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(stores_router)
    app.include_router(sellers_router)

    return app


# --- Module Notes -----------------------------------------------------------
# App composition stays here; business logic stays in services and the auth core.
