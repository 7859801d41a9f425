"""
storehub.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (JWT secret, seed password).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Process-wide configuration, read once at startup.

    The auth core never reads this object directly; the app factory derives
    frozen config objects from it (see `storehub.api.app`).
    """

    model_config = SettingsConfigDict(env_prefix="STOREHUB_", case_sensitive=False)

    # dev/test create tables on startup; prod expects `alembic upgrade head`.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "storehub"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Tokens and password hashing
    jwt_alg: str = "HS256"
    jwt_issuer: str = "storehub"
    jwt_audience: str = "storehub-api"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)
    token_ttl_seconds: int = Field(default=24 * 60 * 60, ge=1)
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)
    password_reset_ttl_minutes: int = Field(default=30, ge=1)

    # Tenant receiving self-registered users; falls back to the first live entity.
    default_entity_id: int | None = None

    # Any SQLAlchemy async URL.
    database_url: str = "sqlite+aiosqlite:///./storehub.db"

    # Seed (`python -m storehub.db.seed`)
    seed_entity_name: str = "Admin"
    seed_admin_email: str = "admin@storehub.dev"
    seed_admin_password: str = Field(default="admin123", repr=False)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # One instance per process.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Rotating `jwt_secret` invalidates every outstanding bearer token; there is no
# key-rotation window.
