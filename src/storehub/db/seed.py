"""
storehub.db.seed

Bootstrap data for a fresh database (`python -m storehub.db.seed`).

Responsibilities:
- Create tables if needed.
- Ensure an administrative entity and an admin user exist (idempotent).
"""

from __future__ import annotations

import asyncio

from storehub.auth.models import UserRole
from storehub.auth.passwords import PasswordHasher
from storehub.db.init_db import init_db
from storehub.db.repositories.entities import EntityRepo
from storehub.db.repositories.users import UserRepo
from storehub.db.session import create_engine, create_sessionmaker, session_scope
from storehub.observability.logging import configure_logging, get_logger
from storehub.settings import Settings, get_settings

log = get_logger(__name__)


async def seed(settings: Settings) -> None:
    engine = create_engine(settings)
    try:
        await init_db(engine)
        async with session_scope(create_sessionmaker(engine)) as session:
            entities = EntityRepo(session)
            users = UserRepo(session)

            entity = await entities.find_by_name(settings.seed_entity_name)
            if entity is None:
                entity = await entities.create(name=settings.seed_entity_name)
                log.info("seed_entity_created", entity_id=entity.id)

            if await users.find_by_email(settings.seed_admin_email) is None:
                hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
                admin = await users.create(
                    name="Administrator",
                    email=settings.seed_admin_email,
                    password_hash=hasher.hash(settings.seed_admin_password),
                    entity_id=entity.id,
                    role=UserRole.admin,
                )
                log.info("seed_admin_created", user_id=admin.id, entity_id=entity.id)

            await session.commit()
    finally:
        await engine.dispose()


def main() -> None:
    settings = get_settings()
    configure_logging(service_name=settings.service_name, level=settings.log_level)
    asyncio.run(seed(settings))


if __name__ == "__main__":
    main()
