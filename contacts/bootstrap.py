"""Startup data: the default administrator and optional demo records."""

from __future__ import annotations

import logging

from contacts.core.config import Settings
from contacts.models import Contact, Role, UserRecord
from contacts.services.container import ServiceContainer

logger = logging.getLogger(__name__)

DEMO_USERNAME = "cruduser"
DEMO_PASSWORD = "pass"
DEMO_CONTACT = {
    "first_name": "Jan",
    "last_name": "Kowalski",
    "email": "jan.k@example.com",
    "phone": "123456789",
}


async def ensure_admin(container: ServiceContainer, username: str, password: str) -> UserRecord:
    existing = await container.credentials.find_by_username(username)
    if existing is not None:
        return existing
    user = await container.authenticator.register(username, password, role=Role.ADMIN)
    logger.warning("Created default admin account '%s'; change its password for production use", username)
    return user


async def seed_demo_data(container: ServiceContainer) -> None:
    """Create the demo user, and its demo contact when the store is empty."""

    if await container.credentials.find_by_username(DEMO_USERNAME) is None:
        await container.authenticator.register(DEMO_USERNAME, DEMO_PASSWORD)
        logger.info("Created demo user %s", DEMO_USERNAME)

    if await container.contacts.count() == 0:
        # Written straight to the store: seeding has no caller to authorize.
        await container.contacts.save(Contact(owner_username=DEMO_USERNAME, **DEMO_CONTACT))
        logger.info("Created demo contact for %s", DEMO_USERNAME)


async def bootstrap(container: ServiceContainer, config: Settings) -> None:
    if config.BOOTSTRAP_ADMIN:
        await ensure_admin(container, config.ADMIN_USERNAME, config.ADMIN_PASSWORD)
    if config.SEED_DEMO_DATA:
        await seed_demo_data(container)


__all__ = ["bootstrap", "ensure_admin", "seed_demo_data"]
