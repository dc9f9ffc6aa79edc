"""Wiring of stores and services for one running process."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from contacts.core.config import Settings, settings
from contacts.core.database import DatabaseManager
from contacts.core.security import PasswordHasher, TokenCodec, get_password_hasher, get_token_codec
from contacts.services.auth import Authenticator
from contacts.services.directory import ContactDirectory
from contacts.storage.base import ContactStore, CredentialStore
from contacts.storage.memory import InMemoryContactStore, InMemoryCredentialStore
from contacts.storage.mongo import MongoContactStore, MongoCredentialStore

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    credentials: CredentialStore
    contacts: ContactStore
    authenticator: Authenticator
    directory: ContactDirectory

    @classmethod
    def assemble(
        cls,
        credentials: CredentialStore,
        contacts: ContactStore,
        *,
        tokens: Optional[TokenCodec] = None,
        hasher: Optional[PasswordHasher] = None,
    ) -> "ServiceContainer":
        authenticator = Authenticator(credentials, tokens or get_token_codec(), hasher or get_password_hasher())
        return cls(
            credentials=credentials,
            contacts=contacts,
            authenticator=authenticator,
            directory=ContactDirectory(contacts),
        )

    @classmethod
    def in_memory(
        cls,
        *,
        tokens: Optional[TokenCodec] = None,
        hasher: Optional[PasswordHasher] = None,
    ) -> "ServiceContainer":
        return cls.assemble(InMemoryCredentialStore(), InMemoryContactStore(), tokens=tokens, hasher=hasher)


async def build_container(database: DatabaseManager, config: Settings = settings) -> ServiceContainer:
    """Select the storage backend from configuration and wire the services."""

    if config.STORAGE_BACKEND != "mongodb":
        return ServiceContainer.in_memory()

    await database.initialize()
    db = database.database()
    credentials = MongoCredentialStore(db)
    contacts = MongoContactStore(database.mongodb, db)
    await credentials.ensure_indexes()
    await contacts.ensure_indexes()
    logger.info("MongoDB stores ready")
    return ServiceContainer.assemble(credentials, contacts)


__all__ = ["ServiceContainer", "build_container"]
