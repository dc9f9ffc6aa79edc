"""Database connectivity layer for the contacts service."""

from __future__ import annotations

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from contacts.core.config import Settings, settings

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Lazily establishes the MongoDB connection when that backend is selected."""

    def __init__(self, config: Settings = settings) -> None:
        self._config = config
        self.mongodb: Optional[AsyncIOMotorClient] = None

    @property
    def enabled(self) -> bool:
        return self._config.STORAGE_BACKEND == "mongodb"

    async def initialize(self) -> None:
        """Connect to the configured backing store."""

        if not self.enabled:
            logger.info("Using in-memory storage backend")
            return

        logger.info("Connecting to MongoDB database %s", self._config.MONGODB_DATABASE)
        self.mongodb = AsyncIOMotorClient(str(self._config.MONGODB_URL))

    def database(self) -> AsyncIOMotorDatabase:
        if self.mongodb is None:
            raise RuntimeError("MongoDB unavailable; call initialize() first.")
        return self.mongodb[self._config.MONGODB_DATABASE]

    async def close(self) -> None:
        """Tear down connections gracefully."""

        if self.mongodb is not None:
            logger.info("Closing MongoDB connection")
            self.mongodb.close()
            self.mongodb = None


# Singleton instance used by the service container
database_manager = DatabaseManager()
