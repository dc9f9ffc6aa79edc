"""MongoDB-backed stores built on Motor.

Bulk replacement runs inside a multi-document transaction, which requires the
server to be a replica set member (a single-node replica set is enough).
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Dict, List, Optional, Sequence

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError

from contacts.core.exceptions import UsernameTakenError
from contacts.models import Contact, Role, UserRecord

logger = logging.getLogger(__name__)


class MongoCredentialStore:
    def __init__(self, database: AsyncIOMotorDatabase, collection: str = "users") -> None:
        self._collection: AsyncIOMotorCollection = database[collection]

    async def ensure_indexes(self) -> None:
        await self._collection.create_index([("username", ASCENDING)], unique=True)

    async def find_by_username(self, username: str) -> Optional[UserRecord]:
        document = await self._collection.find_one({"username": username})
        return self._decode(document) if document else None

    async def save(self, user: UserRecord) -> UserRecord:
        user_id = user.id or str(uuid.uuid4())
        document = {
            "username": user.username,
            "password_hash": user.password_hash,
            "role": user.role.value,
        }
        try:
            await self._collection.replace_one({"_id": user_id}, document, upsert=True)
        except DuplicateKeyError as exc:
            raise UsernameTakenError(user.username) from exc
        return user.model_copy(update={"id": user_id})

    @staticmethod
    def _decode(document: Dict[str, Any]) -> UserRecord:
        return UserRecord(
            id=str(document["_id"]),
            username=document["username"],
            password_hash=document["password_hash"],
            role=Role(document.get("role", Role.STANDARD.value)),
        )


class MongoContactStore:
    def __init__(
        self,
        client: AsyncIOMotorClient,
        database: AsyncIOMotorDatabase,
        collection: str = "contacts",
    ) -> None:
        self._client = client
        self._collection: AsyncIOMotorCollection = database[collection]

    async def ensure_indexes(self) -> None:
        await self._collection.create_index([("owner_username", ASCENDING)])

    async def find_all(self) -> List[Contact]:
        cursor = self._collection.find({}).sort("_seq", ASCENDING)
        return [self._decode(document) async for document in cursor]

    async def find_by_owner(self, owner_username: str) -> List[Contact]:
        cursor = self._collection.find({"owner_username": owner_username}).sort("_seq", ASCENDING)
        return [self._decode(document) async for document in cursor]

    async def find_by_id(self, contact_id: str) -> Optional[Contact]:
        document = await self._collection.find_one({"_id": contact_id})
        return self._decode(document) if document else None

    async def save(self, contact: Contact) -> Contact:
        contact_id = contact.id or str(uuid.uuid4())
        fields = self._encode(contact)
        await self._collection.update_one(
            {"_id": contact_id},
            {"$set": fields, "$setOnInsert": {"_seq": time.time_ns()}},
            upsert=True,
        )
        return contact.model_copy(update={"id": contact_id})

    async def delete(self, contact_id: str) -> bool:
        result = await self._collection.delete_one({"_id": contact_id})
        return result.deleted_count > 0

    async def count(self) -> int:
        return await self._collection.count_documents({})

    async def replace_owned(self, owner_username: str, contacts: Sequence[Contact]) -> List[Contact]:
        inserted = [contact.model_copy(update={"id": str(uuid.uuid4())}) for contact in contacts]
        base_seq = time.time_ns()
        documents = [
            {"_id": contact.id, "_seq": base_seq + index, **self._encode(contact)}
            for index, contact in enumerate(inserted)
        ]

        async with await self._client.start_session() as session:
            async with session.start_transaction():
                removed = await self._collection.delete_many({"owner_username": owner_username}, session=session)
                if documents:
                    await self._collection.insert_many(documents, session=session)

        logger.debug(
            "Replaced %s contacts of %s with %s",
            removed.deleted_count,
            owner_username,
            len(documents),
        )
        return inserted

    @staticmethod
    def _encode(contact: Contact) -> Dict[str, Any]:
        return {
            "first_name": contact.first_name,
            "last_name": contact.last_name,
            "email": contact.email,
            "phone": contact.phone,
            "owner_username": contact.owner_username,
        }

    @staticmethod
    def _decode(document: Dict[str, Any]) -> Contact:
        return Contact(
            id=str(document["_id"]),
            first_name=document["first_name"],
            last_name=document["last_name"],
            email=document["email"],
            phone=document["phone"],
            owner_username=document["owner_username"],
        )


__all__ = ["MongoContactStore", "MongoCredentialStore"]
