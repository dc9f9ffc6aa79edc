"""In-process stores for development, tests and single-node deployments."""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Dict, List, Optional, Sequence

from contacts.core.exceptions import UsernameTakenError
from contacts.models import Contact, UserRecord

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


class InMemoryCredentialStore:
    def __init__(self) -> None:
        self._users: Dict[str, UserRecord] = {}
        self._lock = asyncio.Lock()

    async def find_by_username(self, username: str) -> Optional[UserRecord]:
        user = self._users.get(username)
        return user.model_copy() if user else None

    async def save(self, user: UserRecord) -> UserRecord:
        async with self._lock:
            existing = self._users.get(user.username)
            if existing is not None and existing.id != user.id:
                raise UsernameTakenError(user.username)
            stored = user.model_copy(update={"id": user.id or _new_id()})
            self._users[stored.username] = stored
        return stored.model_copy()


class InMemoryContactStore:
    """Insertion-ordered contact storage.

    Bulk replacement builds the next collection aside and swaps the reference,
    so readers never see a half-applied replacement.
    """

    def __init__(self) -> None:
        self._contacts: Dict[str, Contact] = {}
        self._lock = asyncio.Lock()

    async def find_all(self) -> List[Contact]:
        return [contact.model_copy() for contact in self._contacts.values()]

    async def find_by_owner(self, owner_username: str) -> List[Contact]:
        return [
            contact.model_copy()
            for contact in self._contacts.values()
            if contact.owner_username == owner_username
        ]

    async def find_by_id(self, contact_id: str) -> Optional[Contact]:
        contact = self._contacts.get(contact_id)
        return contact.model_copy() if contact else None

    async def save(self, contact: Contact) -> Contact:
        async with self._lock:
            stored = contact.model_copy(update={"id": contact.id or _new_id()})
            contacts = dict(self._contacts)
            contacts[stored.id] = stored
            self._contacts = contacts
        return stored.model_copy()

    async def delete(self, contact_id: str) -> bool:
        async with self._lock:
            if contact_id not in self._contacts:
                return False
            contacts = dict(self._contacts)
            del contacts[contact_id]
            self._contacts = contacts
        return True

    async def count(self) -> int:
        return len(self._contacts)

    async def replace_owned(self, owner_username: str, contacts: Sequence[Contact]) -> List[Contact]:
        inserted = [contact.model_copy(update={"id": _new_id()}) for contact in contacts]
        async with self._lock:
            retained = {
                contact_id: contact
                for contact_id, contact in self._contacts.items()
                if contact.owner_username != owner_username
            }
            removed = len(self._contacts) - len(retained)
            for contact in inserted:
                retained[contact.id] = contact
            self._contacts = retained
        logger.debug("Replaced %s contacts of %s with %s", removed, owner_username, len(inserted))
        return [contact.model_copy() for contact in inserted]


__all__ = ["InMemoryContactStore", "InMemoryCredentialStore"]
