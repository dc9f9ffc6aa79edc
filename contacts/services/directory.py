"""Ownership-scoped contact directory.

Every operation takes the resolved caller explicitly. Visibility and write
permissions come from `contacts.services.authorization`; the store below is
policy free. Bulk replacement validates the whole incoming set before the
store is touched, then hands the delete-and-insert to the store as a single
atomic unit.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Union

from contacts.core.exceptions import ContactNotFoundError, ContactValidationError, ForbiddenError
from contacts.models import Caller, Contact, ContactDTO, ContactPayload, Violation
from contacts.services.authorization import can_access, can_create, can_import, sees_everything
from contacts.services.validation import contact_fields, validate_contact
from contacts.storage.base import ContactStore
from contacts.utils.audit import audit_log

logger = logging.getLogger(__name__)

ContactRecord = Union[ContactPayload, ContactDTO]


class ContactDirectory:
    def __init__(self, contacts: ContactStore) -> None:
        self._contacts = contacts

    async def list(self, caller: Caller) -> List[Contact]:
        if sees_everything(caller):
            return await self._contacts.find_all()
        return await self._contacts.find_by_owner(caller.username)

    async def get(self, caller: Caller, contact_id: str) -> Contact:
        return await self._load_accessible(caller, contact_id)

    @audit_log
    async def add(self, caller: Caller, payload: ContactRecord) -> Contact:
        if not can_create(caller):
            raise ForbiddenError("Admin cannot create contacts")

        contact = self._build(payload, owner_username=caller.username)
        self._raise_on_violations(validate_contact(contact))
        saved = await self._contacts.save(contact)
        logger.info("Contact %s created for %s", saved.id, caller.username)
        return saved

    @audit_log
    async def update(self, caller: Caller, contact_id: str, payload: ContactRecord) -> Contact:
        existing = await self._load_accessible(caller, contact_id)

        updated = existing.model_copy(update=contact_fields(payload))
        self._raise_on_violations(validate_contact(updated))
        return await self._contacts.save(updated)

    @audit_log
    async def delete(self, caller: Caller, contact_id: str) -> bool:
        existing = await self._contacts.find_by_id(contact_id)
        if existing is None:
            return False
        if not can_access(caller, existing):
            raise ForbiddenError("Forbidden")
        return await self._contacts.delete(contact_id)

    async def export_all(self, caller: Caller) -> List[ContactDTO]:
        return [contact.to_dto() for contact in await self.list(caller)]

    @audit_log
    async def replace_all(self, caller: Caller, payload: Optional[Sequence[ContactRecord]]) -> List[Contact]:
        """Swap the caller's whole contact set for `payload`.

        Nothing is written unless every incoming record is valid.
        """

        if not can_import(caller):
            raise ForbiddenError("Admin cannot import contacts")

        incoming = [self._build(record, owner_username=caller.username) for record in payload or ()]
        violations: List[Violation] = []
        for index, contact in enumerate(incoming):
            violations.extend(validate_contact(contact, prefix=f"contacts[{index}]."))
        self._raise_on_violations(violations)

        stored = await self._contacts.replace_owned(caller.username, incoming)
        logger.info("Imported %s contacts for %s", len(stored), caller.username)
        return stored

    async def _load_accessible(self, caller: Caller, contact_id: str) -> Contact:
        contact = await self._contacts.find_by_id(contact_id)
        if contact is None:
            raise ContactNotFoundError(contact_id)
        if not can_access(caller, contact):
            raise ForbiddenError("Forbidden")
        return contact

    @staticmethod
    def _build(record: ContactRecord, *, owner_username: str) -> Contact:
        # model_construct skips type checks so invalid input reaches validate_contact
        return Contact.model_construct(id=None, owner_username=owner_username, **contact_fields(record))

    @staticmethod
    def _raise_on_violations(violations: Iterable[Violation]) -> None:
        violations = list(violations)
        if violations:
            raise ContactValidationError(violations)


__all__ = ["ContactDirectory"]
