"""Storage contracts consumed by the auth and directory services.

Stores own no policy. Ownership and role checks live in
`contacts.services.authorization` and are applied before anything here is
called.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence

from contacts.models import Contact, UserRecord


class CredentialStore(Protocol):
    async def find_by_username(self, username: str) -> Optional[UserRecord]: ...

    async def save(self, user: UserRecord) -> UserRecord: ...


class ContactStore(Protocol):
    async def find_all(self) -> List[Contact]: ...

    async def find_by_owner(self, owner_username: str) -> List[Contact]: ...

    async def find_by_id(self, contact_id: str) -> Optional[Contact]: ...

    async def save(self, contact: Contact) -> Contact: ...

    async def delete(self, contact_id: str) -> bool: ...

    async def count(self) -> int: ...

    async def replace_owned(self, owner_username: str, contacts: Sequence[Contact]) -> List[Contact]:
        """Delete every contact of `owner_username` and insert `contacts` as one unit.

        Inserted records receive fresh ids. Concurrent readers observe either
        the previous set or the new one, never a mix or an empty gap.
        """
        ...


__all__ = ["ContactStore", "CredentialStore"]
