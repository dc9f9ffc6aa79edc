"""Contact data model definitions.

Field names are snake_case in Python and camelCase on the wire
(`firstName`, `lastName`, `email`, `phone`, `ownerUsername`).
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Contact(_WireModel):
    id: Optional[str] = None
    first_name: str
    last_name: str
    email: str
    phone: str
    owner_username: str

    def to_dto(self) -> "ContactDTO":
        return ContactDTO(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            phone=self.phone,
        )


class ContactPayload(_WireModel):
    """Caller supplied contact fields.

    Unknown keys (including `id` and `ownerUsername`) are dropped; the
    directory decides ownership and identity.
    """

    model_config = ConfigDict(extra="ignore")

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class ContactDTO(_WireModel):
    """Portable export/import shape: no id, no owner."""

    first_name: str
    last_name: str
    email: str
    phone: str


class Violation(BaseModel):
    field: str
    message: str
