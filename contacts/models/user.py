from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class Role(str, Enum):
    STANDARD = "STANDARD"
    ADMIN = "ADMIN"


class UserRecord(BaseModel):
    id: Optional[str] = None
    username: str
    password_hash: str
    role: Role = Role.STANDARD


class Caller(BaseModel):
    """Resolved identity of whoever is invoking a directory operation."""

    model_config = ConfigDict(frozen=True)

    username: str
    role: Role = Role.STANDARD

    @classmethod
    def from_user(cls, user: UserRecord) -> "Caller":
        return cls(username=user.username, role=user.role)
