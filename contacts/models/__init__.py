from .contact import Contact, ContactDTO, ContactPayload, Violation
from .user import Caller, Role, UserRecord

__all__ = [
    "Caller",
    "Contact",
    "ContactDTO",
    "ContactPayload",
    "Role",
    "UserRecord",
    "Violation",
]
