"""Ownership and role predicates.

These are the only place where `Role` decides anything. Callers never
branch on the role themselves.
"""

from __future__ import annotations

from contacts.models import Caller, Contact, Role


def can_access(caller: Caller, contact: Contact) -> bool:
    """Owners see their own contacts; admins see everyone's."""

    return contact.owner_username == caller.username or caller.role is Role.ADMIN


def can_create(caller: Caller) -> bool:
    # Admins manage contacts but never own any.
    return caller.role is not Role.ADMIN


def can_import(caller: Caller) -> bool:
    return can_create(caller)


def sees_everything(caller: Caller) -> bool:
    return caller.role is Role.ADMIN


__all__ = ["can_access", "can_create", "can_import", "sees_everything"]
