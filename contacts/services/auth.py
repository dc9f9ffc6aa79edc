"""Registration, login and bearer token resolution."""

from __future__ import annotations

import logging

from contacts.core.exceptions import InvalidCredentialsError, MalformedTokenError, UsernameTakenError
from contacts.core.security import PasswordHasher, TokenCodec
from contacts.models import Caller, Role, UserRecord
from contacts.storage.base import CredentialStore

logger = logging.getLogger(__name__)


class Authenticator:
    def __init__(self, credentials: CredentialStore, tokens: TokenCodec, hasher: PasswordHasher) -> None:
        self._credentials = credentials
        self._tokens = tokens
        self._hasher = hasher

    async def register(self, username: str, raw_password: str, *, role: Role = Role.STANDARD) -> UserRecord:
        """Persist a new user; the public registration path always uses STANDARD."""

        if await self._credentials.find_by_username(username) is not None:
            raise UsernameTakenError(username)

        password_hash = await self._hasher.hash(raw_password)
        user = await self._credentials.save(
            UserRecord(username=username, password_hash=password_hash, role=role)
        )
        logger.info("Registered user %s with role %s", username, user.role.value)
        return user

    async def login(self, username: str, raw_password: str) -> str:
        """Return a bearer token, or raise the same error for any bad credential."""

        user = await self._credentials.find_by_username(username)
        if user is None:
            await self._hasher.burn(raw_password)
            raise InvalidCredentialsError()

        if not await self._hasher.verify(raw_password, user.password_hash):
            raise InvalidCredentialsError()

        return self._tokens.issue(user.username)

    async def resolve_caller(self, token: str) -> Caller:
        subject = self._tokens.extract_subject(token)
        user = await self._credentials.find_by_username(subject)
        if user is None:
            raise MalformedTokenError("Invalid token")
        return Caller.from_user(user)


__all__ = ["Authenticator"]
