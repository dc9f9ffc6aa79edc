"""Token signing and password hashing primitives."""

from __future__ import annotations

import asyncio
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Callable, Dict, Optional

import bcrypt
from jose import JWTError, jwt

from contacts.core.config import settings
from contacts.core.exceptions import ExpiredTokenError, MalformedTokenError

Clock = Callable[[], datetime]

# bcrypt only consumes the first 72 bytes of a secret
_BCRYPT_MAX_BYTES = 72


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Claims:
    subject: str
    token_id: str
    issued_at: datetime
    expires_at: datetime


class TokenCodec:
    """Issues and verifies HMAC-signed JWT bearer tokens.

    The signing key is fixed for the lifetime of the codec. Expiry is checked
    here against the codec's clock rather than by the JWT library, so a zero
    TTL yields a token that is already expired.
    """

    def __init__(
        self,
        secret_key: str,
        ttl: timedelta,
        *,
        algorithm: str = "HS256",
        clock: Optional[Clock] = None,
    ) -> None:
        if not secret_key:
            raise ValueError("Token signing key must not be empty")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self.ttl = ttl
        self._clock = clock or _utcnow

    def issue(self, subject: str) -> str:
        now = self._clock()
        payload: Dict[str, Any] = {
            "sub": subject,
            "jti": uuid.uuid4().hex,
            "iat": int(now.timestamp()),
            "exp": int((now + self.ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> Claims:
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except JWTError as exc:
            raise MalformedTokenError("Invalid token") from exc

        subject = payload.get("sub")
        expires = payload.get("exp")
        if not isinstance(subject, str) or not subject or not isinstance(expires, (int, float)):
            raise MalformedTokenError("Invalid token")

        expires_at = datetime.fromtimestamp(expires, tz=timezone.utc)
        if self._clock() >= expires_at:
            raise ExpiredTokenError("Token expired")

        issued = payload.get("iat", expires)
        return Claims(
            subject=subject,
            token_id=str(payload.get("jti", "")),
            issued_at=datetime.fromtimestamp(issued, tz=timezone.utc),
            expires_at=expires_at,
        )

    def extract_subject(self, token: str) -> str:
        return self.verify(token).subject


class PasswordHasher:
    """Salted bcrypt hashing executed off the event loop."""

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds
        self._dummy_hash: Optional[bytes] = None

    async def hash(self, raw_password: str) -> str:
        return await asyncio.to_thread(self._hash_sync, raw_password)

    async def verify(self, raw_password: str, password_hash: str) -> bool:
        return await asyncio.to_thread(self._verify_sync, raw_password, password_hash)

    async def burn(self, raw_password: str) -> None:
        """Spend the same effort as a real check against a throwaway hash."""

        if self._dummy_hash is None:
            self._dummy_hash = (await self.hash(uuid.uuid4().hex)).encode("utf-8")
        await asyncio.to_thread(bcrypt.checkpw, self._encode(raw_password), self._dummy_hash)

    def _hash_sync(self, raw_password: str) -> str:
        hashed = bcrypt.hashpw(self._encode(raw_password), bcrypt.gensalt(rounds=self.rounds))
        return hashed.decode("utf-8")

    def _verify_sync(self, raw_password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(self._encode(raw_password), password_hash.encode("utf-8"))
        except ValueError:
            # stored value is not a bcrypt hash
            return False

    @staticmethod
    def _encode(raw_password: str) -> bytes:
        return raw_password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


@lru_cache()
def get_token_codec() -> TokenCodec:
    return TokenCodec(
        settings.JWT_SECRET_KEY,
        timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        algorithm=settings.JWT_ALGORITHM,
    )


@lru_cache()
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=settings.BCRYPT_ROUNDS)


__all__ = [
    "Claims",
    "PasswordHasher",
    "TokenCodec",
    "get_password_hasher",
    "get_token_codec",
]
