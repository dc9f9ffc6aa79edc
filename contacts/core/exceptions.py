"""Custom exception hierarchy for the contacts service."""

from __future__ import annotations

from typing import List, Sequence

from fastapi import status

from contacts.models.contact import Violation


class ApplicationError(Exception):
    """Base application error with HTTP semantics."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "application_error"

    def __init__(self, message: str, *, status_code: int | None = None, code: str | None = None) -> None:
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        self.message = message


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------


class AuthError(ApplicationError):
    code = "auth_error"


class UsernameTakenError(AuthError):
    code = "username_taken"

    def __init__(self, username: str) -> None:
        super().__init__("Username already exists")
        self.username = username


class InvalidCredentialsError(AuthError):
    """Raised for unknown usernames and wrong passwords alike."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "invalid_credentials"

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class TokenError(ApplicationError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "token_error"


class MalformedTokenError(TokenError):
    code = "token_malformed"


class ExpiredTokenError(TokenError):
    code = "token_expired"


# ---------------------------------------------------------------------------
# Contact directory
# ---------------------------------------------------------------------------


class DirectoryError(ApplicationError):
    code = "directory_error"


class ContactNotFoundError(DirectoryError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"

    def __init__(self, contact_id: str) -> None:
        super().__init__(f"Contact '{contact_id}' not found")
        self.contact_id = contact_id


class ForbiddenError(DirectoryError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"


class ContactValidationError(DirectoryError):
    status_code = status.HTTP_422_UNPROCESSABLE_CONTENT
    code = "validation_error"

    def __init__(self, violations: Sequence[Violation]) -> None:
        super().__init__("Contact failed validation")
        self.violations: List[Violation] = list(violations)


class TransferFormatError(ApplicationError):
    """Raised when an import body matches neither the wrapped nor the bare shape."""

    code = "invalid_format"
