"""Bearer token resolution for API routes."""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from contacts.core.exceptions import TokenError
from contacts.models import Caller
from contacts.services.container import ServiceContainer

_http_bearer = HTTPBearer(auto_error=False)


async def authenticate_caller(
    request: Request,
    bearer_token: Optional[HTTPAuthorizationCredentials] = Depends(_http_bearer),
) -> Caller:
    if not bearer_token or not bearer_token.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    container: ServiceContainer = request.app.state.container
    try:
        caller = await container.authenticator.resolve_caller(bearer_token.credentials)
    except TokenError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=exc.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc

    request.state.caller = caller
    return caller


__all__ = ["authenticate_caller"]
