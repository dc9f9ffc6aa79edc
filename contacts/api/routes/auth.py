"""Registration, login and identity endpoints."""

from __future__ import annotations

from typing import Dict

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from contacts.api.dependencies import get_authenticator, get_current_caller
from contacts.core.exceptions import InvalidCredentialsError
from contacts.models import Caller, Role
from contacts.services.auth import Authenticator
from contacts.utils.monitoring import observe_login

router = APIRouter(prefix="/auth", tags=["auth"])


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"


class IdentityResponse(BaseModel):
    username: str
    role: Role


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    authenticator: Authenticator = Depends(get_authenticator),
) -> Dict[str, str]:
    await authenticator.register(payload.username, payload.password)
    return {"detail": "User registered"}


@router.post("/login", response_model=LoginResponse)
async def login(
    payload: LoginRequest,
    authenticator: Authenticator = Depends(get_authenticator),
) -> LoginResponse:
    try:
        token = await authenticator.login(payload.username, payload.password)
    except InvalidCredentialsError:
        observe_login(False)
        raise
    observe_login(True)
    return LoginResponse(token=token)


@router.get("/me", response_model=IdentityResponse)
async def me(caller: Caller = Depends(get_current_caller)) -> IdentityResponse:
    return IdentityResponse(username=caller.username, role=caller.role)
