from __future__ import annotations

from fastapi import Depends, Request

from contacts.api.security import authenticate_caller
from contacts.models import Caller
from contacts.services.auth import Authenticator
from contacts.services.container import ServiceContainer
from contacts.services.directory import ContactDirectory


async def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


async def get_authenticator(container: ServiceContainer = Depends(get_container)) -> Authenticator:
    return container.authenticator


async def get_directory(container: ServiceContainer = Depends(get_container)) -> ContactDirectory:
    return container.directory


async def get_current_caller(caller: Caller = Depends(authenticate_caller)) -> Caller:
    return caller
