from datetime import timedelta

import pytest

from contacts.core.exceptions import (
    ExpiredTokenError,
    InvalidCredentialsError,
    MalformedTokenError,
    UsernameTakenError,
)
from contacts.core.security import PasswordHasher, TokenCodec
from contacts.models import Role
from contacts.services.auth import Authenticator
from contacts.storage.memory import InMemoryCredentialStore

SECRET = "auth-service-secret"


def make_authenticator(ttl=timedelta(hours=1)):
    store = InMemoryCredentialStore()
    tokens = TokenCodec(SECRET, ttl)
    return Authenticator(store, tokens, PasswordHasher(rounds=4)), store, tokens


@pytest.mark.asyncio
@pytest.mark.parametrize("username,password", [("alice", "wonderland"), ("bob", "p@ss word"), ("zoë", "ünïcode")])
async def test_register_then_login_yields_token_for_username(username, password):
    authenticator, _, tokens = make_authenticator()

    await authenticator.register(username, password)
    token = await authenticator.login(username, password)

    assert tokens.extract_subject(token) == username


@pytest.mark.asyncio
async def test_register_stores_standard_user_with_hashed_password():
    authenticator, store, _ = make_authenticator()

    await authenticator.register("alice", "wonderland")
    user = await store.find_by_username("alice")

    assert user is not None
    assert user.id
    assert user.role is Role.STANDARD
    assert user.password_hash != "wonderland"


@pytest.mark.asyncio
async def test_register_duplicate_username_fails():
    authenticator, _, _ = make_authenticator()
    await authenticator.register("alice", "first")

    with pytest.raises(UsernameTakenError):
        await authenticator.register("alice", "second")


@pytest.mark.asyncio
async def test_wrong_password_and_unknown_user_are_indistinguishable():
    authenticator, _, _ = make_authenticator()
    await authenticator.register("alice", "wonderland")

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        await authenticator.login("alice", "looking-glass")
    with pytest.raises(InvalidCredentialsError) as unknown_user:
        await authenticator.login("mallory", "wonderland")

    assert type(wrong_password.value) is type(unknown_user.value)
    assert wrong_password.value.message == unknown_user.value.message
    assert wrong_password.value.status_code == unknown_user.value.status_code
    assert wrong_password.value.code == unknown_user.value.code


@pytest.mark.asyncio
async def test_resolve_caller_returns_role():
    authenticator, _, _ = make_authenticator()
    await authenticator.register("root", "toor", role=Role.ADMIN)
    token = await authenticator.login("root", "toor")

    caller = await authenticator.resolve_caller(token)

    assert caller.username == "root"
    assert caller.role is Role.ADMIN


@pytest.mark.asyncio
async def test_resolve_caller_for_unknown_subject_is_malformed():
    authenticator, _, tokens = make_authenticator()

    with pytest.raises(MalformedTokenError):
        await authenticator.resolve_caller(tokens.issue("ghost"))


@pytest.mark.asyncio
async def test_resolve_caller_rejects_expired_token():
    authenticator, _, _ = make_authenticator(ttl=timedelta(0))
    await authenticator.register("alice", "wonderland")
    token = await authenticator.login("alice", "wonderland")

    with pytest.raises(ExpiredTokenError):
        await authenticator.resolve_caller(token)
