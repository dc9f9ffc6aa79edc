from datetime import timedelta

import pytest

from contacts.core.security import PasswordHasher, TokenCodec
from contacts.models import Caller, Role
from contacts.services.container import ServiceContainer

TEST_SECRET = "test-signing-key-with-enough-entropy"


def make_container(ttl: timedelta = timedelta(hours=1)) -> ServiceContainer:
    return ServiceContainer.in_memory(
        tokens=TokenCodec(TEST_SECRET, ttl),
        hasher=PasswordHasher(rounds=4),
    )


@pytest.fixture
def container() -> ServiceContainer:
    return make_container()


@pytest.fixture
def alice() -> Caller:
    return Caller(username="alice", role=Role.STANDARD)


@pytest.fixture
def eve() -> Caller:
    return Caller(username="eve", role=Role.STANDARD)


@pytest.fixture
def admin() -> Caller:
    return Caller(username="admin", role=Role.ADMIN)
