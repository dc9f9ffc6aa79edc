from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from contacts.core.exceptions import ExpiredTokenError, MalformedTokenError
from contacts.core.security import PasswordHasher, TokenCodec

SECRET = "unit-test-secret"


class FrozenClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def test_issue_and_extract_subject():
    codec = TokenCodec(SECRET, timedelta(hours=1))
    token = codec.issue("john")

    assert token
    assert codec.extract_subject(token) == "john"


def test_claims_carry_issue_and_expiry_times():
    clock = FrozenClock(datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc))
    codec = TokenCodec(SECRET, timedelta(minutes=30), clock=clock)

    claims = codec.verify(codec.issue("anna"))

    assert claims.subject == "anna"
    assert claims.issued_at == datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert claims.expires_at == datetime(2030, 1, 1, 12, 30, tzinfo=timezone.utc)
    assert claims.token_id


def test_tokens_for_same_subject_differ():
    codec = TokenCodec(SECRET, timedelta(hours=1))

    first = codec.issue("sam")
    second = codec.issue("sam")

    assert first != second
    assert codec.verify(first).token_id != codec.verify(second).token_id


def test_zero_ttl_token_is_expired():
    codec = TokenCodec(SECRET, timedelta(0))

    with pytest.raises(ExpiredTokenError):
        codec.verify(codec.issue("marie"))


def test_token_expires_exactly_at_deadline():
    clock = FrozenClock(datetime(2030, 1, 1, tzinfo=timezone.utc))
    codec = TokenCodec(SECRET, timedelta(minutes=5), clock=clock)
    token = codec.issue("marie")

    clock.now += timedelta(minutes=4, seconds=59)
    assert codec.extract_subject(token) == "marie"

    clock.now += timedelta(seconds=1)
    with pytest.raises(ExpiredTokenError):
        codec.verify(token)


@pytest.mark.parametrize("token", ["not.a.jwt", "", "garbage"])
def test_malformed_token(token):
    codec = TokenCodec(SECRET, timedelta(hours=1))

    with pytest.raises(MalformedTokenError):
        codec.extract_subject(token)


def test_token_signed_with_other_key_is_malformed():
    issued = TokenCodec("another-key", timedelta(hours=1)).issue("mallory")

    with pytest.raises(MalformedTokenError):
        TokenCodec(SECRET, timedelta(hours=1)).verify(issued)


def test_token_without_subject_is_malformed():
    token = jwt.encode({"exp": 4102444800}, SECRET, algorithm="HS256")

    with pytest.raises(MalformedTokenError):
        TokenCodec(SECRET, timedelta(hours=1)).verify(token)


def test_empty_signing_key_rejected():
    with pytest.raises(ValueError):
        TokenCodec("", timedelta(hours=1))


@pytest.mark.asyncio
async def test_password_hash_round_trip():
    hasher = PasswordHasher(rounds=4)

    hashed = await hasher.hash("s3cret")

    assert hashed != "s3cret"
    assert await hasher.verify("s3cret", hashed)
    assert not await hasher.verify("wrong", hashed)


@pytest.mark.asyncio
async def test_password_hashes_are_salted():
    hasher = PasswordHasher(rounds=4)

    assert await hasher.hash("same") != await hasher.hash("same")


@pytest.mark.asyncio
async def test_verify_against_garbage_hash_is_false():
    hasher = PasswordHasher(rounds=4)

    assert not await hasher.verify("anything", "not-a-bcrypt-hash")


@pytest.mark.asyncio
async def test_long_passwords_are_accepted():
    hasher = PasswordHasher(rounds=4)
    password = "x" * 200

    hashed = await hasher.hash(password)

    assert await hasher.verify(password, hashed)
