from hypothesis import given, strategies as st

from contacts.models import Caller, Contact, Role
from contacts.services.authorization import can_access, can_create, can_import

USERNAMES = st.sampled_from(["alice", "bob", "eve", "admin", "cruduser"])


@st.composite
def callers(draw):
    return Caller(username=draw(USERNAMES), role=draw(st.sampled_from(Role)))


@st.composite
def contacts(draw):
    return Contact(
        id=draw(st.uuids()).hex,
        first_name="Jan",
        last_name="Kowalski",
        email="jan@example.com",
        phone="123456789",
        owner_username=draw(USERNAMES),
    )


@given(callers(), contacts())
def test_can_access_iff_owner_or_admin(caller, contact):
    expected = caller.username == contact.owner_username or caller.role == Role.ADMIN
    assert can_access(caller, contact) is expected


@given(callers())
def test_only_standard_callers_create_and_import(caller):
    assert can_create(caller) is (caller.role == Role.STANDARD)
    assert can_import(caller) is can_create(caller)


def test_admin_reads_foreign_contact_but_cannot_create():
    admin = Caller(username="root", role=Role.ADMIN)
    contact = Contact(
        first_name="A",
        last_name="B",
        email="a@example.com",
        phone="123456789",
        owner_username="alice",
    )

    assert can_access(admin, contact)
    assert not can_create(admin)
    assert not can_import(admin)


def test_admin_named_owner_still_may_not_create():
    caller = Caller(username="alice", role=Role.ADMIN)

    assert not can_create(caller)
