import json

import pytest
from hypothesis import assume, given, strategies as st

from contacts.core.exceptions import TransferFormatError
from contacts.models import ContactDTO
from contacts.services.transfer import parse_json, parse_xml, render_json, render_xml
from contacts.services.validation import validate_contact

RECORDS = [
    ContactDTO(first_name="Jan", last_name="Kowalski", email="jan@example.com", phone="123456789"),
    ContactDTO(first_name="Anna", last_name="Nowak", email="anna@example.com", phone="987654321"),
]


def test_render_json_uses_wire_names_without_identity():
    document = json.loads(render_json(RECORDS))

    assert document[0] == {
        "firstName": "Jan",
        "lastName": "Kowalski",
        "email": "jan@example.com",
        "phone": "123456789",
    }


def test_parse_json_bare_list():
    parsed = parse_json(render_json(RECORDS))

    assert [p.first_name for p in parsed] == ["Jan", "Anna"]


def test_parse_json_wrapped_list():
    body = json.dumps({"contacts": json.loads(render_json(RECORDS))})

    parsed = parse_json(body.encode("utf-8"))

    assert [p.phone for p in parsed] == ["123456789", "987654321"]


def test_parse_json_ignores_identity_fields():
    parsed = parse_json('[{"id": 7, "ownerUsername": "eve", "firstName": "Jan"}]')

    assert parsed[0].first_name == "Jan"
    assert parsed[0].last_name is None
    assert "owner_username" not in parsed[0].model_dump()


@pytest.mark.parametrize("body", ["{not json", '{"items": []}', '"text"', "[1, 2]", '[{"phone": 123456789}]'])
def test_parse_json_rejects_other_shapes(body):
    with pytest.raises(TransferFormatError):
        parse_json(body)


def test_render_xml_wraps_records():
    document = render_xml(RECORDS)

    assert document.startswith("<contacts>")
    assert document.count("<contact>") == 2
    assert "<firstName>Jan</firstName>" in document


def test_parse_xml_wrapped_form():
    parsed = parse_xml(render_xml(RECORDS))

    assert [(p.first_name, p.email) for p in parsed] == [("Jan", "jan@example.com"), ("Anna", "anna@example.com")]


def test_parse_xml_bare_sequence():
    body = """
    <List>
      <item><firstName>Jan</firstName><lastName>Kowalski</lastName><email>jan@example.com</email><phone>123456789</phone></item>
    </List>
    """

    parsed = parse_xml(body)

    assert len(parsed) == 1
    assert parsed[0].last_name == "Kowalski"


def test_parse_xml_empty_wrapper():
    assert parse_xml("<contacts/>") == []


def test_parse_xml_empty_element_becomes_missing_value():
    parsed = parse_xml("<contacts><contact><firstName/><phone>123456789</phone></contact></contacts>")

    assert parsed[0].first_name is None
    assert parsed[0].phone == "123456789"


def test_parse_xml_rejects_malformed_document():
    with pytest.raises(TransferFormatError):
        parse_xml("<contacts><contact>")


@given(st.text(min_size=1, max_size=100))
def test_valid_names_survive_xml_export(name):
    record = ContactDTO(first_name=name, last_name="Kowalski", email="jan@example.com", phone="123456789")
    assume(not validate_contact(record))

    parsed = parse_xml(render_xml([record]))

    assert parsed[0].first_name == name
