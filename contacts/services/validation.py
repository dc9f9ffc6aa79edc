"""Field constraints applied to every contact before it is stored."""

from __future__ import annotations

import re
from typing import Annotated, Any, Dict, List

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, StringConstraints, ValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from contacts.models import Violation

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 200
PHONE_PATTERN = re.compile(r"[0-9]{9}")
# control characters and code points an XML 1.0 document cannot carry
CONTROL_CHARACTERS = re.compile(r"[\x00-\x1f\x7f-\x9f\ud800-\udfff\ufffe\uffff]")


def _not_blank(value: Any) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise PydanticCustomError("blank", "must not be blank")
    return value


def _no_control_characters(value: str) -> str:
    if CONTROL_CHARACTERS.search(value):
        raise PydanticCustomError("control_characters", "must not contain control characters")
    return value


def _valid_email(value: str) -> str:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as exc:
        raise PydanticCustomError("email", "must be a valid email address") from exc
    return value


def _nine_digits(value: str) -> str:
    if not PHONE_PATTERN.fullmatch(value):
        raise PydanticCustomError("phone", "must contain exactly 9 digits")
    return value


Name = Annotated[
    str,
    StringConstraints(max_length=NAME_MAX_LENGTH),
    BeforeValidator(_not_blank),
    AfterValidator(_no_control_characters),
]
Email = Annotated[
    str,
    StringConstraints(max_length=EMAIL_MAX_LENGTH),
    BeforeValidator(_not_blank),
    AfterValidator(_valid_email),
]
Phone = Annotated[str, BeforeValidator(_not_blank), AfterValidator(_nine_digits)]


class ContactFields(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    first_name: Name
    last_name: Name
    email: Email
    phone: Phone


EDITABLE_FIELDS = ("first_name", "last_name", "email", "phone")


def contact_fields(record: Any) -> Dict[str, Any]:
    """Pull the editable fields off any payload-like object."""

    return {name: getattr(record, name, None) for name in EDITABLE_FIELDS}


def validate_contact(record: Any, *, prefix: str = "") -> List[Violation]:
    """Return every violated constraint; an empty list means the record is valid.

    Field names in the violations use the wire spelling (`firstName`).
    """

    fields = {to_camel(name): value for name, value in contact_fields(record).items()}
    try:
        ContactFields.model_validate(fields)
    except ValidationError as exc:
        violations: List[Violation] = []
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"])
            violations.append(Violation(field=f"{prefix}{field}", message=error["msg"]))
        return violations
    return []


__all__ = ["ContactFields", "EDITABLE_FIELDS", "contact_fields", "validate_contact"]
