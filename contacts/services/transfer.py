"""JSON and XML encodings of the portable contact export shape.

Both encodings carry the same records (`firstName`, `lastName`, `email`,
`phone`). Import accepts either a wrapped document (`{"contacts": [...]}` or
`<contacts><contact>...</contact></contacts>`) or a bare sequence, trying the
wrapped form first.
"""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError

from contacts.core.exceptions import TransferFormatError
from contacts.models import ContactDTO, ContactPayload

WRAPPER_KEY = "contacts"
RECORD_TAG = "contact"


def render_json(records: Sequence[ContactDTO]) -> str:
    return json.dumps([record.model_dump(by_alias=True) for record in records], indent=2)


def render_xml(records: Sequence[ContactDTO]) -> str:
    root = ET.Element(WRAPPER_KEY)
    for record in records:
        element = ET.SubElement(root, RECORD_TAG)
        for key, value in record.model_dump(by_alias=True).items():
            ET.SubElement(element, key).text = value
    ET.indent(root)
    return ET.tostring(root, encoding="unicode")


def parse_json(document: str | bytes) -> List[ContactPayload]:
    try:
        data = json.loads(document)
    except ValueError as exc:
        raise TransferFormatError(f"Malformed JSON: {exc}") from exc

    items = _unwrap_json(data)
    if items is None:
        raise TransferFormatError("Expected a list of contacts or an object with a 'contacts' list")
    return [_to_payload(item, index) for index, item in enumerate(items)]


def parse_xml(document: str | bytes) -> List[ContactPayload]:
    try:
        root = ET.fromstring(document)
    except ET.ParseError as exc:
        raise TransferFormatError(f"Malformed XML: {exc}") from exc

    records = _unwrap_xml(root)
    return [_to_payload(_element_fields(element), index) for index, element in enumerate(records)]


def _unwrap_json(data: Any) -> Optional[List[Any]]:
    if isinstance(data, dict):
        wrapped = data.get(WRAPPER_KEY)
        if isinstance(wrapped, list):
            return wrapped
        if wrapped is None and WRAPPER_KEY in data:
            return []
        return None
    if isinstance(data, list):
        return data
    return None


def _unwrap_xml(root: ET.Element) -> List[ET.Element]:
    if root.tag == WRAPPER_KEY:
        wrapped = root.findall(RECORD_TAG)
        if wrapped or len(root) == 0:
            return wrapped
    # bare sequence, e.g. <List><item>...</item></List>
    return list(root)


def _element_fields(element: ET.Element) -> Dict[str, Optional[str]]:
    return {child.tag: child.text for child in element}


def _to_payload(item: Any, index: int) -> ContactPayload:
    if not isinstance(item, dict):
        raise TransferFormatError(f"Record {index} is not an object")
    try:
        return ContactPayload.model_validate(item)
    except ValidationError as exc:
        fields = ", ".join(".".join(str(part) for part in error["loc"]) for error in exc.errors())
        raise TransferFormatError(f"Record {index} has non-text values: {fields}") from exc


__all__ = ["parse_json", "parse_xml", "render_json", "render_xml"]
