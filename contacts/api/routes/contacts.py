"""Contact CRUD and export/import endpoints.

Single-record reads and writes report a contact the caller may not touch as
404, the same as a missing one, so ids of other users' contacts cannot be
probed. Creation and import refusals stay 403.
"""

from __future__ import annotations

from typing import Dict, List, Union

from fastapi import APIRouter, Depends, Request, Response, status

from contacts.api.dependencies import get_current_caller, get_directory
from contacts.core.exceptions import ContactNotFoundError, ForbiddenError
from contacts.models import Caller, Contact, ContactPayload
from contacts.services.directory import ContactDirectory
from contacts.services.transfer import parse_json, parse_xml, render_json, render_xml

router = APIRouter(prefix="/contacts", tags=["contacts"])


@router.get("", response_model=List[Contact])
async def list_contacts(
    caller: Caller = Depends(get_current_caller),
    directory: ContactDirectory = Depends(get_directory),
) -> List[Contact]:
    return await directory.list(caller)


@router.get("/export/json")
async def export_json(
    caller: Caller = Depends(get_current_caller),
    directory: ContactDirectory = Depends(get_directory),
) -> Response:
    records = await directory.export_all(caller)
    return Response(content=render_json(records), media_type="application/json")


@router.get("/export/xml")
async def export_xml(
    caller: Caller = Depends(get_current_caller),
    directory: ContactDirectory = Depends(get_directory),
) -> Response:
    records = await directory.export_all(caller)
    return Response(content=render_xml(records), media_type="application/xml")


@router.post("/import/json")
async def import_json(
    request: Request,
    caller: Caller = Depends(get_current_caller),
    directory: ContactDirectory = Depends(get_directory),
) -> Dict[str, Union[str, int]]:
    records = parse_json(await request.body())
    stored = await directory.replace_all(caller, records)
    return {"detail": "Imported JSON", "imported": len(stored)}


@router.post("/import/xml")
async def import_xml(
    request: Request,
    caller: Caller = Depends(get_current_caller),
    directory: ContactDirectory = Depends(get_directory),
) -> Dict[str, Union[str, int]]:
    records = parse_xml(await request.body())
    stored = await directory.replace_all(caller, records)
    return {"detail": "Imported XML", "imported": len(stored)}


@router.get("/{contact_id}", response_model=Contact)
async def get_contact(
    contact_id: str,
    caller: Caller = Depends(get_current_caller),
    directory: ContactDirectory = Depends(get_directory),
) -> Contact:
    try:
        return await directory.get(caller, contact_id)
    except ForbiddenError as exc:
        raise ContactNotFoundError(contact_id) from exc


@router.post("", response_model=Contact, status_code=status.HTTP_201_CREATED)
async def add_contact(
    payload: ContactPayload,
    caller: Caller = Depends(get_current_caller),
    directory: ContactDirectory = Depends(get_directory),
) -> Contact:
    return await directory.add(caller, payload)


@router.put("/{contact_id}", response_model=Contact)
async def update_contact(
    contact_id: str,
    payload: ContactPayload,
    caller: Caller = Depends(get_current_caller),
    directory: ContactDirectory = Depends(get_directory),
) -> Contact:
    try:
        return await directory.update(caller, contact_id, payload)
    except ForbiddenError as exc:
        raise ContactNotFoundError(contact_id) from exc


@router.delete("/{contact_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contact(
    contact_id: str,
    caller: Caller = Depends(get_current_caller),
    directory: ContactDirectory = Depends(get_directory),
) -> Response:
    try:
        deleted = await directory.delete(caller, contact_id)
    except ForbiddenError as exc:
        raise ContactNotFoundError(contact_id) from exc
    if not deleted:
        raise ContactNotFoundError(contact_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
