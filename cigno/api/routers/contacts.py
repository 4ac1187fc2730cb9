"""
Contact API endpoints.

Contacts are addressed through the collection endpoint: PUT carries the
identifier in the body (id or _id) and DELETE in the query string.

Routes:
- GET /contacts - List contacts, optionally by client
- POST /contacts - Create contact
- PUT /contacts - Update contact
- DELETE /contacts?id= - Delete contact

Dependencies: cigno.application.services, cigno.models
System role: Contact management HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Query

from cigno.api.deps.dependencies import get_contact_service
from cigno.api.errors import handle_api_errors
from cigno.api.routers.router_utils import changed_fields
from cigno.application.services.contact_service import ContactService
from cigno.models.common import DeletedResponse, SuccessResponse
from cigno.models.contact import ContactResponse, CreateContactRequest, UpdateContactRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contacts", tags=["contacts"])


@router.get("", response_model=SuccessResponse[list[ContactResponse]])
@handle_api_errors
async def list_contacts(
    client: str | None = Query(default=None, description="Client id filter"),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    contact_service: ContactService = Depends(get_contact_service),
) -> SuccessResponse[list[ContactResponse]]:
    """List active contacts."""
    contacts = await contact_service.list_contacts(client_id=client, limit=limit, offset=offset)
    return SuccessResponse(data=[ContactResponse(**contact) for contact in contacts])


@router.post("", response_model=SuccessResponse[ContactResponse], status_code=201)
@handle_api_errors
async def create_contact(
    request: CreateContactRequest,
    contact_service: ContactService = Depends(get_contact_service),
) -> SuccessResponse[ContactResponse]:
    """
    Create a contact for a client.

    Raises:
        HTTPException(400): Invalid request or client id
        HTTPException(404): Client not found
    """
    contact = await contact_service.create_contact(**request.model_dump())
    return SuccessResponse(message="Contact created successfully", data=ContactResponse(**contact))


@router.put("", response_model=SuccessResponse[ContactResponse])
@handle_api_errors
async def update_contact(
    request: UpdateContactRequest,
    contact_service: ContactService = Depends(get_contact_service),
) -> SuccessResponse[ContactResponse]:
    """
    Update the contact named by the body's id.

    Raises:
        HTTPException(400): Missing or malformed id (booleans included)
        HTTPException(404): Contact not found
    """
    fields = changed_fields(
        request,
        nullable=("job_title", "phone_number", "department", "notes"),
        exclude=("id",),
    )
    contact = await contact_service.update_contact(request.id, fields)
    return SuccessResponse(message="Contact updated successfully", data=ContactResponse(**contact))


@router.delete("", response_model=DeletedResponse)
@handle_api_errors
async def delete_contact(
    id: str | None = Query(default=None, description="Contact id"),
    contact_service: ContactService = Depends(get_contact_service),
) -> DeletedResponse:
    """Delete the contact named by ?id=."""
    deleted_id = await contact_service.delete_contact(id)
    logger.info("Contact removed", extra={"contact_id": deleted_id})
    return DeletedResponse(message="Contact deleted successfully", id=deleted_id)
