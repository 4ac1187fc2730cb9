"""
Client API endpoints.

Routes:
- POST /clients - Create client
- GET /clients - List clients, optionally by organisation
- GET /clients/{id} - Get client with contacts
- PUT /clients/{id} - Update client
- DELETE /clients/{id} - Delete client and its contacts

Dependencies: cigno.application.services, cigno.models
System role: Client management HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Query

from cigno.api.deps.dependencies import get_client_service
from cigno.api.errors import handle_api_errors
from cigno.api.routers.router_utils import changed_fields
from cigno.application.services.client_service import ClientService
from cigno.models.client import (
    ClientDetailResponse,
    ClientResponse,
    CreateClientRequest,
    UpdateClientRequest,
)
from cigno.models.common import DeletedResponse, SuccessResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["clients"])


@router.post("", response_model=SuccessResponse[ClientResponse], status_code=201)
@handle_api_errors
async def create_client(
    request: CreateClientRequest,
    client_service: ClientService = Depends(get_client_service),
) -> SuccessResponse[ClientResponse]:
    """
    Create a client.

    Raises:
        HTTPException(400): Invalid request or identifier
        HTTPException(404): Owner or organisation not found
    """
    client = await client_service.create_client(**request.model_dump())
    return SuccessResponse(message="Client created successfully", data=ClientResponse(**client))


@router.get("", response_model=SuccessResponse[list[ClientResponse]])
@handle_api_errors
async def list_clients(
    organisation: str | None = Query(default=None, description="Organisation id filter"),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    client_service: ClientService = Depends(get_client_service),
) -> SuccessResponse[list[ClientResponse]]:
    """List active clients, newest first."""
    clients = await client_service.list_clients(organisation_id=organisation, limit=limit, offset=offset)
    return SuccessResponse(data=[ClientResponse(**client) for client in clients])


@router.get("/{client_id}", response_model=SuccessResponse[ClientDetailResponse])
@handle_api_errors
async def get_client(
    client_id: str,
    client_service: ClientService = Depends(get_client_service),
) -> SuccessResponse[ClientDetailResponse]:
    """Get a client together with its contacts."""
    client = await client_service.get_client(client_id)
    return SuccessResponse(data=ClientDetailResponse(**client))


@router.put("/{client_id}", response_model=SuccessResponse[ClientResponse])
@handle_api_errors
async def update_client(
    client_id: str,
    request: UpdateClientRequest,
    client_service: ClientService = Depends(get_client_service),
) -> SuccessResponse[ClientResponse]:
    """Update a client. Omitted fields are kept."""
    fields = changed_fields(request, nullable=("website", "description", "notes"))
    client = await client_service.update_client(client_id, fields)
    return SuccessResponse(message="Client updated successfully", data=ClientResponse(**client))


@router.delete("/{client_id}", response_model=DeletedResponse)
@handle_api_errors
async def delete_client(
    client_id: str,
    client_service: ClientService = Depends(get_client_service),
) -> DeletedResponse:
    """Delete a client and its contacts."""
    deleted_id = await client_service.delete_client(client_id)
    return DeletedResponse(message="Client deleted successfully", id=deleted_id)
