"""
Organisation API endpoints.

Routes:
- POST /organisations - Create organisation
- GET /organisations - List active organisations
- GET /organisations/{id} - Get single organisation
- PUT /organisations/{id} - Update organisation
- DELETE /organisations/{id} - Deactivate organisation

Dependencies: cigno.application.services, cigno.models
System role: Organisation management HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Query

from cigno.api.deps.dependencies import get_organisation_service
from cigno.api.errors import handle_api_errors
from cigno.api.routers.router_utils import changed_fields
from cigno.application.services.organisation_service import OrganisationService
from cigno.models.common import DeletedResponse, SuccessResponse
from cigno.models.organisation import (
    CreateOrganisationRequest,
    OrganisationResponse,
    UpdateOrganisationRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/organisations", tags=["organisations"])


@router.post("", response_model=SuccessResponse[OrganisationResponse], status_code=201)
@handle_api_errors
async def create_organisation(
    request: CreateOrganisationRequest,
    organisation_service: OrganisationService = Depends(get_organisation_service),
) -> SuccessResponse[OrganisationResponse]:
    """
    Create a new organisation.

    Raises:
        HTTPException(400): Invalid request or identifier
    """
    organisation = await organisation_service.create_organisation(**request.model_dump())
    return SuccessResponse(
        message="Organisation created successfully",
        data=OrganisationResponse(**organisation),
    )


@router.get("", response_model=SuccessResponse[list[OrganisationResponse]])
@handle_api_errors
async def list_organisations(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    organisation_service: OrganisationService = Depends(get_organisation_service),
) -> SuccessResponse[list[OrganisationResponse]]:
    """List active organisations, newest first."""
    organisations = await organisation_service.list_organisations(limit=limit, offset=offset)
    return SuccessResponse(data=[OrganisationResponse(**item) for item in organisations])


@router.get("/{organisation_id}", response_model=SuccessResponse[OrganisationResponse])
@handle_api_errors
async def get_organisation(
    organisation_id: str,
    organisation_service: OrganisationService = Depends(get_organisation_service),
) -> SuccessResponse[OrganisationResponse]:
    """
    Get a single organisation.

    Raises:
        HTTPException(400): Malformed id
        HTTPException(404): Organisation not found
    """
    organisation = await organisation_service.get_organisation(organisation_id)
    return SuccessResponse(data=OrganisationResponse(**organisation))


@router.put("/{organisation_id}", response_model=SuccessResponse[OrganisationResponse])
@handle_api_errors
async def update_organisation(
    organisation_id: str,
    request: UpdateOrganisationRequest,
    organisation_service: OrganisationService = Depends(get_organisation_service),
) -> SuccessResponse[OrganisationResponse]:
    """Update an organisation. Omitted fields are kept."""
    fields = changed_fields(request, nullable=("website", "logo", "admin_id"))
    organisation = await organisation_service.update_organisation(organisation_id, fields)
    return SuccessResponse(
        message="Organisation updated successfully",
        data=OrganisationResponse(**organisation),
    )


@router.delete("/{organisation_id}", response_model=DeletedResponse)
@handle_api_errors
async def delete_organisation(
    organisation_id: str,
    organisation_service: OrganisationService = Depends(get_organisation_service),
) -> DeletedResponse:
    """Deactivate an organisation. Its records are kept."""
    deactivated_id = await organisation_service.deactivate_organisation(organisation_id)
    logger.info("Organisation deactivated", extra={"organisation_id": deactivated_id})
    return DeletedResponse(message="Organisation deactivated successfully", id=deactivated_id)
