"""
Deliverable API endpoints.

Routes:
- GET /deliverables - List deliverables, optionally by projectId
- POST /deliverables - Create deliverable
- PUT /deliverables - Update deliverable named by the body id
- DELETE /deliverables?id= - Delete deliverable
- GET /deliverables/{id} - Get single deliverable
- PATCH /deliverables/{id} - Partial update
- DELETE /deliverables/{id} - Delete deliverable
- GET /deliverables/{id}/storyline - HTML storyline view

Dependencies: cigno.application.services, cigno.models
System role: Deliverable management HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse

from cigno.api.deps.dependencies import get_deliverable_service, get_storyline_service
from cigno.api.errors import handle_api_errors
from cigno.api.routers.router_utils import changed_fields
from cigno.application.services.deliverable_service import DeliverableService
from cigno.application.services.storyline_service import StorylineService
from cigno.models.common import DeletedResponse, SuccessResponse
from cigno.models.deliverable import (
    CreateDeliverableRequest,
    DeliverableResponse,
    UpdateDeliverableByBodyRequest,
    UpdateDeliverableRequest,
)

from .deliverable_responses import map_deliverable_to_response, map_deliverables_to_response
from .deliverable_validators import validate_deliverable_creation, validate_deliverable_update
from .storyline_view import render_storyline_page

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/deliverables", tags=["deliverables"])

NULLABLE_FIELDS = ("notes", "brief_quality", "brief_strengths", "brief_improvements")


@router.get("", response_model=SuccessResponse[list[DeliverableResponse]])
@handle_api_errors
async def list_deliverables(
    projectId: str | None = Query(default=None, description="Project id filter"),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    deliverable_service: DeliverableService = Depends(get_deliverable_service),
) -> SuccessResponse[list[DeliverableResponse]]:
    """
    List active deliverables, newest first.

    Raises:
        HTTPException(400): Malformed projectId
    """
    deliverables = await deliverable_service.list_deliverables(
        project_id=projectId, limit=limit, offset=offset
    )
    logger.info("Deliverables retrieved", extra={"count": len(deliverables), "project_id": projectId})
    return map_deliverables_to_response(deliverables)


@router.post("", response_model=SuccessResponse[DeliverableResponse], status_code=201)
@handle_api_errors
async def create_deliverable(
    request: CreateDeliverableRequest,
    deliverable_service: DeliverableService = Depends(get_deliverable_service),
) -> SuccessResponse[DeliverableResponse]:
    """
    Create a deliverable inside a project.

    Raises:
        HTTPException(400): Invalid request or project id
        HTTPException(404): Project not found
    """
    validate_deliverable_creation(request)
    deliverable = await deliverable_service.create_deliverable(**request.model_dump())
    return map_deliverable_to_response(deliverable, "Deliverable created successfully")


@router.put("", response_model=SuccessResponse[DeliverableResponse])
@handle_api_errors
async def update_deliverable_by_body(
    request: UpdateDeliverableByBodyRequest,
    deliverable_service: DeliverableService = Depends(get_deliverable_service),
) -> SuccessResponse[DeliverableResponse]:
    """
    Update the deliverable named by the body's id.

    Raises:
        HTTPException(400): Missing or malformed id (booleans included)
        HTTPException(404): Deliverable not found
    """
    fields = changed_fields(request, nullable=NULLABLE_FIELDS, exclude=("id",))
    validate_deliverable_update(fields)
    deliverable = await deliverable_service.update_deliverable(request.id, fields)
    return map_deliverable_to_response(deliverable, "Deliverable updated successfully")


@router.delete("", response_model=DeletedResponse)
@handle_api_errors
async def delete_deliverable_by_query(
    id: str | None = Query(default=None, description="Deliverable id"),
    deliverable_service: DeliverableService = Depends(get_deliverable_service),
) -> DeletedResponse:
    """Delete the deliverable named by ?id=."""
    deleted_id = await deliverable_service.delete_deliverable(id)
    return DeletedResponse(message="Deliverable deleted successfully", id=deleted_id)


@router.get("/{deliverable_id}", response_model=SuccessResponse[DeliverableResponse])
@handle_api_errors
async def get_deliverable(
    deliverable_id: str,
    deliverable_service: DeliverableService = Depends(get_deliverable_service),
) -> SuccessResponse[DeliverableResponse]:
    """
    Get a single deliverable.

    Raises:
        HTTPException(400): Malformed id
        HTTPException(404): Deliverable not found
    """
    deliverable = await deliverable_service.get_deliverable(deliverable_id)
    return map_deliverable_to_response(deliverable)


@router.patch("/{deliverable_id}", response_model=SuccessResponse[DeliverableResponse])
@handle_api_errors
async def update_deliverable(
    deliverable_id: str,
    request: UpdateDeliverableRequest,
    deliverable_service: DeliverableService = Depends(get_deliverable_service),
) -> SuccessResponse[DeliverableResponse]:
    """Partially update a deliverable."""
    fields = changed_fields(request, nullable=NULLABLE_FIELDS)
    validate_deliverable_update(fields)
    deliverable = await deliverable_service.update_deliverable(deliverable_id, fields)
    return map_deliverable_to_response(deliverable, "Deliverable updated successfully")


@router.delete("/{deliverable_id}", response_model=DeletedResponse)
@handle_api_errors
async def delete_deliverable(
    deliverable_id: str,
    deliverable_service: DeliverableService = Depends(get_deliverable_service),
) -> DeletedResponse:
    """Delete a deliverable and its storylines."""
    deleted_id = await deliverable_service.delete_deliverable(deliverable_id)
    return DeletedResponse(message="Deliverable deleted successfully", id=deleted_id)


@router.get("/{deliverable_id}/storyline", response_class=HTMLResponse)
@handle_api_errors
async def view_storyline(
    deliverable_id: str,
    storyline_service: StorylineService = Depends(get_storyline_service),
) -> HTMLResponse:
    """
    Render the storylines of a deliverable as HTML.

    Raises:
        HTTPException(400): Malformed id
        HTTPException(404): Deliverable not found
    """
    deliverable, storylines = await storyline_service.get_storyline_view(deliverable_id)
    logger.info(
        "Rendering storyline view",
        extra={"deliverable_id": deliverable["id"], "storyline_count": len(storylines)},
    )
    return HTMLResponse(render_storyline_page(deliverable, storylines))
