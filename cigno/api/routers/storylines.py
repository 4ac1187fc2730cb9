"""
Storyline API endpoints.

Routes:
- GET /storylines - List storylines (deliverable and status filters, paginated)
- POST /storylines - Create the storyline of a deliverable
- GET /storylines/{id} - Get single storyline
- PUT /storylines/{id} - Update storyline
- GET /storylines/{id}/sections - List sections in order
- POST /storylines/{id}/sections - Add a section
- PUT /storylines/{id}/sections/{section_id} - Update a section
- DELETE /storylines/{id}/sections/{section_id} - Delete a section
- POST /storylines/{id}/sections/{section_id}/lock - Lock a section for a user
- DELETE /storylines/{id}/sections/{section_id}/lock - Release a section lock

Dependencies: cigno.application.services, cigno.models
System role: Storyline management HTTP API
"""

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from cigno.api.deps.dependencies import get_storyline_service
from cigno.api.errors import handle_api_errors
from cigno.api.routers.router_utils import changed_fields
from cigno.application.services.storyline_service import StorylineService
from cigno.models.common import DeletedResponse, Pagination, SuccessResponse
from cigno.models.storyline import (
    AddSectionRequest,
    CreateStorylineRequest,
    SectionLockRequest,
    SectionLockResponse,
    StorylineResponse,
    StorylineStatus,
    UpdateSectionRequest,
    UpdateStorylineRequest,
)

router = APIRouter(prefix="/storylines", tags=["storylines"])


class StorylineListResponse(BaseModel):
    success: bool = True
    data: list[StorylineResponse]
    pagination: Pagination


@router.get("", response_model=StorylineListResponse)
@handle_api_errors
async def list_storylines(
    deliverable: str | None = Query(default=None, description="Deliverable id filter"),
    status: StorylineStatus | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    storyline_service: StorylineService = Depends(get_storyline_service),
) -> StorylineListResponse:
    """List storylines, newest first."""
    storylines, pagination = await storyline_service.list_storylines(
        deliverable_id=deliverable, status=status, page=page, limit=limit
    )
    return StorylineListResponse(
        data=[StorylineResponse(**storyline) for storyline in storylines],
        pagination=Pagination(**pagination),
    )


@router.post("", response_model=SuccessResponse[StorylineResponse], status_code=201)
@handle_api_errors
async def create_storyline(
    request: CreateStorylineRequest,
    storyline_service: StorylineService = Depends(get_storyline_service),
) -> SuccessResponse[StorylineResponse]:
    """
    Create the storyline of a deliverable.

    Raises:
        HTTPException(400): Missing title or malformed deliverable id
        HTTPException(404): Deliverable not found
        HTTPException(409): Deliverable already has an active storyline
    """
    storyline = await storyline_service.create_storyline(**request.model_dump())
    return SuccessResponse(message="Storyline created successfully", data=StorylineResponse(**storyline))


@router.get("/{storyline_id}", response_model=SuccessResponse[StorylineResponse])
@handle_api_errors
async def get_storyline(
    storyline_id: str,
    storyline_service: StorylineService = Depends(get_storyline_service),
) -> SuccessResponse[StorylineResponse]:
    """Get a single storyline."""
    storyline = await storyline_service.get_storyline(storyline_id)
    return SuccessResponse(data=StorylineResponse(**storyline))


@router.put("/{storyline_id}", response_model=SuccessResponse[StorylineResponse])
@handle_api_errors
async def update_storyline(
    storyline_id: str,
    request: UpdateStorylineRequest,
    storyline_service: StorylineService = Depends(get_storyline_service),
) -> SuccessResponse[StorylineResponse]:
    """Update a storyline. Sections, when sent, replace the stored list."""
    fields = changed_fields(request, nullable=("executive_summary",))
    storyline = await storyline_service.update_storyline(storyline_id, fields)
    return SuccessResponse(message="Storyline updated successfully", data=StorylineResponse(**storyline))


@router.get("/{storyline_id}/sections", response_model=SuccessResponse[list[dict]])
@handle_api_errors
async def list_sections(
    storyline_id: str,
    storyline_service: StorylineService = Depends(get_storyline_service),
) -> SuccessResponse[list[dict]]:
    """List the sections of a storyline in order."""
    sections = await storyline_service.list_sections(storyline_id)
    return SuccessResponse(data=sections)


@router.post("/{storyline_id}/sections", response_model=SuccessResponse[dict], status_code=201)
@handle_api_errors
async def add_section(
    storyline_id: str,
    request: AddSectionRequest,
    storyline_service: StorylineService = Depends(get_storyline_service),
) -> SuccessResponse[dict]:
    """
    Add a section to a storyline.

    Raises:
        HTTPException(400): Missing title or malformed id
        HTTPException(404): Storyline not found
    """
    fields = request.model_dump(exclude={"user_id"})
    section = await storyline_service.add_section(storyline_id, fields, request.user_id)
    return SuccessResponse(message="Section added successfully", data=section)


@router.put("/{storyline_id}/sections/{section_id}", response_model=SuccessResponse[dict])
@handle_api_errors
async def update_section(
    storyline_id: str,
    section_id: str,
    request: UpdateSectionRequest,
    storyline_service: StorylineService = Depends(get_storyline_service),
) -> SuccessResponse[dict]:
    """
    Update a section.

    Raises:
        HTTPException(404): Storyline or section not found
        HTTPException(423): Section locked by another user
    """
    fields = changed_fields(request, exclude=("user_id",))
    section = await storyline_service.update_section(storyline_id, section_id, fields, request.user_id)
    return SuccessResponse(message="Section updated successfully", data=section)


@router.delete("/{storyline_id}/sections/{section_id}", response_model=DeletedResponse)
@handle_api_errors
async def delete_section(
    storyline_id: str,
    section_id: str,
    user_id: str | None = Query(default=None, alias="userId", description="Acting user id"),
    storyline_service: StorylineService = Depends(get_storyline_service),
) -> DeletedResponse:
    """
    Delete a section and renumber the rest.

    Raises:
        HTTPException(404): Storyline or section not found
        HTTPException(423): Section locked by another user
    """
    await storyline_service.delete_section(storyline_id, section_id, user_id)
    return DeletedResponse(message="Section deleted successfully", id=section_id)


@router.post("/{storyline_id}/sections/{section_id}/lock", response_model=SuccessResponse[SectionLockResponse])
@handle_api_errors
async def lock_section(
    storyline_id: str,
    section_id: str,
    request: SectionLockRequest,
    storyline_service: StorylineService = Depends(get_storyline_service),
) -> SuccessResponse[SectionLockResponse]:
    """
    Lock a section for a user.

    Raises:
        HTTPException(400): Missing or malformed userId
        HTTPException(404): Storyline or section not found
        HTTPException(423): Section already locked by another user
    """
    lock = await storyline_service.lock_section(storyline_id, section_id, request.user_id)
    return SuccessResponse(message="Section locked successfully", data=SectionLockResponse(**lock))


@router.delete("/{storyline_id}/sections/{section_id}/lock", response_model=SuccessResponse[SectionLockResponse])
@handle_api_errors
async def unlock_section(
    storyline_id: str,
    section_id: str,
    user_id: str | None = Query(default=None, alias="userId", description="User releasing the lock"),
    storyline_service: StorylineService = Depends(get_storyline_service),
) -> SuccessResponse[SectionLockResponse]:
    """
    Release a section lock.

    Raises:
        HTTPException(400): Missing or malformed userId
        HTTPException(403): Section locked by another user
        HTTPException(404): Storyline or section not found
    """
    lock = await storyline_service.unlock_section(storyline_id, section_id, user_id)
    return SuccessResponse(message="Section unlocked successfully", data=SectionLockResponse(**lock))
