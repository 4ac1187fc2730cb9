"""
Project API endpoints.

Routes:
- POST /projects - Create project
- GET /projects - List projects (client, organisation, status filters)
- POST /projects/analyze - Structure a free-text project description
- GET /projects/{id} - Get single project
- PUT /projects/{id} - Update project
- DELETE /projects/{id} - Delete project and its deliverables
- GET /projects/{id}/deliverables - List project deliverables

Dependencies: cigno.application.services, cigno.models
System role: Project management HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Query

from cigno.api.deps.dependencies import get_analysis_service, get_project_service
from cigno.api.errors import handle_api_errors
from cigno.api.routers.router_utils import changed_fields
from cigno.application.services.analysis_service import ProjectAnalysisService
from cigno.application.services.project_service import ProjectService
from cigno.models.common import DeletedResponse, SuccessResponse
from cigno.models.deliverable import DeliverableResponse
from cigno.models.project import (
    AnalyzeProjectRequest,
    AnalyzeProjectResponse,
    CreateProjectRequest,
    ProjectResponse,
    ProjectStatus,
    UpdateProjectRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post("", response_model=SuccessResponse[ProjectResponse], status_code=201)
@handle_api_errors
async def create_project(
    request: CreateProjectRequest,
    project_service: ProjectService = Depends(get_project_service),
) -> SuccessResponse[ProjectResponse]:
    """
    Create a project for a client.

    Raises:
        HTTPException(400): Invalid request, identifier or date range
        HTTPException(404): Client, owner or organisation not found
    """
    fields = request.model_dump()
    project = await project_service.create_project(**fields)
    return SuccessResponse(message="Project created successfully", data=ProjectResponse(**project))


@router.get("", response_model=SuccessResponse[list[ProjectResponse]])
@handle_api_errors
async def list_projects(
    client: str | None = Query(default=None, description="Client id filter"),
    organisation: str | None = Query(default=None, description="Organisation id filter"),
    status: ProjectStatus | None = None,
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    project_service: ProjectService = Depends(get_project_service),
) -> SuccessResponse[list[ProjectResponse]]:
    """List active projects, newest first."""
    projects = await project_service.list_projects(
        client_id=client,
        organisation_id=organisation,
        status=status,
        limit=limit,
        offset=offset,
    )
    return SuccessResponse(data=[ProjectResponse(**project) for project in projects])


@router.post("/analyze", response_model=AnalyzeProjectResponse)
@handle_api_errors
async def analyze_project(
    request: AnalyzeProjectRequest,
    analysis_service: ProjectAnalysisService = Depends(get_analysis_service),
) -> AnalyzeProjectResponse:
    """
    Turn a free-text description into a structured project.

    The custom agent is consulted when configured; any agent failure falls
    back to the local analysis and is reported in warnings.

    Raises:
        HTTPException(400): Blank description
    """
    logger.info("Analysing project description", extra={"length": len(request.description)})
    result = await analysis_service.analyze(request.description, request.project_data)
    return AnalyzeProjectResponse(**result)


@router.get("/{project_id}", response_model=SuccessResponse[ProjectResponse])
@handle_api_errors
async def get_project(
    project_id: str,
    project_service: ProjectService = Depends(get_project_service),
) -> SuccessResponse[ProjectResponse]:
    """Get a single project."""
    project = await project_service.get_project(project_id)
    return SuccessResponse(data=ProjectResponse(**project))


@router.put("/{project_id}", response_model=SuccessResponse[ProjectResponse])
@handle_api_errors
async def update_project(
    project_id: str,
    request: UpdateProjectRequest,
    project_service: ProjectService = Depends(get_project_service),
) -> SuccessResponse[ProjectResponse]:
    """
    Update a project. Omitted fields are kept.

    Raises:
        HTTPException(400): Malformed id or inverted date range
        HTTPException(404): Project or owner not found
    """
    fields = changed_fields(request, nullable=("description", "notes"))
    project = await project_service.update_project(project_id, fields)
    return SuccessResponse(message="Project updated successfully", data=ProjectResponse(**project))


@router.delete("/{project_id}", response_model=DeletedResponse)
@handle_api_errors
async def delete_project(
    project_id: str,
    project_service: ProjectService = Depends(get_project_service),
) -> DeletedResponse:
    """Delete a project and its deliverables."""
    deleted_id = await project_service.delete_project(project_id)
    return DeletedResponse(message="Project deleted successfully", id=deleted_id)


@router.get("/{project_id}/deliverables", response_model=SuccessResponse[list[DeliverableResponse]])
@handle_api_errors
async def list_project_deliverables(
    project_id: str,
    project_service: ProjectService = Depends(get_project_service),
) -> SuccessResponse[list[DeliverableResponse]]:
    """List the deliverables of a project, earliest due first."""
    deliverables = await project_service.list_project_deliverables(project_id)
    return SuccessResponse(data=[DeliverableResponse(**item) for item in deliverables])
