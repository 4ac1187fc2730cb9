"""
User API endpoints.

Routes:
- POST /users - Create user
- GET /users - List users, optionally by organisation
- GET /users/{id} - Get single user

Dependencies: cigno.application.services, cigno.models
System role: User management HTTP API
"""

from fastapi import APIRouter, Depends, Query

from cigno.api.deps.dependencies import get_user_service
from cigno.api.errors import handle_api_errors
from cigno.application.services.user_service import UserService
from cigno.models.common import SuccessResponse
from cigno.models.user import CreateUserRequest, UserResponse

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=SuccessResponse[UserResponse], status_code=201)
@handle_api_errors
async def create_user(
    request: CreateUserRequest,
    user_service: UserService = Depends(get_user_service),
) -> SuccessResponse[UserResponse]:
    """
    Create a user in an existing organisation.

    Raises:
        HTTPException(400): Invalid request or organisation id
        HTTPException(404): Organisation not found
        HTTPException(409): E-mail already registered
    """
    user = await user_service.create_user(**request.model_dump())
    return SuccessResponse(message="User created successfully", data=UserResponse(**user))


@router.get("", response_model=SuccessResponse[list[UserResponse]])
@handle_api_errors
async def list_users(
    organisation: str | None = Query(default=None, description="Organisation id filter"),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    user_service: UserService = Depends(get_user_service),
) -> SuccessResponse[list[UserResponse]]:
    """List active users."""
    users = await user_service.list_users(organisation_id=organisation, limit=limit, offset=offset)
    return SuccessResponse(data=[UserResponse(**user) for user in users])


@router.get("/{user_id}", response_model=SuccessResponse[UserResponse])
@handle_api_errors
async def get_user(
    user_id: str,
    user_service: UserService = Depends(get_user_service),
) -> SuccessResponse[UserResponse]:
    """Get a single user."""
    user = await user_service.get_user(user_id)
    return SuccessResponse(data=UserResponse(**user))
