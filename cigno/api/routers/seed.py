"""
Demo data endpoint.

Routes: POST /seed

Dependencies: cigno.application.services
System role: Development data setup HTTP API
"""

from fastapi import APIRouter, Depends

from cigno.api.deps.dependencies import get_seed_service
from cigno.api.errors import handle_api_errors
from cigno.application.services.seed_service import SeedService
from cigno.models.common import SuccessResponse

router = APIRouter(prefix="/seed", tags=["seed"])


@router.post("", response_model=SuccessResponse[dict[str, str]], status_code=201)
@handle_api_errors
async def seed_database(
    seed_service: SeedService = Depends(get_seed_service),
) -> SuccessResponse[dict[str, str]]:
    """Replace all data with the demo dataset."""
    created = await seed_service.seed()
    return SuccessResponse(message="Database seeded successfully", data=created)
