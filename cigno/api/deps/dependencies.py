"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: cigno.configs, cigno.application, cigno.boundary
System role: DI container for service injection
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cigno.application.services import (
    AIService,
    BriefScoringService,
    ClientService,
    ContactService,
    DeliverableService,
    OrganisationService,
    ProjectAnalysisService,
    ProjectService,
    SeedService,
    StorylineService,
    UserService,
)
from cigno.boundary.agents import CustomAgentClient
from cigno.boundary.db import get_async_db
from cigno.configs import Settings, get_settings


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._agent_client = None

    @property
    def agent_client(self) -> CustomAgentClient:
        """Get cached custom agent client."""
        if self._agent_client is None:
            self._agent_client = CustomAgentClient(get_settings().agents)
        return self._agent_client

    async def clear(self) -> None:
        """Close and drop all cached instances."""
        if self._agent_client is not None:
            await self._agent_client.aclose()
        self._agent_client = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_agent_client() -> CustomAgentClient:
    """Get the shared custom agent client."""
    return get_service_cache().agent_client


def get_organisation_service(db: AsyncSession = Depends(get_async_db)) -> OrganisationService:
    """
    Get organisation service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        OrganisationService: Service for organisation operations
    """
    return OrganisationService(db=db)


def get_user_service(db: AsyncSession = Depends(get_async_db)) -> UserService:
    """Get user service instance."""
    return UserService(db=db)


def get_client_service(db: AsyncSession = Depends(get_async_db)) -> ClientService:
    """Get client service instance."""
    return ClientService(db=db)


def get_contact_service(db: AsyncSession = Depends(get_async_db)) -> ContactService:
    """Get contact service instance."""
    return ContactService(db=db)


def get_project_service(db: AsyncSession = Depends(get_async_db)) -> ProjectService:
    """
    Get project service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        ProjectService: Service for project operations
    """
    return ProjectService(db=db)


def get_deliverable_service(db: AsyncSession = Depends(get_async_db)) -> DeliverableService:
    """
    Get deliverable service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        DeliverableService: Service for deliverable operations
    """
    return DeliverableService(db=db)


def get_storyline_service(db: AsyncSession = Depends(get_async_db)) -> StorylineService:
    """Get storyline service instance."""
    return StorylineService(db=db)


def get_seed_service(db: AsyncSession = Depends(get_async_db)) -> SeedService:
    """Get demo data seeding service."""
    return SeedService(db=db)


def get_analysis_service(
    settings: Settings = Depends(get_settings_dependency),
    agent_client: CustomAgentClient = Depends(get_agent_client),
) -> ProjectAnalysisService:
    """
    Get project analysis service.

    The agent client is only handed over when an API key is configured.
    """
    client = agent_client if settings.agents.api_key else None
    return ProjectAnalysisService(settings=settings.agents, agent_client=client)


def get_ai_service(
    settings: Settings = Depends(get_settings_dependency),
    agent_client: CustomAgentClient = Depends(get_agent_client),
) -> AIService:
    """Get AI proxy service."""
    return AIService(settings=settings.agents, agent_client=agent_client)


def get_brief_scoring_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
    agent_client: CustomAgentClient = Depends(get_agent_client),
) -> BriefScoringService:
    """Get brief scoring service."""
    return BriefScoringService(db=db, settings=settings.agents, agent_client=agent_client)
