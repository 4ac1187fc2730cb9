"""Application services: use case orchestration over the boundary adapters."""

from cigno.application.services.analysis_service import ProjectAnalysisService
from cigno.application.services.brief_service import BriefScoringService
from cigno.application.services.client_service import ClientService
from cigno.application.services.contact_service import ContactService
from cigno.application.services.deliverable_service import DeliverableService
from cigno.application.services.insights_service import AIService
from cigno.application.services.organisation_service import OrganisationService
from cigno.application.services.project_service import ProjectService
from cigno.application.services.seed_service import SeedService
from cigno.application.services.storyline_service import StorylineService
from cigno.application.services.user_service import UserService

__all__ = [
    "AIService",
    "BriefScoringService",
    "ClientService",
    "ContactService",
    "DeliverableService",
    "OrganisationService",
    "ProjectAnalysisService",
    "ProjectService",
    "SeedService",
    "StorylineService",
    "UserService",
]
