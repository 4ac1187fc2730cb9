"""ORM models. Importing this package registers every table on Base.metadata."""

from cigno.boundary.db.models.organisation_model import OrganisationModel
from cigno.boundary.db.models.user_model import UserModel
from cigno.boundary.db.models.client_model import ClientModel
from cigno.boundary.db.models.contact_model import ContactModel
from cigno.boundary.db.models.project_model import ProjectModel
from cigno.boundary.db.models.deliverable_model import DeliverableModel
from cigno.boundary.db.models.storyline_model import StorylineModel

__all__ = [
    "OrganisationModel",
    "UserModel",
    "ClientModel",
    "ContactModel",
    "ProjectModel",
    "DeliverableModel",
    "StorylineModel",
]
