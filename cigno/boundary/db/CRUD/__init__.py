"""CRUD classes and their module-level singletons."""

from cigno.boundary.db.CRUD.base_crud import BaseCRUD
from cigno.boundary.db.CRUD.organisation_crud import OrganisationCRUD, organisation_crud
from cigno.boundary.db.CRUD.user_crud import UserCRUD, user_crud
from cigno.boundary.db.CRUD.client_crud import ClientCRUD, client_crud
from cigno.boundary.db.CRUD.contact_crud import ContactCRUD, contact_crud
from cigno.boundary.db.CRUD.project_crud import ProjectCRUD, project_crud
from cigno.boundary.db.CRUD.deliverable_crud import DeliverableCRUD, deliverable_crud
from cigno.boundary.db.CRUD.storyline_crud import StorylineCRUD, storyline_crud

__all__ = [
    "BaseCRUD",
    "OrganisationCRUD",
    "UserCRUD",
    "ClientCRUD",
    "ContactCRUD",
    "ProjectCRUD",
    "DeliverableCRUD",
    "StorylineCRUD",
    "organisation_crud",
    "user_crud",
    "client_crud",
    "contact_crud",
    "project_crud",
    "deliverable_crud",
    "storyline_crud",
]
