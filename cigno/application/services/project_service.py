"""
Project service orchestrator.

Coordinates project lifecycle operations and the deliverable listing of a
project.

Dependencies: cigno.boundary.db.CRUD, cigno.core
System role: Project use case orchestration
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from cigno.application.services.service_utils import require_record
from cigno.boundary.db.CRUD.client_crud import client_crud
from cigno.boundary.db.CRUD.contact_crud import contact_crud
from cigno.boundary.db.CRUD.organisation_crud import organisation_crud
from cigno.boundary.db.CRUD.project_crud import project_crud
from cigno.boundary.db.CRUD.user_crud import user_crud
from cigno.core.exceptions import NotFoundError, ValidationError
from cigno.core.identifiers import ensure_object_id, ensure_optional_object_id

logger = logging.getLogger(__name__)


class ProjectService:
    """Project service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize project service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _resolve_owners(self, fields: dict[str, Any], client_id: str) -> None:
        if fields.get("client_owner_id") is not None:
            contact = await require_record(
                self.db, contact_crud, fields["client_owner_id"], "Client owner", "client_owner_id"
            )
            if contact.client_id != client_id:
                raise ValidationError("Client owner must be a contact of the project client", "client_owner_id")
            fields["client_owner_id"] = contact.id
        if fields.get("internal_owner_id") is not None:
            user = await require_record(
                self.db, user_crud, fields["internal_owner_id"], "Internal owner", "internal_owner_id"
            )
            fields["internal_owner_id"] = user.id

    async def create_project(self, **fields: Any) -> dict:
        """
        Create a project for an existing client.

        The organisation defaults to the client's organisation.

        Args:
            **fields: Validated CreateProjectRequest values

        Returns:
            dict: Created project

        Raises:
            InvalidIdentifierError: If a reference is malformed
            NotFoundError: If a referenced record does not exist
            ValidationError: If the client owner belongs to another client
        """
        client = await require_record(self.db, client_crud, fields.pop("client_id", None), "Client", "client_id")
        organisation_id = fields.pop("organisation_id", None)
        if organisation_id is None:
            organisation_id = client.organisation_id
        else:
            organisation = await require_record(
                self.db, organisation_crud, organisation_id, "Organisation", "organisation_id"
            )
            organisation_id = organisation.id
        await self._resolve_owners(fields, client.id)

        project = await project_crud.create(
            self.db, client_id=client.id, organisation_id=organisation_id, **fields
        )
        logger.info(
            "Project created",
            extra={"project_id": project.id, "project_name": project.name, "client_id": client.id},
        )
        return project.to_dict()

    async def list_projects(
        self,
        client_id: Any = None,
        organisation_id: Any = None,
        status: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[dict]:
        """List active projects with optional client, organisation and status filters."""
        projects = await project_crud.get_all(
            self.db,
            limit=limit,
            offset=offset,
            is_active=True,
            client_id=ensure_optional_object_id(client_id, "client_id"),
            organisation_id=ensure_optional_object_id(organisation_id, "organisation_id"),
            status=status,
        )
        return [project.to_dict() for project in projects]

    async def get_project(self, project_id: Any) -> dict:
        """
        Get project by ID.

        Raises:
            InvalidIdentifierError: If project_id is malformed
            NotFoundError: If project not found
        """
        project = await require_record(self.db, project_crud, project_id, "Project")
        return project.to_dict()

    async def update_project(self, project_id: Any, fields: dict[str, Any]) -> dict:
        """
        Update a project with the provided fields.

        Raises:
            InvalidIdentifierError: If an identifier is malformed
            NotFoundError: If the project or a new owner does not exist
            ValidationError: If the resulting date range is inverted
        """
        project = await require_record(self.db, project_crud, project_id, "Project")
        for key in ("client_owner_id", "internal_owner_id"):
            if key in fields and fields[key] is None:
                fields.pop(key)
        await self._resolve_owners(fields, project.client_id)

        start_date = fields.get("start_date") or project.start_date
        end_date = fields.get("end_date") or project.end_date
        if end_date < start_date:
            raise ValidationError("end_date must not be before start_date", "end_date")

        updated = await project_crud.update_by_id(self.db, project.id, **fields)
        logger.info("Project updated", extra={"project_id": project.id})
        return updated.to_dict()

    async def delete_project(self, project_id: Any) -> str:
        """
        Delete a project and, through the foreign keys, its deliverables.

        Returns:
            str: The deleted project id
        """
        project = await require_record(self.db, project_crud, project_id, "Project")
        await project_crud.delete_by_id(self.db, project.id)
        logger.info("Project deleted", extra={"project_id": project.id})
        return project.id

    async def list_project_deliverables(self, project_id: Any) -> list[dict]:
        """
        List the deliverables of a project, earliest due first.

        Raises:
            InvalidIdentifierError: If project_id is malformed
            NotFoundError: If project not found
        """
        valid_id = ensure_object_id(project_id, "id")
        project = await project_crud.get_with_deliverables(self.db, valid_id)
        if project is None:
            raise NotFoundError("Project", valid_id)
        return [deliverable.to_dict() for deliverable in project.deliverables]
