"""
Deliverable service orchestrator.

Coordinates deliverable lifecycle operations. Identifiers from path,
query or body are validated before any query runs.

Dependencies: cigno.boundary.db.CRUD, cigno.core
System role: Deliverable use case orchestration
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from cigno.application.services.service_utils import normalize_list, normalize_quality, require_record
from cigno.boundary.db.CRUD.deliverable_crud import deliverable_crud
from cigno.boundary.db.CRUD.project_crud import project_crud
from cigno.core.identifiers import ensure_optional_object_id

logger = logging.getLogger(__name__)

DEFAULT_DUE_IN_DAYS = 7
BRIEF_EVALUATION_FIELDS = ("brief_quality", "brief_strengths", "brief_improvements")


class DeliverableService:
    """Deliverable service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize deliverable service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def create_deliverable(self, **fields: Any) -> dict:
        """
        Create a deliverable inside an existing project.

        due_date defaults to seven days from now and brief falls back to the
        description, then to "Brief for <name>".

        Raises:
            InvalidIdentifierError: If project_id or created_by is malformed
            NotFoundError: If the project does not exist
        """
        project = await require_record(
            self.db, project_crud, fields.pop("project_id", None), "Project", "project_id"
        )
        description = fields.pop("description", None)
        fields["brief"] = fields.get("brief") or description or f"Brief for {fields['name']}"
        fields["due_date"] = fields.get("due_date") or (
            datetime.now(timezone.utc) + timedelta(days=DEFAULT_DUE_IN_DAYS)
        )
        fields["created_by"] = ensure_optional_object_id(fields.get("created_by"), "created_by")
        fields["updated_by"] = fields["created_by"]

        deliverable = await deliverable_crud.create(self.db, project_id=project.id, **fields)
        logger.info(
            "Deliverable created",
            extra={"deliverable_id": deliverable.id, "project_id": project.id},
        )
        return deliverable.to_dict()

    async def list_deliverables(
        self,
        project_id: Any = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[dict]:
        """List active deliverables, newest first, optionally for one project."""
        project_id = ensure_optional_object_id(project_id, "projectId")
        deliverables = await deliverable_crud.get_all(
            self.db, limit=limit, offset=offset, is_active=True, project_id=project_id
        )
        return [deliverable.to_dict() for deliverable in deliverables]

    async def get_deliverable(self, deliverable_id: Any) -> dict:
        """
        Get deliverable by ID.

        Raises:
            InvalidIdentifierError: If deliverable_id is malformed
            NotFoundError: If deliverable not found
        """
        deliverable = await require_record(self.db, deliverable_crud, deliverable_id, "Deliverable")
        return deliverable.to_dict()

    async def update_deliverable(self, deliverable_id: Any, fields: dict[str, Any]) -> dict:
        """
        Update a deliverable.

        brief_quality is rounded to one decimal (None when not numeric),
        brief_strengths/brief_improvements are normalised to string lists,
        and brief_last_evaluated_at is set whenever any of them is present.

        Args:
            deliverable_id: Identifier from the path or request body
            fields: Fields explicitly sent by the client

        Returns:
            dict: Updated deliverable, carrying the same id

        Raises:
            InvalidIdentifierError: If deliverable_id is not a well-formed identifier
            NotFoundError: If deliverable not found
        """
        deliverable = await require_record(self.db, deliverable_crud, deliverable_id, "Deliverable")

        if "brief_quality" in fields:
            fields["brief_quality"] = normalize_quality(fields["brief_quality"])
        for key in ("brief_strengths", "brief_improvements"):
            if key in fields:
                fields[key] = normalize_list(fields[key])
        if any(key in fields for key in BRIEF_EVALUATION_FIELDS):
            fields["brief_last_evaluated_at"] = datetime.now(timezone.utc)
        if "updated_by" in fields:
            fields["updated_by"] = ensure_optional_object_id(fields["updated_by"], "updated_by")

        updated = await deliverable_crud.update_by_id(self.db, deliverable.id, **fields)
        logger.info(
            "Deliverable updated",
            extra={"deliverable_id": deliverable.id, "fields": sorted(fields)},
        )
        return updated.to_dict()

    async def delete_deliverable(self, deliverable_id: Any) -> str:
        """
        Delete a deliverable.

        Returns:
            str: The deleted deliverable id
        """
        deliverable = await require_record(self.db, deliverable_crud, deliverable_id, "Deliverable")
        await deliverable_crud.delete_by_id(self.db, deliverable.id)
        logger.info("Deliverable deleted", extra={"deliverable_id": deliverable.id})
        return deliverable.id
