"""
Organisation service orchestrator.

Coordinates organisation lifecycle operations.

Dependencies: cigno.boundary.db.CRUD, cigno.core
System role: Organisation use case orchestration
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from cigno.application.services.service_utils import require_record
from cigno.boundary.db.CRUD.organisation_crud import organisation_crud
from cigno.core.identifiers import ensure_optional_object_id

logger = logging.getLogger(__name__)


class OrganisationService:
    """Organisation service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize organisation service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def create_organisation(self, **fields: Any) -> dict:
        """
        Create an organisation.

        Args:
            **fields: Validated CreateOrganisationRequest values

        Returns:
            dict: Created organisation

        Raises:
            InvalidIdentifierError: If admin_id or created_by is malformed
        """
        fields["admin_id"] = ensure_optional_object_id(fields.get("admin_id"), "admin_id")
        fields["created_by"] = ensure_optional_object_id(fields.get("created_by"), "created_by")
        organisation = await organisation_crud.create(self.db, **fields)
        logger.info(
            "Organisation created",
            extra={"organisation_id": organisation.id, "organisation_name": organisation.name},
        )
        return organisation.to_dict()

    async def list_organisations(self, limit: int | None = None, offset: int = 0) -> list[dict]:
        """List active organisations, newest first."""
        organisations = await organisation_crud.get_all(
            self.db, limit=limit, offset=offset, is_active=True
        )
        return [organisation.to_dict() for organisation in organisations]

    async def get_organisation(self, organisation_id: Any) -> dict:
        """
        Get organisation by ID.

        Raises:
            InvalidIdentifierError: If organisation_id is malformed
            NotFoundError: If organisation not found
        """
        organisation = await require_record(self.db, organisation_crud, organisation_id, "Organisation")
        return organisation.to_dict()

    async def update_organisation(self, organisation_id: Any, fields: dict[str, Any]) -> dict:
        """
        Update an organisation with the provided fields.

        Raises:
            InvalidIdentifierError: If an identifier is malformed
            NotFoundError: If organisation not found
        """
        organisation = await require_record(self.db, organisation_crud, organisation_id, "Organisation")
        if "admin_id" in fields:
            fields["admin_id"] = ensure_optional_object_id(fields["admin_id"], "admin_id")
        if "updated_by" in fields:
            fields["updated_by"] = ensure_optional_object_id(fields["updated_by"], "updated_by")
        updated = await organisation_crud.update_by_id(self.db, organisation.id, **fields)
        logger.info("Organisation updated", extra={"organisation_id": organisation.id})
        return updated.to_dict()

    async def deactivate_organisation(self, organisation_id: Any) -> str:
        """
        Soft-delete an organisation.

        Returns:
            str: The organisation id
        """
        organisation = await require_record(self.db, organisation_crud, organisation_id, "Organisation")
        await organisation_crud.update_by_id(self.db, organisation.id, is_active=False)
        logger.info("Organisation deactivated", extra={"organisation_id": organisation.id})
        return organisation.id
