"""
User service orchestrator.

Dependencies: cigno.boundary.db.CRUD, cigno.core
System role: User use case orchestration
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from cigno.application.services.service_utils import require_record
from cigno.boundary.db.CRUD.organisation_crud import organisation_crud
from cigno.boundary.db.CRUD.user_crud import user_crud
from cigno.core.exceptions import ConflictError
from cigno.core.identifiers import ensure_optional_object_id

logger = logging.getLogger(__name__)


class UserService:
    """User service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create_user(self, **fields: Any) -> dict:
        """
        Create a user inside an existing organisation.

        Raises:
            InvalidIdentifierError: If organisation_id is malformed
            NotFoundError: If the organisation does not exist
            ConflictError: If the e-mail address is already registered
        """
        organisation = await require_record(
            self.db, organisation_crud, fields.pop("organisation_id", None), "Organisation", "organisation_id"
        )
        email_address = fields.pop("email_address").strip().lower()
        if await user_crud.get_by_email(self.db, email_address):
            raise ConflictError(
                f"User with email {email_address} already exists", {"field": "email_address"}
            )
        user = await user_crud.create(
            self.db, organisation_id=organisation.id, email_address=email_address, **fields
        )
        logger.info("User created", extra={"user_id": user.id, "organisation_id": organisation.id})
        return user.to_dict()

    async def list_users(
        self,
        organisation_id: Any = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[dict]:
        """List active users, optionally within one organisation."""
        organisation_id = ensure_optional_object_id(organisation_id, "organisation_id")
        users = await user_crud.get_all(
            self.db, limit=limit, offset=offset, is_active=True, organisation_id=organisation_id
        )
        return [user.to_dict() for user in users]

    async def get_user(self, user_id: Any) -> dict:
        """
        Get user by ID.

        Raises:
            InvalidIdentifierError: If user_id is malformed
            NotFoundError: If user not found
        """
        user = await require_record(self.db, user_crud, user_id, "User")
        return user.to_dict()
