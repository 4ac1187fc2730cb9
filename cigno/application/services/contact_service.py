"""
Contact service orchestrator.

Keeps at most one primary contact per client: marking a contact primary
clears the flag on the client's other contacts.

Dependencies: cigno.boundary.db.CRUD, cigno.core
System role: Contact use case orchestration
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from cigno.application.services.service_utils import require_record
from cigno.boundary.db.CRUD.client_crud import client_crud
from cigno.boundary.db.CRUD.contact_crud import contact_crud
from cigno.core.identifiers import ensure_optional_object_id

logger = logging.getLogger(__name__)


class ContactService:
    """Contact service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create_contact(self, **fields: Any) -> dict:
        """
        Create a contact for an existing client.

        Raises:
            InvalidIdentifierError: If client_id is malformed
            NotFoundError: If the client does not exist
        """
        client = await require_record(self.db, client_crud, fields.pop("client_id", None), "Client", "client_id")
        fields["email_address"] = fields["email_address"].strip().lower()
        if fields.get("is_primary_contact"):
            await contact_crud.clear_primary(self.db, client.id)
        contact = await contact_crud.create(self.db, client_id=client.id, **fields)
        logger.info("Contact created", extra={"contact_id": contact.id, "client_id": client.id})
        return contact.to_dict()

    async def list_contacts(
        self,
        client_id: Any = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[dict]:
        """List active contacts, optionally for one client."""
        client_id = ensure_optional_object_id(client_id, "client_id")
        contacts = await contact_crud.get_all(
            self.db, limit=limit, offset=offset, is_active=True, client_id=client_id
        )
        return [contact.to_dict() for contact in contacts]

    async def update_contact(self, contact_id: Any, fields: dict[str, Any]) -> dict:
        """
        Update a contact.

        The identifier comes from the request body, so it is validated here
        before any query runs.

        Raises:
            InvalidIdentifierError: If contact_id is not a well-formed identifier
            NotFoundError: If contact not found
        """
        contact = await require_record(self.db, contact_crud, contact_id, "Contact")
        if fields.get("email_address"):
            fields["email_address"] = fields["email_address"].strip().lower()
        if fields.get("is_primary_contact"):
            await contact_crud.clear_primary(self.db, contact.client_id, keep_id=contact.id)
        updated = await contact_crud.update_by_id(self.db, contact.id, **fields)
        logger.info("Contact updated", extra={"contact_id": contact.id})
        return updated.to_dict()

    async def delete_contact(self, contact_id: Any) -> str:
        """
        Delete a contact.

        Returns:
            str: The deleted contact id
        """
        contact = await require_record(self.db, contact_crud, contact_id, "Contact")
        await contact_crud.delete_by_id(self.db, contact.id)
        logger.info("Contact deleted", extra={"contact_id": contact.id})
        return contact.id
