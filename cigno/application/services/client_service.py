"""
Client service orchestrator.

Dependencies: cigno.boundary.db.CRUD, cigno.core
System role: Client use case orchestration
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from cigno.application.services.service_utils import require_record
from cigno.boundary.db.CRUD.client_crud import client_crud
from cigno.boundary.db.CRUD.organisation_crud import organisation_crud
from cigno.boundary.db.CRUD.user_crud import user_crud
from cigno.core.exceptions import NotFoundError
from cigno.core.identifiers import ensure_object_id, ensure_optional_object_id

logger = logging.getLogger(__name__)


class ClientService:
    """Client service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create_client(self, **fields: Any) -> dict:
        """
        Create a client owned by an existing user and organisation.

        Raises:
            InvalidIdentifierError: If owner_id or organisation_id is malformed
            NotFoundError: If the owner or organisation does not exist
        """
        owner = await require_record(self.db, user_crud, fields.pop("owner_id", None), "Owner", "owner_id")
        organisation = await require_record(
            self.db, organisation_crud, fields.pop("organisation_id", None), "Organisation", "organisation_id"
        )
        client = await client_crud.create(
            self.db, owner_id=owner.id, organisation_id=organisation.id, **fields
        )
        logger.info("Client created", extra={"client_id": client.id, "client_name": client.name})
        return client.to_dict()

    async def list_clients(
        self,
        organisation_id: Any = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[dict]:
        """List active clients, optionally within one organisation."""
        organisation_id = ensure_optional_object_id(organisation_id, "organisation_id")
        clients = await client_crud.get_all(
            self.db, limit=limit, offset=offset, is_active=True, organisation_id=organisation_id
        )
        return [client.to_dict() for client in clients]

    async def get_client(self, client_id: Any) -> dict:
        """
        Get client by ID together with its contacts.

        Raises:
            InvalidIdentifierError: If client_id is malformed
            NotFoundError: If client not found
        """
        valid_id = ensure_object_id(client_id, "id")
        client = await client_crud.get_with_contacts(self.db, valid_id)
        if client is None:
            raise NotFoundError("Client", valid_id)
        data = client.to_dict()
        data["contacts"] = [contact.to_dict() for contact in client.contacts]
        return data

    async def update_client(self, client_id: Any, fields: dict[str, Any]) -> dict:
        """
        Update a client with the provided fields.

        Raises:
            InvalidIdentifierError: If an identifier is malformed
            NotFoundError: If the client or new owner does not exist
        """
        client = await require_record(self.db, client_crud, client_id, "Client")
        if fields.get("owner_id") is not None:
            owner = await require_record(self.db, user_crud, fields["owner_id"], "Owner", "owner_id")
            fields["owner_id"] = owner.id
        else:
            fields.pop("owner_id", None)
        updated = await client_crud.update_by_id(self.db, client.id, **fields)
        logger.info("Client updated", extra={"client_id": client.id})
        return updated.to_dict()

    async def delete_client(self, client_id: Any) -> str:
        """
        Delete a client and, through the foreign keys, its contacts.

        Returns:
            str: The deleted client id
        """
        client = await require_record(self.db, client_crud, client_id, "Client")
        await client_crud.delete_by_id(self.db, client.id)
        logger.info("Client deleted", extra={"client_id": client.id})
        return client.id
