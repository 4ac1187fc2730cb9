"""
Contact CRUD operations.

Dependencies: sqlalchemy, cigno.boundary.db.models
System role: Contact persistence operations
"""

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from cigno.boundary.db.CRUD.base_crud import BaseCRUD
from cigno.boundary.db.models.contact_model import ContactModel


class ContactCRUD(BaseCRUD[ContactModel]):
    """CRUD operations for ContactModel."""

    def __init__(self) -> None:
        """Initialize ContactCRUD with ContactModel."""
        super().__init__(ContactModel)

    async def clear_primary(
        self,
        session: AsyncSession,
        client_id: str,
        keep_id: str | None = None,
    ) -> int:
        """
        Unset is_primary_contact on every contact of a client except keep_id.

        Args:
            session: Async database session
            client_id: Client whose contacts are updated
            keep_id: Contact allowed to stay primary

        Returns:
            Number of contacts changed
        """
        stmt = (
            update(ContactModel)
            .where(ContactModel.client_id == client_id)
            .where(ContactModel.is_primary_contact.is_(True))
        )
        if keep_id is not None:
            stmt = stmt.where(ContactModel.id != keep_id)
        result = await session.execute(stmt.values(is_primary_contact=False))
        return result.rowcount


contact_crud = ContactCRUD()
