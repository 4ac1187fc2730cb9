"""
Client CRUD operations.

Dependencies: sqlalchemy, cigno.boundary.db.models
System role: Client persistence operations
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from cigno.boundary.db.CRUD.base_crud import BaseCRUD
from cigno.boundary.db.models.client_model import ClientModel


class ClientCRUD(BaseCRUD[ClientModel]):
    """
    CRUD operations for ClientModel.

    Extends BaseCRUD with eager loading of contacts.
    """

    def __init__(self) -> None:
        """Initialize ClientCRUD with ClientModel."""
        super().__init__(ClientModel)

    async def get_with_contacts(self, session: AsyncSession, id: str) -> ClientModel | None:
        """
        Retrieve client with eagerly loaded contacts.

        Args:
            session: Async database session
            id: Client object id

        Returns:
            ClientModel with contacts loaded, None if not found
        """
        stmt = (
            select(ClientModel)
            .where(ClientModel.id == id)
            .options(selectinload(ClientModel.contacts))
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


client_crud = ClientCRUD()
