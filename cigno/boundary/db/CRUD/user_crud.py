"""
User CRUD operations.

Dependencies: sqlalchemy, cigno.boundary.db.models
System role: User persistence operations
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cigno.boundary.db.CRUD.base_crud import BaseCRUD
from cigno.boundary.db.models.user_model import UserModel


class UserCRUD(BaseCRUD[UserModel]):
    """CRUD operations for UserModel with lookup by e-mail."""

    def __init__(self) -> None:
        """Initialize UserCRUD with UserModel."""
        super().__init__(UserModel)

    async def get_by_email(self, session: AsyncSession, email_address: str) -> UserModel | None:
        """
        Retrieve a user by (lower-cased) e-mail address.

        Args:
            session: Async database session
            email_address: E-mail to look up

        Returns:
            UserModel if found, None otherwise
        """
        stmt = select(UserModel).where(UserModel.email_address == email_address.lower())
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


user_crud = UserCRUD()
