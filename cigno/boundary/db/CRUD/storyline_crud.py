"""
Storyline CRUD operations.

Dependencies: sqlalchemy, cigno.boundary.db.models
System role: Storyline persistence operations
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cigno.boundary.db.CRUD.base_crud import BaseCRUD
from cigno.boundary.db.models.storyline_model import StorylineModel


class StorylineCRUD(BaseCRUD[StorylineModel]):
    """CRUD operations for StorylineModel."""

    def __init__(self) -> None:
        """Initialize StorylineCRUD with StorylineModel."""
        super().__init__(StorylineModel)

    async def get_active_for_deliverable(
        self,
        session: AsyncSession,
        deliverable_id: str,
    ) -> StorylineModel | None:
        """
        Retrieve the active storyline of a deliverable.

        Args:
            session: Async database session
            deliverable_id: Deliverable object id

        Returns:
            StorylineModel if one is active, None otherwise
        """
        stmt = (
            select(StorylineModel)
            .where(StorylineModel.deliverable_id == deliverable_id)
            .where(StorylineModel.is_active.is_(True))
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


storyline_crud = StorylineCRUD()
