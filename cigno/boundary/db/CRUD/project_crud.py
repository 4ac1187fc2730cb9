"""
Project CRUD operations.

Dependencies: sqlalchemy, cigno.boundary.db.models
System role: Project persistence operations
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from cigno.boundary.db.CRUD.base_crud import BaseCRUD
from cigno.boundary.db.models.project_model import ProjectModel


class ProjectCRUD(BaseCRUD[ProjectModel]):
    """
    CRUD operations for ProjectModel.

    Extends BaseCRUD with eager loading of deliverables.
    """

    def __init__(self) -> None:
        """Initialize ProjectCRUD with ProjectModel."""
        super().__init__(ProjectModel)

    async def get_with_deliverables(self, session: AsyncSession, id: str) -> ProjectModel | None:
        """
        Retrieve project with eagerly loaded deliverables.

        Args:
            session: Async database session
            id: Project object id

        Returns:
            ProjectModel with deliverables loaded, None if not found
        """
        stmt = (
            select(ProjectModel)
            .where(ProjectModel.id == id)
            .options(selectinload(ProjectModel.deliverables))
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


project_crud = ProjectCRUD()
