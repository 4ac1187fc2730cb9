"""
Storyline ORM model.

Dependencies: sqlalchemy, cigno.boundary.db.base
System role: Storyline persistence
"""

from sqlalchemy import JSON, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from cigno.boundary.db.base import AuditMixin, Base, ObjectIdMixin, TimestampMixin


class StorylineModel(Base, ObjectIdMixin, TimestampMixin, AuditMixin):
    """
    Ordered outline of a deliverable.

    sections is a list of {id, title, description, status, key_points,
    content_blocks, estimated_slides, order, locked, locked_by, locked_at}
    kept sorted by order.
    """

    __tablename__ = "storylines"

    deliverable_id: Mapped[str] = mapped_column(
        String(24), ForeignKey("deliverables.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="draft")
    executive_summary: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    sections: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    def __repr__(self) -> str:
        return f"<StorylineModel(id={self.id}, deliverable_id={self.deliverable_id})>"
