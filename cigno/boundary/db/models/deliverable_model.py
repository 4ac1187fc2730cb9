"""
Deliverable ORM model.

Dependencies: sqlalchemy, cigno.boundary.db.base
System role: Deliverable persistence
"""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cigno.boundary.db.base import AuditMixin, Base, ObjectIdMixin, TimestampMixin


class DeliverableModel(Base, ObjectIdMixin, TimestampMixin, AuditMixin):
    """
    Client-facing output of a project.

    The brief_* columns hold the latest automated brief evaluation;
    brief_last_evaluated_at changes whenever any of them is written.
    """

    __tablename__ = "deliverables"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    type: Mapped[str] = mapped_column(String(50), nullable=False, default="Report")
    format: Mapped[str] = mapped_column(String(20), nullable=False, default="PDF")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="draft")
    priority: Mapped[str] = mapped_column(String(20), nullable=False, default="medium")
    brief: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    due_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    estimated_hours: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    brief_quality: Mapped[float | None] = mapped_column(Float, nullable=True, default=None)
    brief_strengths: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    brief_improvements: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    brief_last_evaluated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )
    project_id: Mapped[str] = mapped_column(
        String(24), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )

    project: Mapped["ProjectModel"] = relationship("ProjectModel", back_populates="deliverables")

    def __repr__(self) -> str:
        return f"<DeliverableModel(id={self.id}, name={self.name!r})>"
