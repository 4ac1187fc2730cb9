"""
Project ORM model.

Dependencies: sqlalchemy, cigno.boundary.db.base
System role: Project persistence
"""

from datetime import date

from sqlalchemy import JSON, Date, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cigno.boundary.db.base import AuditMixin, Base, ObjectIdMixin, TimestampMixin


class ProjectModel(Base, ObjectIdMixin, TimestampMixin, AuditMixin):
    """
    Client engagement with a date range, budget and deliverables.

    Attributes:
        budget: {amount, currency, type, allocated, spent}

    Relationships:
        deliverables: Deliverables of the project (deleted with it)
    """

    __tablename__ = "projects"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="Planning")
    client_id: Mapped[str] = mapped_column(
        String(24), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True
    )
    client_owner_id: Mapped[str | None] = mapped_column(
        String(24), ForeignKey("contacts.id", ondelete="SET NULL"), nullable=True, default=None
    )
    internal_owner_id: Mapped[str | None] = mapped_column(
        String(24), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, default=None
    )
    organisation_id: Mapped[str] = mapped_column(
        String(24), ForeignKey("organisations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    budget: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    priority: Mapped[str] = mapped_column(String(20), nullable=False, default="medium")
    project_type: Mapped[str] = mapped_column(String(20), nullable=False, default="consulting")
    tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    deliverables: Mapped[list["DeliverableModel"]] = relationship(
        "DeliverableModel",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="DeliverableModel.due_date",
    )

    def __repr__(self) -> str:
        return f"<ProjectModel(id={self.id}, name={self.name!r})>"
