"""
User ORM model.

Dependencies: sqlalchemy, cigno.boundary.db.base
System role: User persistence
"""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cigno.boundary.db.base import AuditMixin, Base, ObjectIdMixin, TimestampMixin


class UserModel(Base, ObjectIdMixin, TimestampMixin, AuditMixin):
    """
    Platform user belonging to one organisation.

    Owned clients, projects and deliverables are found through their
    owner_id / internal_owner_id / created_by columns.
    """

    __tablename__ = "users"

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email_address: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    job_title: Mapped[str | None] = mapped_column(String(200), nullable=True, default=None)
    location: Mapped[str | None] = mapped_column(String(200), nullable=True, default=None)
    phone_number: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    organisation_id: Mapped[str] = mapped_column(
        String(24),
        ForeignKey("organisations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    organisation: Mapped["OrganisationModel"] = relationship("OrganisationModel", back_populates="users")

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, email={self.email_address!r})>"
