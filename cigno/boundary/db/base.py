"""
SQLAlchemy declarative base and common mixins.

Provides base class for all ORM models and reusable mixins
for common fields (object ids, timestamps, audit references, soft delete).

Dependencies: sqlalchemy, cigno.core.identifiers
System role: Foundation for all database models
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from cigno.core.identifiers import generate_object_id

OBJECT_ID_LENGTH = 24


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base for ORM model registration.

    All database models inherit from this class to ensure they're
    registered with the metadata and included in table creation.
    """

    def to_dict(self) -> dict[str, Any]:
        """Column values keyed by attribute name."""
        return {column.key: getattr(self, column.key) for column in self.__mapper__.column_attrs}


class ObjectIdMixin:
    """
    Mixin providing a 24-hex object identifier primary key.

    Attributes:
        id: Object identifier, generated on insert
    """

    id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH),
        primary_key=True,
        default=generate_object_id,
        nullable=False,
    )


class TimestampMixin:
    """
    Mixin providing automatic timestamp tracking to all models.

    created_at is set once on row creation and never changes.
    updated_at is refreshed on every update via onupdate hook.
    Both use UTC.

    Attributes:
        created_at: Row creation timestamp (UTC, immutable)
        updated_at: Last modification timestamp (UTC, auto-updated)
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )


class AuditMixin:
    """
    Mixin providing audit references and the soft-delete flag.

    created_by/updated_by hold user ids without a foreign key so that the
    users table can itself be audited.

    Attributes:
        created_by: Id of the user that created the row
        updated_by: Id of the user that last changed the row
        is_active: False once the row has been soft-deleted
    """

    created_by: Mapped[str | None] = mapped_column(String(OBJECT_ID_LENGTH), nullable=True, default=None)
    updated_by: Mapped[str | None] = mapped_column(String(OBJECT_ID_LENGTH), nullable=True, default=None)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
