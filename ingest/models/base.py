"""Base model classes and mixins."""

from datetime import datetime
from enum import Enum

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column


class Base(DeclarativeBase):
    """Base model class."""

    # Generate __tablename__ automatically
    @declared_attr.directive
    def __tablename__(cls) -> str:
        return cls.__name__.lower()


class Visibility(str, Enum):
    """Who can see a resource without further grants."""

    PUBLIC = "public"
    PRIVATE = "private"


class TimestampMixin:
    """Mixin for created_at and updated_at timestamps."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class OwnedResourceMixin:
    """Columns shared by every resource the access engine decides over."""

    inserted_by: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        index=True,
    )
    visibility: Mapped[Visibility] = mapped_column(
        String(20), default=Visibility.PRIVATE.value, nullable=False
    )
    attributes: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)

    @property
    def is_public(self) -> bool:
        """Check if resource is publicly visible."""
        return self.visibility == Visibility.PUBLIC
