"""Data request model."""

from enum import Enum

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, OwnedResourceMixin, TimestampMixin


class RequestStatus(str, Enum):
    """Lifecycle state of a data request."""

    DRAFT = "draft"
    PUBLISHED = "published"


class Request(Base, OwnedResourceMixin, TimestampMixin):
    """Request for a file upload, optionally grouped under a project."""

    __tablename__ = "requests"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    status: Mapped[RequestStatus] = mapped_column(
        String(20), default=RequestStatus.DRAFT.value, nullable=False
    )

    project_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("projects.id", ondelete="SET NULL"),
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Request(id={self.id}, name='{self.name}', status='{self.status}')>"
