"""Destination model."""

from enum import Enum

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, OwnedResourceMixin, TimestampMixin


class DestinationType(str, Enum):
    """Storage backends uploaded data can land in."""

    S3 = "s3"
    AZURE = "azure"
    LAKEFS = "lakefs"
    INTERNAL = "internal"  # Storage provided by the Ingest administrators
    TEMPORARY = "temporary"


class Destination(Base, OwnedResourceMixin, TimestampMixin):
    """Destination for data uploaded through a request."""

    __tablename__ = "destinations"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    type: Mapped[DestinationType] = mapped_column(
        String(20), default=DestinationType.TEMPORARY.value, nullable=False
    )

    def __repr__(self) -> str:
        return f"<Destination(id={self.id}, name='{self.name}', type='{self.type}')>"
