"""Project model."""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, OwnedResourceMixin, TimestampMixin


class Project(Base, OwnedResourceMixin, TimestampMixin):
    """Project grouping related data requests."""

    __tablename__ = "projects"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, name='{self.name}')>"
