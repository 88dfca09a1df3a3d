"""Metadata template model."""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, OwnedResourceMixin, TimestampMixin


class Template(Base, OwnedResourceMixin, TimestampMixin):
    """Metadata template attached to requests."""

    __tablename__ = "templates"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<Template(id={self.id}, name='{self.name}')>"
