"""Policy model for attribute based access rules."""

from enum import Enum

from sqlalchemy import JSON, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class Action(str, Enum):
    """Actions a policy or membership role can grant."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


class Matcher(str, Enum):
    """How a policy combines its action and attribute conditions."""

    MATCH_ALL = "match_all"  # Action and attributes must both hold
    MATCH_ONE = "match_one"  # Either action or attributes suffices
    MATCH_NONE = "match_none"  # Attribute hit is an explicit deny


class Scope(str, Enum):
    """Which actors a policy applies to."""

    GLOBAL = "global"
    USER = "user"
    GROUP = "group"


class Policy(Base, TimestampMixin):
    """Globally defined access policy."""

    __tablename__ = "policies"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Conditions
    actions: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    resource_types: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    attributes: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    matcher: Mapped[Matcher] = mapped_column(String(20), nullable=False)

    # Applicability
    scope: Mapped[Scope] = mapped_column(String(20), default=Scope.GLOBAL.value, nullable=False, index=True)
    scope_id: Mapped[int | None] = mapped_column(Integer, index=True)

    @property
    def action_set(self) -> frozenset[Action]:
        """Get actions as a set of enum members."""
        return frozenset(Action(action) for action in self.actions or [])

    def applies_to_type(self, resource_type: str) -> bool:
        """Check if policy lists the resource type."""
        return resource_type in (self.resource_types or [])

    def __repr__(self) -> str:
        return f"<Policy(id={self.id}, name='{self.name}', matcher='{self.matcher}')>"
