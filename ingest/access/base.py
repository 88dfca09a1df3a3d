"""Value types shared by the access engine."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from ingest.models.base import Visibility
from ingest.models.user import User


def enum_value(value: Any) -> Any:
    """Unwrap enum members so attribute comparisons see plain values."""
    return value.value if isinstance(value, Enum) else value


@dataclass(frozen=True)
class Actor:
    """The user an access decision is made for."""

    id: Optional[int]
    email: Optional[str] = None
    group_ids: frozenset[int] = field(default_factory=frozenset)

    @classmethod
    def from_user(cls, user: User, group_ids: Iterable[int] = ()) -> "Actor":
        """Build an actor from a user record and its group claims."""
        return cls(id=user.id, email=user.email, group_ids=frozenset(group_ids))


@dataclass(frozen=True)
class ResourceRef:
    """Uniform view of any resource kind the engine decides over."""

    type_tag: str
    id: Optional[int] = None
    owner_id: Optional[int] = None
    visibility: Visibility = Visibility.PRIVATE
    attributes: Mapping[str, Any] = field(default_factory=dict)

    @property
    def is_public(self) -> bool:
        return self.visibility == Visibility.PUBLIC


@dataclass(frozen=True)
class Decision:
    """Result of an access evaluation.

    The reason is for logs and tests only and must not reach API callers.
    """

    allowed: bool
    reason: Optional[str] = None

    @classmethod
    def allow(cls, reason: Optional[str] = None) -> "Decision":
        """Create an allow decision."""
        return cls(allowed=True, reason=reason)

    @classmethod
    def deny(cls, reason: str) -> "Decision":
        """Create a deny decision."""
        return cls(allowed=False, reason=reason)
