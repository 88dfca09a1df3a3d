"""Membership models linking users to shared destinations and projects."""

from dataclasses import dataclass
from enum import Enum

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin
from .policy import Action


class MemberRole(str, Enum):
    """Capability level of a member on a shared resource."""

    UPLOADER = "uploader"  # Can upload into and view the resource
    MANAGER = "manager"  # Full control, including sharing


class MemberStatus(str, Enum):
    """Invitation state of a membership."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


ROLE_ACTIONS: dict[MemberRole, frozenset[Action]] = {
    MemberRole.UPLOADER: frozenset({Action.CREATE, Action.READ}),
    MemberRole.MANAGER: frozenset({Action.CREATE, Action.READ, Action.UPDATE, Action.DELETE}),
}


@dataclass(frozen=True)
class UnresolvedInvite:
    """Invite sent to an e-mail that has no account yet."""

    email: str


@dataclass(frozen=True)
class ResolvedMember:
    """Membership bound to a registered user."""

    user_id: int


class MembershipMixin(TimestampMixin):
    """Columns shared by every membership table."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    user_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
    )
    email: Mapped[str | None] = mapped_column(String(255), index=True)

    role: Mapped[MemberRole] = mapped_column(String(20), default=MemberRole.UPLOADER.value, nullable=False)
    status: Mapped[MemberStatus] = mapped_column(
        String(20), default=MemberStatus.PENDING.value, nullable=False, index=True
    )

    @classmethod
    def resource_column(cls):
        """Get the column holding the shared resource id."""
        return getattr(cls, cls.__resource_key__)

    @property
    def resource_id(self) -> int:
        return getattr(self, self.__resource_key__)

    @property
    def identity(self) -> UnresolvedInvite | ResolvedMember:
        """Get the two-phase identity of this membership."""
        if self.user_id is None:
            return UnresolvedInvite(email=self.email)
        return ResolvedMember(user_id=self.user_id)

    @property
    def is_resolved(self) -> bool:
        return self.user_id is not None

    @property
    def is_accepted(self) -> bool:
        return self.status == MemberStatus.ACCEPTED

    @property
    def allowed_actions(self) -> frozenset[Action]:
        """Actions this membership grants. Only accepted memberships grant any."""
        if not self.is_accepted:
            return frozenset()
        return ROLE_ACTIONS.get(MemberRole(self.role), frozenset())

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__}(resource_id={self.resource_id}, "
            f"user_id={self.user_id}, role='{self.role}', status='{self.status}')>"
        )


class DestinationMember(Base, MembershipMixin):
    """Membership of a user in a destination."""

    __tablename__ = "destination_members"
    __resource_key__ = "destination_id"

    destination_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("destinations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    __table_args__ = (
        UniqueConstraint("user_id", "destination_id", name="unique_user_destination_member"),
        UniqueConstraint("email", "destination_id", name="unique_email_destination_member"),
    )


class ProjectMember(Base, MembershipMixin):
    """Membership of a user in a project."""

    __tablename__ = "project_members"
    __resource_key__ = "project_id"

    project_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    __table_args__ = (
        UniqueConstraint("user_id", "project_id", name="unique_user_project_member"),
        UniqueConstraint("email", "project_id", name="unique_email_project_member"),
    )
