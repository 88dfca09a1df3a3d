"""Database models."""

from .base import Base, OwnedResourceMixin, TimestampMixin, Visibility
from .destination import Destination, DestinationType
from .membership import (
    DestinationMember,
    MemberRole,
    MembershipMixin,
    MemberStatus,
    ProjectMember,
    ResolvedMember,
    UnresolvedInvite,
)
from .policy import Action, Matcher, Policy, Scope
from .project import Project
from .request import Request, RequestStatus
from .template import Template
from .user import User

__all__ = [
    "Base",
    "TimestampMixin",
    "OwnedResourceMixin",
    "Visibility",
    "User",
    "Policy",
    "Action",
    "Matcher",
    "Scope",
    "Destination",
    "DestinationType",
    "Project",
    "Request",
    "RequestStatus",
    "Template",
    "MembershipMixin",
    "DestinationMember",
    "ProjectMember",
    "MemberRole",
    "MemberStatus",
    "UnresolvedInvite",
    "ResolvedMember",
]
