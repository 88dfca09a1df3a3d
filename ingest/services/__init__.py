"""Service layer for business logic."""

from .account_service import AccountService
from .destination_service import DestinationService
from .jwt_service import JWTService
from .membership_service import MembershipService
from .policy_service import PolicyService
from .project_service import ProjectService

__all__ = [
    "AccountService",
    "DestinationService",
    "JWTService",
    "MembershipService",
    "PolicyService",
    "ProjectService",
]
