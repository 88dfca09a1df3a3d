"""Service dependency injection."""

from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ingest.access.guards import AuthorizationGate
from ingest.dependencies.database import get_db
from ingest.services.account_service import AccountService
from ingest.services.destination_service import DestinationService
from ingest.services.policy_service import PolicyService
from ingest.services.project_service import ProjectService


async def get_account_service(db: AsyncSession = Depends(get_db)) -> AsyncGenerator[AccountService, None]:
    """Get AccountService instance."""
    yield AccountService(db)


async def get_policy_service(db: AsyncSession = Depends(get_db)) -> AsyncGenerator[PolicyService, None]:
    """Get PolicyService instance."""
    yield PolicyService(db)


async def get_destination_service(
    db: AsyncSession = Depends(get_db),
) -> AsyncGenerator[DestinationService, None]:
    """Get DestinationService instance."""
    yield DestinationService(db)


async def get_project_service(
    db: AsyncSession = Depends(get_db),
) -> AsyncGenerator[ProjectService, None]:
    """Get ProjectService instance."""
    yield ProjectService(db)


async def get_authorization_gate(
    db: AsyncSession = Depends(get_db),
) -> AsyncGenerator[AuthorizationGate, None]:
    """Get AuthorizationGate instance."""
    yield AuthorizationGate(db)
