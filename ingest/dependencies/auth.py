"""Authentication dependencies for FastAPI."""

from dataclasses import dataclass

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ingest.access.base import Actor
from ingest.models.user import User
from ingest.services.jwt_service import JWTService
from ingest.utils.exceptions import AuthenticationError

from .database import get_db

# Security scheme for Bearer tokens
security = HTTPBearer(auto_error=False)


@dataclass
class CurrentPrincipal:
    """Authenticated user together with the actor used for access decisions."""

    user: User
    actor: Actor


async def get_current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> CurrentPrincipal:
    """Resolve the bearer token into the current user and actor."""

    if not credentials:
        raise AuthenticationError("Not authenticated")

    user_id, group_ids = JWTService().read_access_claims(credentials.credentials)

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if not user or not user.is_active:
        raise AuthenticationError("User account is inactive or missing")

    return CurrentPrincipal(user=user, actor=Actor.from_user(user, group_ids))


async def get_current_user(
    principal: CurrentPrincipal = Depends(get_current_principal),
) -> User:
    """Get current active user."""
    return principal.user


async def get_current_actor(
    principal: CurrentPrincipal = Depends(get_current_principal),
) -> Actor:
    """Get the actor for access decisions."""
    return principal.actor


async def require_superuser(
    current_user: User = Depends(get_current_user),
) -> User:
    """Require superuser access."""
    if not current_user.is_superuser:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Superuser access required",
        )
    return current_user
