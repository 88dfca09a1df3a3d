"""Account registration and authentication service."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ingest.models.membership import DestinationMember, MembershipMixin, ProjectMember
from ingest.models.user import User
from ingest.utils.exceptions import AuthenticationError, ConflictError
from ingest.utils.security import hash_password, verify_password
from ingest.utils.transaction_manager import atomic_operation
from ingest.utils.validators import validate_email, validate_password

from .membership_service import MembershipService

logger = logging.getLogger(__name__)

# Membership kinds whose pending invites are bound at registration
MEMBERSHIP_MODELS: tuple[type[MembershipMixin], ...] = (DestinationMember, ProjectMember)


class AccountService:
    """Service for user accounts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def register_user(
        self,
        email: str,
        password: str,
        name: str | None = None,
    ) -> tuple[User, int]:
        """
        Register a user and bind any invites sent to their email.

        Returns the user and the number of memberships backfilled.
        """

        validate_email(email)
        validate_password(password)

        async with atomic_operation(self.db):
            if await self.get_user_by_email(email):
                raise ConflictError("Email already registered", details={"email": email})

            user = User(
                email=email,
                name=name,
                password_hash=hash_password(password),
                is_active=True,
            )
            self.db.add(user)
            await self.db.flush()  # Get the ID

            backfilled = 0
            for model in MEMBERSHIP_MODELS:
                backfilled += await MembershipService(self.db, model).backfill_on_registration(
                    user, commit=False
                )

        await self.db.refresh(user)

        logger.info(
            f"Registered user {user.id}",
            extra={"user_id": user.id, "backfilled_memberships": backfilled},
        )
        return user, backfilled

    async def authenticate(self, email: str, password: str) -> User:
        """Check credentials and return the user."""

        user = await self.get_user_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid email or password")

        if not user.is_active:
            raise AuthenticationError("User account is inactive")

        return user

    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by exact email."""

        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()
