"""Membership store service for shared destinations and projects."""

import logging

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ingest.models.membership import MemberRole, MembershipMixin, MemberStatus
from ingest.models.user import User
from ingest.utils.exceptions import ConflictError, ValidationError
from ingest.utils.validators import validate_email

logger = logging.getLogger(__name__)


def _coerce_role(role: MemberRole | str) -> MemberRole:
    try:
        return MemberRole(role)
    except ValueError:
        raise ValidationError.for_fields(
            {"role": [f"must be one of: {[r.value for r in MemberRole]}"]}
        )


def _coerce_status(status: MemberStatus | str) -> MemberStatus:
    try:
        return MemberStatus(status)
    except ValueError:
        raise ValidationError.for_fields(
            {"status": [f"must be one of: {[s.value for s in MemberStatus]}"]}
        )


class MembershipService:
    """
    Service for membership records of one resource kind.

    Usage:
        MembershipService(db, DestinationMember)
        MembershipService(db, ProjectMember)

    Mutations are single conditional statements returning the affected row
    count, so concurrent changes to the same membership cannot interleave.
    """

    def __init__(self, db: AsyncSession, model: type[MembershipMixin]):
        self.db = db
        self.model = model
        self.resource_column = model.resource_column()

    def _member_filter(self, resource_id: int, user_id: int):
        return (self.resource_column == resource_id, self.model.user_id == user_id)

    async def add_member_by_email(
        self,
        resource_id: int,
        email: str,
        role: MemberRole | str = MemberRole.UPLOADER,
    ) -> MembershipMixin:
        """Invite an email to a resource.

        The invite is bound to the matching account if one exists, otherwise
        it stays unresolved until that email registers.
        """

        validate_email(email)
        role = _coerce_role(role)

        result = await self.db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()

        duplicate_condition = self.model.email == email
        if user:
            duplicate_condition = duplicate_condition | (self.model.user_id == user.id)

        existing = await self.db.execute(
            select(self.model.id).where(self.resource_column == resource_id, duplicate_condition)
        )
        if existing.first():
            raise ConflictError(
                "Email has already been invited to this resource",
                details={"email": email, "resource_id": resource_id},
            )

        membership = self.model(
            email=email,
            user_id=user.id if user else None,
            role=role.value,
            status=MemberStatus.PENDING.value,
        )
        setattr(membership, self.model.__resource_key__, resource_id)

        self.db.add(membership)
        await self.db.commit()
        await self.db.refresh(membership)

        logger.info(
            f"Invited {email} to {self.model.__tablename__} resource {resource_id}",
            extra={"resource_id": resource_id, "resolved": membership.is_resolved},
        )
        return membership

    async def list_active(self, resource_id: int) -> list[MembershipMixin]:
        """List memberships bound to a registered user."""

        result = await self.db.execute(
            select(self.model)
            .where(self.resource_column == resource_id, self.model.user_id.is_not(None))
            .order_by(self.model.id)
        )
        return list(result.scalars().all())

    async def list_for_user(self, user_id: int) -> list[MembershipMixin]:
        """List every membership held by a user."""

        result = await self.db.execute(
            select(self.model).where(self.model.user_id == user_id).order_by(self.model.id)
        )
        return list(result.scalars().all())

    async def get_membership(self, resource_id: int, user_id: int) -> MembershipMixin | None:
        """Get the membership of a user in a resource, whatever its status."""

        result = await self.db.execute(
            select(self.model).where(*self._member_filter(resource_id, user_id))
        )
        return result.scalar_one_or_none()

    async def get_accepted(self, resource_id: int, user_id: int) -> MembershipMixin | None:
        """Get the membership of a user in a resource if it has been accepted."""

        result = await self.db.execute(
            select(self.model).where(
                *self._member_filter(resource_id, user_id),
                self.model.status == MemberStatus.ACCEPTED.value,
            )
        )
        return result.scalar_one_or_none()

    async def update_role(self, resource_id: int, user_id: int, role: MemberRole | str) -> int:
        """Change a member's role. Returns the number of rows updated."""

        role = _coerce_role(role)
        result = await self.db.execute(
            update(self.model)
            .where(*self._member_filter(resource_id, user_id))
            .values(role=role.value)
        )
        await self.db.commit()
        return result.rowcount

    async def update_status(self, resource_id: int, user_id: int, status: MemberStatus | str) -> int:
        """Change a member's status. Returns the number of rows updated."""

        status = _coerce_status(status)
        result = await self.db.execute(
            update(self.model)
            .where(*self._member_filter(resource_id, user_id))
            .values(status=status.value)
        )
        await self.db.commit()
        return result.rowcount

    async def remove(self, resource_id: int, user_id: int) -> int:
        """Revoke a membership. Returns the number of rows deleted."""

        result = await self.db.execute(
            delete(self.model).where(*self._member_filter(resource_id, user_id))
        )
        await self.db.commit()
        return result.rowcount

    async def backfill_on_registration(self, user: User, commit: bool = True) -> int:
        """
        Bind pending invites sent to the user's email to the new account.

        Emails are compared by exact string equality.
        """

        result = await self.db.execute(
            update(self.model)
            .where(
                self.model.email == user.email,
                self.model.status == MemberStatus.PENDING.value,
            )
            .values(user_id=user.id)
        )
        if commit:
            await self.db.commit()
        else:
            await self.db.flush()

        if result.rowcount:
            logger.info(
                f"Backfilled {result.rowcount} {self.model.__tablename__} invites for user {user.id}",
                extra={"user_id": user.id},
            )
        return result.rowcount
