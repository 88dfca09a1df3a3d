"""Shared CRUD service for owned, shareable resources."""

from typing import Any

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ingest.models.base import Visibility
from ingest.models.membership import MembershipMixin
from ingest.models.user import User
from ingest.utils.exceptions import NotFoundError
from ingest.utils.transaction_manager import atomic_operation


class OwnedResourceService:
    """Service for resources that have an owner, a visibility and members."""

    model: type
    member_model: type[MembershipMixin]
    resource_label: str = "Resource"
    editable_fields: tuple[str, ...] = ("name", "visibility", "attributes")

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, owner: User, **data: Any):
        """Create a resource owned by the given user."""

        resource = self.model(inserted_by=owner.id, **self._clean(data))

        self.db.add(resource)
        await self.db.commit()
        await self.db.refresh(resource)

        return resource

    async def get(self, resource_id: int):
        """Get resource by ID."""

        result = await self.db.execute(select(self.model).where(self.model.id == resource_id))
        resource = result.scalar_one_or_none()

        if not resource:
            raise NotFoundError(f"{self.resource_label} not found")

        return resource

    async def list_visible(self, user: User) -> list:
        """List resources the user owns, has been invited to, or that are public."""

        shared_ids = select(self.member_model.resource_column()).where(
            self.member_model.user_id == user.id
        )
        result = await self.db.execute(
            select(self.model)
            .where(
                or_(
                    self.model.inserted_by == user.id,
                    self.model.id.in_(shared_ids),
                    self.model.visibility == Visibility.PUBLIC.value,
                )
            )
            .order_by(self.model.id)
        )
        return list(result.scalars().all())

    async def update(self, resource, **update_data: Any):
        """Update editable fields of a resource."""

        for field, value in self._clean(update_data).items():
            setattr(resource, field, value)

        await self.db.commit()
        await self.db.refresh(resource)

        return resource

    async def delete(self, resource) -> None:
        """Delete a resource together with its memberships."""

        async with atomic_operation(self.db):
            await self.db.execute(
                delete(self.member_model).where(self.member_model.resource_column() == resource.id)
            )
            await self.db.delete(resource)

    def _clean(self, data: dict[str, Any]) -> dict[str, Any]:
        cleaned = {}
        for field, value in data.items():
            if field not in self.editable_fields or value is None:
                continue
            cleaned[field] = getattr(value, "value", value)
        return cleaned
