"""Policy store service."""

import json
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import String, and_, cast, false, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ingest.models.policy import Action, Policy, Scope
from ingest.schemas.policy import PolicyData
from ingest.utils.exceptions import NotFoundError, ValidationError

if TYPE_CHECKING:
    from ingest.access.base import Actor

logger = logging.getLogger(__name__)

POLICY_FIELDS = ("name", "actions", "resource_types", "attributes", "matcher", "scope", "scope_id")


def _field_errors(exc: PydanticValidationError) -> dict[str, list[str]]:
    """Convert pydantic errors into per-field messages."""
    fields: dict[str, list[str]] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "__root__"
        fields.setdefault(field, []).append(error["msg"])
    return fields


def validate_policy_data(data: dict[str, Any]) -> dict[str, Any]:
    """Validate policy fields and return them in storable form."""
    try:
        validated = PolicyData.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError.for_fields(_field_errors(e), message="Invalid policy")
    return validated.model_dump(mode="json")


def json_list_mentions(column, value: str):
    """Match rows whose serialized JSON list contains the value as a string item.

    Works on the column text, so it may over-match (e.g. a value that also
    appears as an object key) but never misses a row that lists the value.
    """
    needle = json.dumps(value)
    for char in ("\\", "%", "_"):
        needle = needle.replace(char, "\\" + char)
    return cast(column, String).like(f"%{needle}%", escape="\\")


class PolicyService:
    """Service for policy records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_policies(
        self,
        resource_types: Iterable[str] | None = None,
        actions: Iterable[Action | str] | None = None,
    ) -> list[Policy]:
        """
        List policies covering any of the resource types and any of the actions.

        A filter left as None is not applied. Ordering is for display only.
        """
        query = select(Policy).order_by(Policy.id)

        if resource_types is not None:
            wanted_types = set(resource_types)
            query = query.where(
                or_(false(), *(json_list_mentions(Policy.resource_types, t) for t in wanted_types))
            )

        if actions is not None:
            try:
                wanted_actions = {Action(action) for action in actions}
            except ValueError as e:
                raise ValidationError.for_fields({"actions": [str(e)]})
            query = query.where(
                or_(false(), *(json_list_mentions(Policy.actions, a.value) for a in wanted_actions))
            )

        result = await self.db.execute(query)
        policies = list(result.scalars().all())

        # LIKE only narrows the rows; membership is decided on the decoded lists
        if resource_types is not None:
            policies = [p for p in policies if wanted_types.intersection(p.resource_types or [])]
        if actions is not None:
            policies = [p for p in policies if wanted_actions & p.action_set]

        return policies

    async def get_policy(self, policy_id: int) -> Policy:
        """Get policy by ID."""

        result = await self.db.execute(select(Policy).where(Policy.id == policy_id))
        policy = result.scalar_one_or_none()

        if not policy:
            raise NotFoundError("Policy not found", details={"policy_id": policy_id})

        return policy

    async def create_policy(self, attrs: dict[str, Any]) -> Policy:
        """Create a policy after validating its fields."""

        data = validate_policy_data({k: v for k, v in attrs.items() if k in POLICY_FIELDS})
        policy = Policy(**data)

        self.db.add(policy)
        await self.db.commit()
        await self.db.refresh(policy)

        logger.info(f"Created policy {policy.id} '{policy.name}'", extra={"policy_id": policy.id})
        return policy

    async def update_policy(self, policy_id: int, attrs: dict[str, Any]) -> Policy:
        """Merge attrs over the stored policy, validate, then save.

        An invalid update leaves the stored policy untouched.
        """

        policy = await self.get_policy(policy_id)

        merged = {field: getattr(policy, field) for field in POLICY_FIELDS}
        merged.update({k: v for k, v in attrs.items() if k in POLICY_FIELDS})
        data = validate_policy_data(merged)

        for field, value in data.items():
            setattr(policy, field, value)

        await self.db.commit()
        await self.db.refresh(policy)

        logger.info(f"Updated policy {policy.id}", extra={"policy_id": policy.id})
        return policy

    async def delete_policy(self, policy_id: int) -> None:
        """Delete a policy."""

        policy = await self.get_policy(policy_id)
        await self.db.delete(policy)
        await self.db.commit()

        logger.info(f"Deleted policy {policy_id}", extra={"policy_id": policy_id})

    async def candidate_policies(self, resource_type: str, actor: "Actor") -> list[Policy]:
        """Get policies that apply to the resource type and whose scope covers the actor."""

        scope_conditions = [Policy.scope == Scope.GLOBAL.value]
        if actor.id is not None:
            scope_conditions.append(
                and_(Policy.scope == Scope.USER.value, Policy.scope_id == actor.id)
            )
        if actor.group_ids:
            scope_conditions.append(
                and_(Policy.scope == Scope.GROUP.value, Policy.scope_id.in_(sorted(actor.group_ids)))
            )

        result = await self.db.execute(
            select(Policy).where(
                or_(*scope_conditions),
                json_list_mentions(Policy.resource_types, resource_type),
            )
        )
        return [p for p in result.scalars().all() if p.applies_to_type(resource_type)]
