"""Policy evaluator combining ownership, visibility, memberships and policies."""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ingest.models.policy import Action
from ingest.services.membership_service import MembershipService
from ingest.services.policy_service import PolicyService
from ingest.utils.exceptions import InvalidRequestError

from .base import Actor, Decision, ResourceRef
from .matcher import Verdict, combine_verdicts, policy_verdict
from .registry import ResourceKind, get_resource_kind, resolve_resource

logger = logging.getLogger(__name__)


class PolicyEvaluator:
    """
    Decide whether an actor may perform an action on a resource.

    Checks run in a fixed order and the first allow wins:

    1. the actor owns the resource
    2. the resource is public and the action is read
    3. the actor holds an accepted membership whose role grants the action
    4. a policy in scope grants the action, unless a match_none policy
       matches the resource attributes, which denies

    Anything else is denied.
    """

    def __init__(self, db: AsyncSession, policy_service: PolicyService | None = None):
        self.db = db
        self.policy_service = policy_service or PolicyService(db)

    def _validate(
        self, actor: Actor, resource_type: str, action: Action | str, resource: Any
    ) -> tuple[ResourceKind, ResourceRef, Action]:
        """Reject malformed input before any query runs."""
        if actor is None or getattr(actor, "id", None) is None:
            raise InvalidRequestError("Actor id is required")

        kind = get_resource_kind(resource_type)

        try:
            action = Action(action)
        except ValueError:
            raise InvalidRequestError(f"Unknown action: {action}", details={"action": str(action)})

        return kind, resolve_resource(resource_type, resource), action

    async def evaluate(
        self,
        actor: Actor,
        resource_type: str,
        action: Action | str,
        resource: Any = None,
    ) -> Decision:
        """Evaluate an access request and return the decision."""

        kind, ref, action = self._validate(actor, resource_type, action, resource)
        decision = await self._decide(actor, kind, ref, action)

        logger.debug(
            f"Access {'allowed' if decision.allowed else 'denied'}: actor {actor.id} "
            f"{action.value} {kind.tag} {ref.id} ({decision.reason})",
            extra={
                "actor_id": actor.id,
                "resource_type": kind.tag,
                "resource_id": ref.id,
                "action": action.value,
                "allowed": decision.allowed,
            },
        )
        return decision

    async def _decide(
        self, actor: Actor, kind: ResourceKind, ref: ResourceRef, action: Action
    ) -> Decision:
        if ref.owner_id is not None and ref.owner_id == actor.id:
            return Decision.allow("Resource owner")

        if ref.is_public and action == Action.READ:
            return Decision.allow("Public resource")

        if kind.membership_model is not None and ref.id is not None:
            memberships = MembershipService(self.db, kind.membership_model)
            membership = await memberships.get_accepted(ref.id, actor.id)
            if membership and action in membership.allowed_actions:
                return Decision.allow(f"Membership role '{membership.role}'")

        policies = await self.policy_service.candidate_policies(kind.tag, actor)
        verdict = combine_verdicts(policy_verdict(policy, ref, action) for policy in policies)

        if verdict == Verdict.ALLOW:
            return Decision.allow("Policy grant")
        if verdict == Verdict.DENY:
            return Decision.deny("Excluded by match_none policy")
        return Decision.deny("No grant")
