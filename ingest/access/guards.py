"""Authorization gate used inline by every mutating operation."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ingest.models.policy import Action
from ingest.utils.exceptions import AccessDeniedError

from .base import Actor, Decision
from .evaluator import PolicyEvaluator


class AuthorizationGate:
    """Relay evaluator decisions as pass-through or a structured denial."""

    def __init__(self, db: AsyncSession, evaluator: PolicyEvaluator | None = None):
        self.evaluator = evaluator or PolicyEvaluator(db)

    async def evaluate(
        self,
        actor: Actor,
        resource_type: str,
        action: Action | str,
        resource: Any = None,
    ) -> Decision:
        """Get the raw decision."""
        return await self.evaluator.evaluate(actor, resource_type, action, resource)

    async def permit(
        self,
        actor: Actor,
        resource_type: str,
        action: Action | str,
        resource: Any = None,
    ) -> bool:
        """
        Check if actor can perform action on resource.

        Usage:
            await gate.permit(actor, "Destination", Action.UPDATE, destination)
        """
        decision = await self.evaluate(actor, resource_type, action, resource)
        return decision.allowed

    async def authorize(
        self,
        actor: Actor,
        resource_type: str,
        action: Action | str,
        resource: Any = None,
    ) -> None:
        """
        Require that actor can perform action on resource.
        Raises AccessDeniedError if not allowed.

        Usage:
            await gate.authorize(actor, "Project", Action.DELETE, project)
        """
        decision = await self.evaluate(actor, resource_type, action, resource)
        if not decision.allowed:
            raise AccessDeniedError(
                resource_type=resource_type,
                action=Action(action).value,
                actor_id=actor.id,
            )
