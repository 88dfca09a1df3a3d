"""Access evaluation routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ingest.access.base import Actor
from ingest.access.guards import AuthorizationGate
from ingest.access.registry import get_resource_kind
from ingest.dependencies.auth import get_current_actor
from ingest.dependencies.database import get_db
from ingest.dependencies.services import get_authorization_gate
from ingest.schemas.access import EvaluateRequest, EvaluateResponse
from ingest.utils.exceptions import NotFoundError

router = APIRouter()


@router.post("/evaluate", response_model=EvaluateResponse)
async def evaluate_access(
    request: EvaluateRequest,
    actor: Actor = Depends(get_current_actor),
    gate: AuthorizationGate = Depends(get_authorization_gate),
    db: AsyncSession = Depends(get_db),
):
    """Check whether the current user may perform an action. No reasoning is returned."""

    kind = get_resource_kind(request.resource_type)

    resource = None
    if request.resource_id is not None:
        resource = await db.get(kind.model, request.resource_id)
        if resource is None:
            raise NotFoundError(f"{kind.tag} not found")

    allowed = await gate.permit(actor, kind.tag, request.action, resource)
    return EvaluateResponse(allowed=allowed)
