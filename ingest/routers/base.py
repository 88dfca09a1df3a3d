"""Shared route builders for shareable resources."""

import logging
from collections.abc import Callable

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ingest.access.base import Actor
from ingest.access.guards import AuthorizationGate
from ingest.dependencies.auth import get_current_actor
from ingest.dependencies.database import get_db
from ingest.dependencies.services import get_authorization_gate
from ingest.models.membership import MembershipMixin, MemberStatus
from ingest.models.policy import Action
from ingest.schemas.membership import (
    MemberInviteRequest,
    MemberListResponse,
    MemberRemovedResponse,
    MembershipDetailResponse,
    MembershipResponse,
    MemberRoleUpdateRequest,
    MemberStatusUpdateRequest,
    MemberUpdatedResponse,
)
from ingest.services.membership_service import MembershipService
from ingest.utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)

# Statuses an invitee may set on their own membership
SELF_SERVICE_STATUSES = {MemberStatus.ACCEPTED, MemberStatus.REJECTED}


def _require_affected(count: int) -> int:
    if count == 0:
        raise NotFoundError("Membership not found")
    return count


def add_member_routes(
    router: APIRouter,
    resource_type: str,
    member_model: type[MembershipMixin],
    service_dependency: Callable,
) -> None:
    """
    Add sharing routes for a resource kind.

    Every mutation requires update access on the resource, except that a
    member may answer their own invite or leave.
    """

    @router.get("/{resource_id}/members", response_model=MemberListResponse)
    async def list_members(
        resource_id: int,
        actor: Actor = Depends(get_current_actor),
        service=Depends(service_dependency),
        gate: AuthorizationGate = Depends(get_authorization_gate),
        db: AsyncSession = Depends(get_db),
    ):
        """List members bound to registered users."""

        resource = await service.get(resource_id)
        await gate.authorize(actor, resource_type, Action.READ, resource)

        members = await MembershipService(db, member_model).list_active(resource_id)
        return MemberListResponse(
            message="Members retrieved successfully",
            members=[MembershipResponse.model_validate(m) for m in members],
            total=len(members),
        )

    @router.post(
        "/{resource_id}/members",
        response_model=MembershipDetailResponse,
        status_code=status.HTTP_201_CREATED,
    )
    async def invite_member(
        resource_id: int,
        invite: MemberInviteRequest,
        actor: Actor = Depends(get_current_actor),
        service=Depends(service_dependency),
        gate: AuthorizationGate = Depends(get_authorization_gate),
        db: AsyncSession = Depends(get_db),
    ):
        """Invite an email to the resource."""

        resource = await service.get(resource_id)
        await gate.authorize(actor, resource_type, Action.UPDATE, resource)

        membership = await MembershipService(db, member_model).add_member_by_email(
            resource_id, invite.email, invite.role
        )
        return MembershipDetailResponse(
            message="Member invited successfully",
            membership=MembershipResponse.model_validate(membership),
        )

    @router.put("/{resource_id}/members/{user_id}/role", response_model=MemberUpdatedResponse)
    async def update_member_role(
        resource_id: int,
        user_id: int,
        update: MemberRoleUpdateRequest,
        actor: Actor = Depends(get_current_actor),
        service=Depends(service_dependency),
        gate: AuthorizationGate = Depends(get_authorization_gate),
        db: AsyncSession = Depends(get_db),
    ):
        """Change a member's role."""

        resource = await service.get(resource_id)
        await gate.authorize(actor, resource_type, Action.UPDATE, resource)

        count = await MembershipService(db, member_model).update_role(
            resource_id, user_id, update.role
        )
        return MemberUpdatedResponse(message="Role updated successfully", updated=_require_affected(count))

    @router.put("/{resource_id}/members/{user_id}/status", response_model=MemberUpdatedResponse)
    async def update_member_status(
        resource_id: int,
        user_id: int,
        update: MemberStatusUpdateRequest,
        actor: Actor = Depends(get_current_actor),
        service=Depends(service_dependency),
        gate: AuthorizationGate = Depends(get_authorization_gate),
        db: AsyncSession = Depends(get_db),
    ):
        """Change a member's status. Invitees may accept or reject their own invite."""

        resource = await service.get(resource_id)
        if not (actor.id == user_id and update.status in SELF_SERVICE_STATUSES):
            await gate.authorize(actor, resource_type, Action.UPDATE, resource)

        count = await MembershipService(db, member_model).update_status(
            resource_id, user_id, update.status
        )
        return MemberUpdatedResponse(message="Status updated successfully", updated=_require_affected(count))

    @router.delete("/{resource_id}/members/{user_id}", response_model=MemberRemovedResponse)
    async def remove_member(
        resource_id: int,
        user_id: int,
        actor: Actor = Depends(get_current_actor),
        service=Depends(service_dependency),
        gate: AuthorizationGate = Depends(get_authorization_gate),
        db: AsyncSession = Depends(get_db),
    ):
        """Revoke a membership. Members may always leave."""

        resource = await service.get(resource_id)
        if actor.id != user_id:
            await gate.authorize(actor, resource_type, Action.UPDATE, resource)

        count = await MembershipService(db, member_model).remove(resource_id, user_id)

        logger.info(
            f"User {actor.id} removed member {user_id} from {resource_type} {resource_id}",
            extra={"resource_type": resource_type, "resource_id": resource_id},
        )
        return MemberRemovedResponse(message="Member removed successfully", removed=_require_affected(count))
