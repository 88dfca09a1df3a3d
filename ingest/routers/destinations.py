"""Destination routes."""

from fastapi import APIRouter, Depends, status

from ingest.access.base import Actor
from ingest.access.guards import AuthorizationGate
from ingest.dependencies.auth import get_current_actor, get_current_user
from ingest.dependencies.services import get_authorization_gate, get_destination_service
from ingest.models.membership import DestinationMember
from ingest.models.policy import Action
from ingest.models.user import User
from ingest.schemas.common import BaseResponse
from ingest.schemas.resource import (
    DestinationCreate,
    DestinationDetailResponse,
    DestinationListResponse,
    DestinationResponse,
    DestinationUpdate,
)
from ingest.services.destination_service import DestinationService

from .base import add_member_routes

router = APIRouter()

RESOURCE_TYPE = "Destination"


@router.post("/", response_model=DestinationDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_destination(
    destination_create: DestinationCreate,
    current_user: User = Depends(get_current_user),
    destination_service: DestinationService = Depends(get_destination_service),
):
    """Create destination owned by the current user."""

    destination = await destination_service.create(current_user, **destination_create.model_dump())

    return DestinationDetailResponse(
        message="Destination created successfully",
        destination=DestinationResponse.model_validate(destination),
    )


@router.get("/", response_model=DestinationListResponse)
async def list_destinations(
    current_user: User = Depends(get_current_user),
    destination_service: DestinationService = Depends(get_destination_service),
):
    """List destinations visible to the current user."""

    destinations = await destination_service.list_visible(current_user)

    return DestinationListResponse(
        message="Destinations retrieved successfully",
        destinations=[DestinationResponse.model_validate(d) for d in destinations],
        total=len(destinations),
    )


@router.get("/{destination_id}", response_model=DestinationDetailResponse)
async def get_destination(
    destination_id: int,
    actor: Actor = Depends(get_current_actor),
    destination_service: DestinationService = Depends(get_destination_service),
    gate: AuthorizationGate = Depends(get_authorization_gate),
):
    """Get destination by ID."""

    destination = await destination_service.get(destination_id)
    await gate.authorize(actor, RESOURCE_TYPE, Action.READ, destination)

    return DestinationDetailResponse(
        message="Destination retrieved successfully",
        destination=DestinationResponse.model_validate(destination),
    )


@router.put("/{destination_id}", response_model=DestinationDetailResponse)
async def update_destination(
    destination_id: int,
    destination_update: DestinationUpdate,
    actor: Actor = Depends(get_current_actor),
    destination_service: DestinationService = Depends(get_destination_service),
    gate: AuthorizationGate = Depends(get_authorization_gate),
):
    """Update destination."""

    destination = await destination_service.get(destination_id)
    await gate.authorize(actor, RESOURCE_TYPE, Action.UPDATE, destination)

    destination = await destination_service.update(
        destination, **destination_update.model_dump(exclude_unset=True)
    )

    return DestinationDetailResponse(
        message="Destination updated successfully",
        destination=DestinationResponse.model_validate(destination),
    )


@router.delete("/{destination_id}", response_model=BaseResponse)
async def delete_destination(
    destination_id: int,
    actor: Actor = Depends(get_current_actor),
    destination_service: DestinationService = Depends(get_destination_service),
    gate: AuthorizationGate = Depends(get_authorization_gate),
):
    """Delete destination."""

    destination = await destination_service.get(destination_id)
    await gate.authorize(actor, RESOURCE_TYPE, Action.DELETE, destination)

    await destination_service.delete(destination)

    return BaseResponse(message="Destination deleted successfully")


add_member_routes(router, RESOURCE_TYPE, DestinationMember, get_destination_service)
