"""Policy management routes. Superuser only."""

from fastapi import APIRouter, Depends, Query, status

from ingest.dependencies.auth import require_superuser
from ingest.dependencies.services import get_policy_service
from ingest.schemas.common import BaseResponse
from ingest.schemas.policy import (
    PolicyCreate,
    PolicyDetailResponse,
    PolicyListResponse,
    PolicyResponse,
    PolicyUpdate,
)
from ingest.services.policy_service import PolicyService

router = APIRouter(dependencies=[Depends(require_superuser)])


@router.get("/", response_model=PolicyListResponse)
async def list_policies(
    resource_type: list[str] | None = Query(None, description="Resource type tags to match"),
    action: list[str] | None = Query(None, description="Actions to match"),
    policy_service: PolicyService = Depends(get_policy_service),
):
    """List policies, optionally filtered by resource type and action."""

    policies = await policy_service.list_policies(resource_types=resource_type, actions=action)

    return PolicyListResponse(
        message="Policies retrieved successfully",
        policies=[PolicyResponse.model_validate(p) for p in policies],
        total=len(policies),
    )


@router.post("/", response_model=PolicyDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_policy(
    policy_create: PolicyCreate,
    policy_service: PolicyService = Depends(get_policy_service),
):
    """Create policy."""

    policy = await policy_service.create_policy(policy_create.model_dump(exclude_unset=True))

    return PolicyDetailResponse(
        message="Policy created successfully",
        policy=PolicyResponse.model_validate(policy),
    )


@router.get("/{policy_id}", response_model=PolicyDetailResponse)
async def get_policy(
    policy_id: int,
    policy_service: PolicyService = Depends(get_policy_service),
):
    """Get policy by ID."""

    policy = await policy_service.get_policy(policy_id)

    return PolicyDetailResponse(
        message="Policy retrieved successfully",
        policy=PolicyResponse.model_validate(policy),
    )


@router.put("/{policy_id}", response_model=PolicyDetailResponse)
async def update_policy(
    policy_id: int,
    policy_update: PolicyUpdate,
    policy_service: PolicyService = Depends(get_policy_service),
):
    """Update policy. Omitted fields keep their stored value."""

    policy = await policy_service.update_policy(
        policy_id, policy_update.model_dump(exclude_unset=True)
    )

    return PolicyDetailResponse(
        message="Policy updated successfully",
        policy=PolicyResponse.model_validate(policy),
    )


@router.delete("/{policy_id}", response_model=BaseResponse)
async def delete_policy(
    policy_id: int,
    policy_service: PolicyService = Depends(get_policy_service),
):
    """Delete policy."""

    await policy_service.delete_policy(policy_id)

    return BaseResponse(message="Policy deleted successfully")
