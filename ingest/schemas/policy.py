"""Policy schemas."""

from typing import Any

from pydantic import BaseModel, Field, validator

from ingest.models.policy import Action, Matcher, Scope

from .common import BaseResponse, TimestampMixin


class PolicyData(BaseModel):
    """Complete, validated set of policy fields.

    Used by the policy service for both create and merged update payloads.
    """

    name: str = Field(..., min_length=1, max_length=255, description="Human readable label")
    actions: list[Action] = Field(..., min_length=1, description="Actions the policy covers")
    resource_types: list[str] = Field(..., min_length=1, description="Resource type tags")
    attributes: dict[str, Any] = Field(default_factory=dict, description="Attribute conditions")
    matcher: Matcher = Field(..., description="How conditions combine")
    scope: Scope = Field(..., description="Which actors the policy applies to")
    scope_id: int | None = Field(None, description="User or group id for scoped policies")

    @validator("name")
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError("can't be blank")
        return v

    @validator("resource_types")
    def validate_resource_types(cls, v):
        if any(not tag or not tag.strip() for tag in v):
            raise ValueError("resource types can't be blank")
        return v

    @validator("attributes", pre=True)
    def default_attributes(cls, v):
        return {} if v is None else v


class PolicyCreate(BaseModel):
    """Schema for creating a policy."""

    name: str | None = None
    actions: list[str] | None = None
    resource_types: list[str] | None = None
    attributes: dict[str, Any] | None = None
    matcher: str | None = None
    scope: str | None = None
    scope_id: int | None = None


class PolicyUpdate(PolicyCreate):
    """Schema for updating a policy. Omitted fields keep their stored value."""


class PolicyResponse(TimestampMixin):
    """Schema for policy response."""

    id: int
    name: str
    actions: list[str]
    resource_types: list[str]
    attributes: dict[str, Any]
    matcher: str
    scope: str
    scope_id: int | None

    class Config:
        from_attributes = True


class PolicyDetailResponse(BaseResponse):
    """Schema for policy detail response."""

    policy: PolicyResponse


class PolicyListResponse(BaseResponse):
    """Schema for policy list response."""

    policies: list[PolicyResponse]
    total: int
