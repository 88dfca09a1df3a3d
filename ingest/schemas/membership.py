"""Membership schemas."""

from pydantic import BaseModel, EmailStr, Field

from ingest.models.membership import MemberRole, MemberStatus

from .common import BaseResponse, TimestampMixin


class MemberInviteRequest(BaseModel):
    """Schema for inviting an email to a resource."""

    email: EmailStr = Field(..., description="Email to invite")
    role: MemberRole = Field(MemberRole.UPLOADER, description="Role to assign")


class MemberRoleUpdateRequest(BaseModel):
    """Schema for updating member role."""

    role: MemberRole = Field(..., description="New role")


class MemberStatusUpdateRequest(BaseModel):
    """Schema for updating member status."""

    status: MemberStatus = Field(..., description="New status")


class MembershipResponse(TimestampMixin):
    """Schema for membership response."""

    id: int
    resource_id: int
    user_id: int | None
    email: str | None
    role: str
    status: str

    class Config:
        from_attributes = True


class MembershipDetailResponse(BaseResponse):
    membership: MembershipResponse


class MemberListResponse(BaseResponse):
    members: list[MembershipResponse]
    total: int


class MemberUpdatedResponse(BaseResponse):
    updated: int


class MemberRemovedResponse(BaseResponse):
    removed: int
