"""Account schemas."""

from pydantic import BaseModel, EmailStr, Field

from .common import BaseResponse


class RegisterRequest(BaseModel):
    """Schema for account registration."""

    email: EmailStr = Field(..., description="Account email")
    password: str = Field(..., min_length=1, description="Password")
    name: str | None = Field(None, max_length=255, description="Display name")


class LoginRequest(BaseModel):
    """Schema for password login."""

    email: str = Field(..., description="Account email")
    password: str = Field(..., description="Password")


class UserResponse(BaseModel):
    """Schema for user response."""

    id: int
    email: str
    name: str | None
    is_superuser: bool

    class Config:
        from_attributes = True


class RegisterResponse(BaseResponse):
    user: UserResponse
    backfilled_memberships: int


class TokenResponse(BaseResponse):
    access_token: str
    token_type: str = "bearer"
