"""Account registration and login routes."""

from fastapi import APIRouter, Depends, status

from ingest.dependencies.auth import get_current_user
from ingest.dependencies.services import get_account_service
from ingest.models.user import User
from ingest.schemas.account import (
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    UserResponse,
)
from ingest.services.account_service import AccountService
from ingest.services.jwt_service import JWTService

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    account_service: AccountService = Depends(get_account_service),
):
    """Register a new account. Pending invites to the email are bound to it."""

    user, backfilled = await account_service.register_user(
        email=request.email,
        password=request.password,
        name=request.name,
    )

    return RegisterResponse(
        message="Account registered successfully",
        user=UserResponse.model_validate(user),
        backfilled_memberships=backfilled,
    )


@router.post("/login", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    account_service: AccountService = Depends(get_account_service),
):
    """Exchange credentials for an access token."""

    user = await account_service.authenticate(request.email, request.password)
    token = JWTService().create_access_token(user_id=user.id, email=user.email)

    return TokenResponse(message="Login successful", access_token=token)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get the current user."""
    return UserResponse.model_validate(current_user)
