"""Registration, login and token refresh."""

from fastapi import APIRouter, Depends, status

from moneytree.api.deps import get_auth_service, get_current_user
from moneytree.models.user import User
from moneytree.schemas.auth import Credentials, RefreshRequest, RegisterRequest, TokenPair, UserResponse
from moneytree.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
    description="Create an account and seed its default income and expense categories.",
    responses={409: {"description": "Email already registered"}},
)
async def register(
    data: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    user = await auth_service.register(email=data.email, password=data.password)
    return UserResponse.model_validate(user)


@router.post(
    "/login",
    response_model=TokenPair,
    summary="User login",
    responses={
        401: {"description": "Incorrect email or password"},
        403: {"description": "Account deactivated"},
    },
)
async def login(
    data: Credentials,
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenPair:
    """Exchange email and password for an access/refresh token pair."""
    return await auth_service.login(email=data.email, password=data.password)


@router.post(
    "/refresh",
    response_model=TokenPair,
    summary="Refresh access token",
    responses={401: {"description": "Refresh token invalid or expired"}},
)
async def refresh(
    data: RefreshRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenPair:
    """Issue a fresh token pair. Access tokens are not accepted here."""
    return await auth_service.refresh_tokens(data.refresh_token)


@router.get("/me", response_model=UserResponse, summary="Get current user")
async def get_me(current_user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse.model_validate(current_user)
