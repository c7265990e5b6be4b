"""
Authentication API endpoints.

Registration and login both answer with a bearer token.
"""

from fastapi import APIRouter, Depends

from api.middleware.auth import get_current_user
from api.dependencies import get_auth_service
from shared.models import AuthenticatedUser

from .interfaces import IAuthService
from .models import LoginRequest, RegisterRequest, TokenResponse, UserProfile

router = APIRouter()


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(
    request: RegisterRequest,
    service: IAuthService = Depends(get_auth_service),
) -> TokenResponse:
    """
    Create an account.

    New accounts start with a free trial subscription.
    """
    profile = await service.register(request)
    return service.create_token(profile)


@router.post("/login", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    service: IAuthService = Depends(get_auth_service),
) -> TokenResponse:
    profile = await service.authenticate(request)
    return service.create_token(profile)


@router.get("/user", response_model=UserProfile)
async def get_user(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> UserProfile:
    """Get the caller's profile and current subscription."""
    return await service.get_profile(user.id)
