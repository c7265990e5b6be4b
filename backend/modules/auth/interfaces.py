"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with mocks.
"""

from typing import Protocol, runtime_checkable

from shared.models import AuthenticatedUser
from .models import LoginRequest, RegisterRequest, TokenResponse, UserProfile


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for account and token operations.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    async def register(self, request: RegisterRequest) -> UserProfile:
        """
        Create an account together with its free trial subscription.

        Both records are written in one transaction: if either fails,
        neither is persisted.

        Raises:
            EmailAlreadyRegisteredError: If the email is taken
            UnderageRegistrationError: If the registrant is too young
            PlanNotFoundError: If the free trial plan is not seeded
        """
        ...

    async def authenticate(self, request: LoginRequest) -> UserProfile:
        """
        Check an email/password pair.

        Raises:
            InvalidCredentialsError: If the pair does not match
        """
        ...

    def create_token(self, user: UserProfile) -> TokenResponse:
        """Issue an access token for a user."""
        ...

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated user.

        Raises:
            AuthenticationError: If token is missing, invalid or expired
        """
        ...

    async def get_profile(self, user_id: str) -> UserProfile:
        """
        Get a user's public profile with their current subscription.

        Raises:
            UserNotFoundError: If the user doesn't exist
        """
        ...
