"""
Authentication module.

Handles registration, password login and access tokens.

Public API:
- IAuthService: Interface for auth operations
- UserProfile: Public user profile
- RegisterRequest, LoginRequest, TokenResponse: Request/response models
- Auth exceptions: InvalidTokenError, InvalidCredentialsError, etc.
"""

from .interfaces import IAuthService
from .models import (
    JWTPayload,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserProfile,
)
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    InvalidCredentialsError,
    EmailAlreadyRegisteredError,
    UnderageRegistrationError,
)

__all__ = [
    # Interface
    "IAuthService",
    # Models
    "JWTPayload",
    "LoginRequest",
    "RegisterRequest",
    "TokenResponse",
    "UserProfile",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "InvalidCredentialsError",
    "EmailAlreadyRegisteredError",
    "UnderageRegistrationError",
]
