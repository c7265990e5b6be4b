"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field, EmailStr

from modules.subscriptions.models import Subscription


class JWTPayload(BaseModel):
    """
    Decoded access token payload.

    Tokens are issued by this service at registration and login.
    """

    sub: str = Field(..., description="Subject (user ID)")
    email: str = Field(..., description="User's email")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    aud: str = Field(default="authenticated", description="Audience")

    date_of_birth: Optional[date] = Field(None, alias="dateOfBirth")
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")

    model_config = {"populate_by_name": True, "extra": "ignore"}


class UserRecord(BaseModel):
    """
    A stored user, including the password hash.

    Internal to the auth module; never returned to clients.
    """

    id: str
    email: str
    password_hash: str
    date_of_birth: Optional[date] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    created_at: Optional[datetime] = None


class UserProfile(BaseModel):
    """
    Public user profile.

    Includes the user's current subscription when one exists.
    """

    id: str = Field(..., description="User ID (UUID)")
    email: EmailStr = Field(..., description="Email address")
    date_of_birth: Optional[date] = Field(None, description="Date of birth")
    first_name: Optional[str] = Field(None, description="First name")
    last_name: Optional[str] = Field(None, description="Last name")
    subscription: Optional[Subscription] = Field(None, description="Current subscription")

    @classmethod
    def from_record(
        cls,
        record: UserRecord,
        subscription: Optional[Subscription] = None,
    ) -> "UserProfile":
        return cls(
            id=record.id,
            email=record.email,
            date_of_birth=record.date_of_birth,
            first_name=record.first_name,
            last_name=record.last_name,
            subscription=subscription,
        )


class RegisterRequest(BaseModel):
    """Request to create an account."""

    email: EmailStr = Field(..., description="Email address (unique)")
    password: str = Field(..., min_length=8, description="Plain-text password")
    date_of_birth: date = Field(..., alias="dateOfBirth", description="Date of birth")
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")

    model_config = {"populate_by_name": True}


class LoginRequest(BaseModel):
    """Request to sign in."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Issued access token."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Lifetime in seconds")
