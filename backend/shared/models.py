"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    This model is populated from JWT claims and passed explicitly to
    route handlers via dependency injection. There is no process-wide
    "current user"; every request carries its own instance.
    """

    id: str = Field(..., description="User ID (UUID)")
    email: EmailStr = Field(..., description="User's email address")
    date_of_birth: Optional[date] = Field(None, description="Date of birth")
    first_name: Optional[str] = Field(None, description="First name")
    last_name: Optional[str] = Field(None, description="Last name")

    last_sign_in: Optional[datetime] = Field(None, description="Token issue time")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Ignore extra fields from JWT
    }
