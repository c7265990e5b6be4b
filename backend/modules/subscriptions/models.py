"""
Subscriptions module data models.

These models define the data structures used by the subscriptions module
and exposed to other modules through the interface.
"""

import re
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class SubscriptionStatus(str, Enum):
    """Subscription lifecycle states."""

    PENDING = "pending"      # Checkout started, payment not confirmed
    ACTIVE = "active"        # Paid (or granted) and renewing
    CANCELLED = "cancelled"  # No renewal; access honored until expiry


# Statuses whose subscriptions grant access while unexpired
ACCESS_GRANTING_STATUSES = (SubscriptionStatus.ACTIVE, SubscriptionStatus.CANCELLED)

ALLOWED_TRANSITIONS: dict[SubscriptionStatus, frozenset[SubscriptionStatus]] = {
    SubscriptionStatus.PENDING: frozenset({SubscriptionStatus.ACTIVE, SubscriptionStatus.CANCELLED}),
    SubscriptionStatus.ACTIVE: frozenset({SubscriptionStatus.CANCELLED}),
    SubscriptionStatus.CANCELLED: frozenset(),
}


class PlanGenre(BaseModel):
    """A genre granted by a plan."""

    id: int = Field(..., description="Genre ID")
    name: str = Field(..., description="Genre name")


class Plan(BaseModel):
    """
    A purchasable package granting access to a set of genres.

    Plans are seeded out-of-band and are read-only to the API.
    """

    id: int = Field(..., description="Plan ID")
    name: str = Field(..., description="Display name")
    price: Decimal = Field(..., description="Price per period")
    duration_days: int = Field(..., ge=1, description="Validity of one period, in days")
    genres: list[PlanGenre] = Field(default_factory=list, description="Genres granted")

    @property
    def purchasable(self) -> bool:
        return self.price > 0


class Subscription(BaseModel):
    """
    A user's time-bounded purchase of a plan.

    Subscriptions are never deleted. Cancellation flips the status and
    removes ``renews_at`` while keeping ``expires_at``.
    """

    id: str = Field(..., description="Subscription ID (UUID)")
    user_id: str = Field(..., description="Owning user ID")
    plan_id: int = Field(..., description="Target plan ID")
    status: SubscriptionStatus = Field(..., description="Lifecycle status")
    order_id: Optional[str] = Field(None, description="External payment order ID")
    created_at: Optional[datetime] = Field(None, description="Creation time")
    expires_at: datetime = Field(..., description="Access boundary")
    renews_at: Optional[datetime] = Field(None, description="Next renewal, absent once cancelled")
    plan: Optional[Plan] = Field(None, description="Target plan")


class CheckoutRequest(BaseModel):
    """Request to start a checkout for a plan."""

    plan_id: int = Field(..., alias="planId", description="Plan to purchase")
    order_id: str = Field(..., alias="orderId", min_length=1, description="Payment session ID")

    model_config = {"populate_by_name": True}


class VerifyCheckoutRequest(BaseModel):
    """Request to confirm a paid checkout."""

    id: str = Field(..., min_length=1, description="Payment session ID")


_ISO_DAYS = re.compile(r"^P(?:(\d+)Y)?(?:(\d+)M)?(?:(\d+)W)?(?:(\d+)D)?")


def duration_in_days(value: Any) -> int:
    """
    Normalize a stored plan duration to whole days.

    Plans store an integer day count; ISO-8601 durations such as ``P30D``
    or ``P1M`` are accepted too (a month counts as 30 days, a year as 365).
    """
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        if value.isdigit():
            return int(value)
        match = _ISO_DAYS.match(value)
        if match and any(match.groups()):
            years, months, weeks, days = (int(g or 0) for g in match.groups())
            return years * 365 + months * 30 + weeks * 7 + days
    raise ValueError(f"Unsupported plan duration: {value!r}")
