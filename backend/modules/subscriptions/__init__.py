"""
Subscriptions module.

Owns the subscription lifecycle (create, confirm, cancel) and the plan
catalog.

Public API:
- ISubscriptionService: Interface for lifecycle operations
- Subscription, Plan, SubscriptionStatus: Data models
- Subscription exceptions: PlanNotFoundError, OrderNotFoundError, etc.
"""

from .interfaces import ISubscriptionService
from .models import (
    ACCESS_GRANTING_STATUSES,
    Plan,
    PlanGenre,
    Subscription,
    SubscriptionStatus,
)
from .exceptions import (
    UserNotFoundError,
    PlanNotFoundError,
    SubscriptionNotFoundError,
    OrderNotFoundError,
    InvalidStatusTransitionError,
    InvalidDurationError,
    PlanNotPurchasableError,
)

__all__ = [
    # Interface
    "ISubscriptionService",
    # Models
    "ACCESS_GRANTING_STATUSES",
    "Plan",
    "PlanGenre",
    "Subscription",
    "SubscriptionStatus",
    # Exceptions
    "UserNotFoundError",
    "PlanNotFoundError",
    "SubscriptionNotFoundError",
    "OrderNotFoundError",
    "InvalidStatusTransitionError",
    "InvalidDurationError",
    "PlanNotPurchasableError",
]
