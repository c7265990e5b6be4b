"""
Subscriptions module exceptions.

These exceptions are raised by the subscriptions module and can be caught
by API error handlers to return appropriate HTTP responses.
Not-found errors carry no identifiers.
"""

from shared.exceptions import NotFoundError, ValidationError


class UserNotFoundError(NotFoundError):
    """Raised when the subscribing user does not exist."""

    def __init__(self):
        super().__init__("User not found", code="USER_NOT_FOUND")


class PlanNotFoundError(NotFoundError):
    """Raised when a plan does not exist."""

    def __init__(self):
        super().__init__("Plan not found", code="PLAN_NOT_FOUND")


class SubscriptionNotFoundError(NotFoundError):
    """Raised when a subscription does not exist or belongs to someone else."""

    def __init__(self):
        super().__init__("Subscription not found", code="SUBSCRIPTION_NOT_FOUND")


class OrderNotFoundError(NotFoundError):
    """Raised when no subscription carries the given payment order ID."""

    def __init__(self):
        super().__init__("Order not found", code="ORDER_NOT_FOUND")


class InvalidStatusTransitionError(ValidationError):
    """Raised when a status change is not permitted by the lifecycle."""

    def __init__(self, current: str, requested: str):
        super().__init__(
            f"Cannot change subscription status from {current} to {requested}",
            code="INVALID_STATUS_TRANSITION",
            details={"current": current, "requested": requested},
        )


class InvalidDurationError(ValidationError):
    """Raised when an override duration is not a positive number of days."""

    def __init__(self, days: int):
        super().__init__(
            f"Invalid subscription duration: {days} days",
            code="INVALID_DURATION",
            details={"days": days},
        )


class PlanNotPurchasableError(ValidationError):
    """Raised when checking out a plan that is not for sale (e.g. the free tier)."""

    def __init__(self, plan_id: int):
        super().__init__(
            f"Plan is not purchasable: {plan_id}",
            code="PLAN_NOT_PURCHASABLE",
            details={"plan_id": plan_id},
        )
