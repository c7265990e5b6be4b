"""
Catalog module exceptions.

Entitlement failures deliberately carry no identifiers: a genre outside
the user's plan is reported exactly like a genre that does not exist.
"""

from shared.exceptions import (
    NotFoundError,
    ValidationError,
    AuthorizationError,
)


class SubscriptionRequiredError(AuthorizationError):
    """Raised when the user holds no unexpired, access-granting subscription."""

    def __init__(self):
        super().__init__(
            "An active subscription is required",
            code="SUBSCRIPTION_REQUIRED",
        )


class GenreNotFoundError(NotFoundError):
    """Raised when a genre does not exist or is not covered by the user's plan."""

    def __init__(self):
        super().__init__("Genre not found", code="GENRE_NOT_FOUND")


class InvalidOrderingError(ValidationError):
    """Raised when a movie list is requested with an unsupported ordering."""

    def __init__(self, order_by: str, allowed: list[str]):
        super().__init__(
            f"Unsupported ordering: {order_by}",
            code="INVALID_ORDERING",
            details={"order_by": order_by, "allowed": allowed},
        )


class InvalidPaginationError(ValidationError):
    """Raised when page or limit is out of range."""

    def __init__(self, field: str, value: int, reason: str):
        super().__init__(
            f"Invalid {field}: {value}. {reason}",
            code="INVALID_PAGINATION",
            details={"field": field, "value": value, "reason": reason},
        )
