"""
Subscriptions module interface.

Other modules should depend on ISubscriptionService, not the concrete
implementation. The auth module uses it to grant the free trial at
registration; the HTTP layer uses it for plans and checkout.
"""

from typing import Any, Protocol, Optional, runtime_checkable

from .models import Plan, Subscription, SubscriptionStatus


@runtime_checkable
class ISubscriptionService(Protocol):
    """
    Interface for the subscription lifecycle.

    This is the only component that creates subscription records or
    changes their status.
    """

    async def create_subscription(
        self,
        user_id: str,
        plan_id: int,
        override_days: Optional[int] = None,
        status: SubscriptionStatus = SubscriptionStatus.ACTIVE,
        order_id: Optional[str] = None,
        tx: Optional[Any] = None,
    ) -> Subscription:
        """
        Create a subscription for a user.

        ``expires_at`` and ``renews_at`` are set to now plus
        ``override_days`` when given, otherwise now plus the plan duration.

        Args:
            user_id: Owning user ID
            plan_id: Target plan ID
            override_days: Optional explicit validity (e.g. a free trial)
            status: Initial status (pending for checkout, active otherwise)
            order_id: External payment order ID, if any
            tx: Open transaction to join; a new one is used when omitted

        Returns:
            The created Subscription

        Raises:
            UserNotFoundError: If the user doesn't exist
            PlanNotFoundError: If the plan doesn't exist
            InvalidDurationError: If override_days is not positive
        """
        ...

    async def set_status_by_order(
        self,
        order_id: str,
        status: SubscriptionStatus,
    ) -> Subscription:
        """
        Change the status of the subscription created for a payment order.

        Promoting to active refreshes the validity window from the
        confirmation instant. Requesting the current status is a no-op,
        so repeated deliveries of the same confirmation are safe.

        Raises:
            OrderNotFoundError: If no subscription carries the order ID
            InvalidStatusTransitionError: If the lifecycle forbids the change
        """
        ...

    async def cancel_subscription(
        self,
        subscription_id: str,
        user_id: Optional[str] = None,
    ) -> Subscription:
        """
        Cancel a subscription by identity.

        Removes ``renews_at`` but keeps ``expires_at``, so access continues
        until natural expiry.

        Args:
            subscription_id: Subscription to cancel
            user_id: When given, the subscription must belong to this user

        Raises:
            SubscriptionNotFoundError: If absent or owned by another user
        """
        ...

    async def get_current_subscription(self, user_id: str) -> Optional[Subscription]:
        """
        Get the user's current subscription.

        The current subscription is the unexpired, access-granting one
        that expires last. Returns None if there is none.
        """
        ...

    async def list_plans(self) -> list[Plan]:
        """List purchasable plans, cheapest first, with their genres."""
        ...

    async def get_plan(self, plan_id: int) -> Plan:
        """
        Get a plan by ID.

        Raises:
            PlanNotFoundError: If the plan doesn't exist
        """
        ...

    async def start_checkout(
        self,
        user_id: str,
        plan_id: int,
        order_id: str,
    ) -> Subscription:
        """
        Record a pending subscription for a payment order.

        Raises:
            PlanNotFoundError: If the plan doesn't exist
            PlanNotPurchasableError: If the plan is free
            ConflictError: If the order ID already belongs to another user
        """
        ...

    async def confirm_checkout(self, order_id: str) -> Subscription:
        """Promote the order's subscription to active (idempotent)."""
        ...
