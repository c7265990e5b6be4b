"""
Subscription lifecycle service.

Creates subscriptions, promotes them on payment confirmation and cancels
them. Every multi-step change runs in one graph transaction.
"""

import logging
from datetime import timedelta
from typing import Any, Optional

from shared.clock import Clock, SystemClock
from shared.exceptions import ConflictError
from shared.graph import GraphExecutor

from .interfaces import ISubscriptionService
from .models import (
    ACCESS_GRANTING_STATUSES,
    ALLOWED_TRANSITIONS,
    Plan,
    Subscription,
    SubscriptionStatus,
)
from .exceptions import (
    InvalidDurationError,
    InvalidStatusTransitionError,
    OrderNotFoundError,
    PlanNotFoundError,
    PlanNotPurchasableError,
    SubscriptionNotFoundError,
    UserNotFoundError,
)
from .repository import SubscriptionRepository

logger = logging.getLogger(__name__)


class SubscriptionService(ISubscriptionService):
    """
    Subscription service backed by the graph database.

    A user holds at most one active subscription: activating one cancels
    the user's other active ones. Pending checkouts are never superseded,
    so any of them may still be confirmed. Cancelled subscriptions keep
    granting access until they expire.
    """

    def __init__(
        self,
        graph: GraphExecutor,
        clock: Optional[Clock] = None,
        repository: Optional[SubscriptionRepository] = None,
    ):
        self._graph = graph
        self._clock = clock or SystemClock()
        self._repository = repository or SubscriptionRepository(graph)

    async def create_subscription(
        self,
        user_id: str,
        plan_id: int,
        override_days: Optional[int] = None,
        status: SubscriptionStatus = SubscriptionStatus.ACTIVE,
        order_id: Optional[str] = None,
        tx: Optional[Any] = None,
    ) -> Subscription:
        """Create a subscription, joining ``tx`` when the caller has one open."""
        if override_days is not None and override_days <= 0:
            raise InvalidDurationError(override_days)

        if tx is not None:
            return self._create(user_id, plan_id, override_days, status, order_id, tx)

        with self._graph.transaction() as own_tx:
            return self._create(user_id, plan_id, override_days, status, order_id, own_tx)

    def _create(
        self,
        user_id: str,
        plan_id: int,
        override_days: Optional[int],
        status: SubscriptionStatus,
        order_id: Optional[str],
        tx: Any,
    ) -> Subscription:
        if not self._repository.user_exists(user_id, tx):
            raise UserNotFoundError()

        plan = self._repository.get_plan(plan_id, tx)
        if plan is None:
            raise PlanNotFoundError()

        now = self._clock.now()
        days = override_days if override_days is not None else plan.duration_days

        subscription = self._repository.create(
            user_id=user_id,
            plan_id=plan.id,
            status=status,
            created_at=now,
            expires_at=now + timedelta(days=days),
            order_id=order_id,
            tx=tx,
        )

        if status == SubscriptionStatus.ACTIVE:
            superseded = self._repository.supersede(user_id, subscription.id, [status], now, tx)
            if superseded:
                logger.info(f"Superseded {superseded} active subscription(s) for user {user_id}")

        logger.info(
            f"Created {status.value} subscription {subscription.id} "
            f"for user {user_id} on plan {plan.id} ({days} days)"
        )
        return subscription

    async def set_status_by_order(
        self,
        order_id: str,
        status: SubscriptionStatus,
    ) -> Subscription:
        """Apply a status change to the subscription created for an order."""
        with self._graph.transaction() as tx:
            subscription = self._repository.find_by_order(order_id, tx)
            if subscription is None:
                raise OrderNotFoundError()

            if subscription.status == status:
                logger.debug(f"Order {order_id} already {status.value}; nothing to do")
                return subscription

            if status not in ALLOWED_TRANSITIONS[subscription.status]:
                raise InvalidStatusTransitionError(subscription.status.value, status.value)

            now = self._clock.now()

            if status == SubscriptionStatus.ACTIVE:
                plan = subscription.plan or self._repository.get_plan(subscription.plan_id, tx)
                if plan is None:
                    raise PlanNotFoundError()

                # Validity runs from confirmation, not from checkout
                subscription = self._repository.activate(
                    subscription.id,
                    activated_at=now,
                    expires_at=now + timedelta(days=plan.duration_days),
                    tx=tx,
                )
                superseded = self._repository.supersede(
                    subscription.user_id,
                    subscription.id,
                    [SubscriptionStatus.ACTIVE],
                    now,
                    tx,
                )
                logger.info(
                    f"Activated subscription {subscription.id} for order {order_id}"
                    + (f", superseding {superseded}" if superseded else "")
                )
            else:
                subscription = self._repository.cancel(subscription.id, now, tx)
                logger.info(f"Cancelled subscription {subscription.id} for order {order_id}")

            return subscription

    async def cancel_subscription(
        self,
        subscription_id: str,
        user_id: Optional[str] = None,
    ) -> Subscription:
        """Cancel one subscription, identified strictly by its ID."""
        with self._graph.transaction() as tx:
            subscription = self._repository.find_by_id(subscription_id, tx)

            if subscription is None:
                raise SubscriptionNotFoundError()
            if user_id is not None and subscription.user_id != user_id:
                raise SubscriptionNotFoundError()

            if subscription.status == SubscriptionStatus.CANCELLED:
                return subscription

            subscription = self._repository.cancel(subscription.id, self._clock.now(), tx)

        logger.info(f"Cancelled subscription {subscription_id}")
        return subscription

    async def get_current_subscription(self, user_id: str) -> Optional[Subscription]:
        """Get the user's current subscription."""
        return self._repository.find_current(
            user_id,
            self._clock.now(),
            ACCESS_GRANTING_STATUSES,
        )

    async def list_plans(self) -> list[Plan]:
        """List purchasable plans."""
        return self._repository.list_plans()

    async def get_plan(self, plan_id: int) -> Plan:
        """Get a plan by ID."""
        plan = self._repository.get_plan(plan_id)
        if plan is None:
            raise PlanNotFoundError()
        return plan

    async def start_checkout(
        self,
        user_id: str,
        plan_id: int,
        order_id: str,
    ) -> Subscription:
        """Record a pending subscription for a payment order."""
        existing = self._repository.find_by_order(order_id)
        if existing is not None:
            if existing.user_id != user_id:
                raise ConflictError("orderId")
            return existing

        plan = await self.get_plan(plan_id)
        if not plan.purchasable:
            raise PlanNotPurchasableError(plan_id)

        return await self.create_subscription(
            user_id,
            plan.id,
            status=SubscriptionStatus.PENDING,
            order_id=order_id,
        )

    async def confirm_checkout(self, order_id: str) -> Subscription:
        """Promote the order's subscription to active."""
        return await self.set_status_by_order(order_id, SubscriptionStatus.ACTIVE)

