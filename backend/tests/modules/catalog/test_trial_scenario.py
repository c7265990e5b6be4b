"""
End-to-end entitlement scenarios across the lifecycle and catalog services.

Both services share one clock and one in-memory subscription store, so the
subscriptions written by the lifecycle service are exactly what the
catalog service reads back.
"""

import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import MagicMock

from shared.clock import FixedClock
from modules.catalog.exceptions import SubscriptionRequiredError
from modules.catalog.models import GenreSummary
from modules.catalog.repository import CatalogRepository
from modules.catalog.service import CatalogService
from modules.subscriptions.models import Plan, Subscription, SubscriptionStatus
from modules.subscriptions.repository import SubscriptionRepository
from modules.subscriptions.service import SubscriptionService

REGISTERED_AT = datetime(2024, 3, 10, 9, 30, tzinfo=timezone.utc)

FREE = Plan(id=0, name="Free Trial", price=Decimal("0"), duration_days=30)
BASIC = Plan(id=1, name="Basic", price=Decimal("9.99"), duration_days=30)
PREMIUM = Plan(id=2, name="Premium", price=Decimal("14.99"), duration_days=30)
PLANS = {plan.id: plan for plan in (FREE, BASIC, PREMIUM)}


class SubscriptionStore:
    """Keeps the subscriptions written through the repository mock."""

    def __init__(self) -> None:
        self.subscriptions: dict[str, Subscription] = {}

    def create(self, user_id, plan_id, status, created_at, expires_at, order_id=None, tx=None):
        subscription = Subscription(
            id=f"sub-{len(self.subscriptions) + 1}",
            user_id=user_id,
            plan_id=plan_id,
            status=status,
            order_id=order_id,
            created_at=created_at,
            expires_at=expires_at,
            renews_at=expires_at,
        )
        self.subscriptions[subscription.id] = subscription
        return subscription

    def cancel(self, subscription_id, cancelled_at, tx=None):
        subscription = self.subscriptions[subscription_id].model_copy(
            update={"status": SubscriptionStatus.CANCELLED, "renews_at": None}
        )
        self.subscriptions[subscription_id] = subscription
        return subscription

    def find_by_id(self, subscription_id, tx=None):
        return self.subscriptions.get(subscription_id)

    def find_by_order(self, order_id, tx=None):
        for subscription in self.subscriptions.values():
            if subscription.order_id == order_id:
                return subscription
        return None

    def activate(self, subscription_id, activated_at, expires_at, tx=None):
        subscription = self.subscriptions[subscription_id].model_copy(
            update={
                "status": SubscriptionStatus.ACTIVE,
                "expires_at": expires_at,
                "renews_at": expires_at,
            }
        )
        self.subscriptions[subscription_id] = subscription
        return subscription

    def supersede(self, user_id, keep_id, statuses, cancelled_at, tx=None):
        superseded = [
            s.id for s in self.subscriptions.values()
            if s.user_id == user_id and s.status in statuses and s.id != keep_id
        ]
        for subscription_id in superseded:
            self.cancel(subscription_id, cancelled_at)
        return len(superseded)

    def entitlement_basis(self, user_id, tx=None):
        return {
            "dateOfBirth": "2000-01-01",
            "subscriptions": [
                {
                    "planId": s.plan_id,
                    "status": s.status.value,
                    "expiresAt": s.expires_at.isoformat(),
                }
                for s in self.subscriptions.values()
                if s.user_id == user_id
            ],
        }


@pytest.fixture
def clock():
    return FixedClock(REGISTERED_AT)


@pytest.fixture
def store():
    return SubscriptionStore()


@pytest.fixture
def subscriptions(fake_graph, clock, store):
    repository = MagicMock(spec=SubscriptionRepository)
    repository.user_exists.return_value = True
    repository.get_plan.side_effect = lambda plan_id, tx=None: PLANS.get(plan_id)
    repository.create.side_effect = store.create
    repository.cancel.side_effect = store.cancel
    repository.find_by_id.side_effect = store.find_by_id
    repository.find_by_order.side_effect = store.find_by_order
    repository.activate.side_effect = store.activate
    repository.supersede.side_effect = store.supersede
    return SubscriptionService(fake_graph, clock=clock, repository=repository)


@pytest.fixture
def catalog(fake_graph, clock, store):
    repository = MagicMock(spec=CatalogRepository)
    repository.get_entitlement_basis.side_effect = store.entitlement_basis
    repository.list_genres.side_effect = lambda plan_ids, tx=None: [
        GenreSummary(id=plan_id, name=f"Genre {plan_id}") for plan_id in plan_ids
    ]
    return CatalogService(fake_graph, clock=clock, repository=repository)


class TestFreeTrial:
    @pytest.mark.asyncio
    async def test_seven_day_trial_expires_to_the_second(self, subscriptions, catalog, clock):
        await subscriptions.create_subscription("user-1", 0, override_days=7)

        clock.set(REGISTERED_AT + timedelta(days=7) - timedelta(seconds=1))
        genres = await catalog.resolve_genres_for_user("user-1")
        assert [g.id for g in genres] == [0]

        clock.set(REGISTERED_AT + timedelta(days=7) + timedelta(seconds=1))
        with pytest.raises(SubscriptionRequiredError):
            await catalog.resolve_genres_for_user("user-1")

    @pytest.mark.asyncio
    async def test_override_ignores_plan_duration(self, subscriptions):
        subscription = await subscriptions.create_subscription("user-1", 0, override_days=7)
        assert subscription.expires_at == REGISTERED_AT + timedelta(days=7)


class TestCancellation:
    @pytest.mark.asyncio
    async def test_access_continues_until_expiry(self, subscriptions, catalog, clock):
        created = await subscriptions.create_subscription("user-1", 0, override_days=7)

        clock.advance(timedelta(days=1))
        cancelled = await subscriptions.cancel_subscription(created.id, user_id="user-1")

        assert cancelled.status == SubscriptionStatus.CANCELLED
        assert cancelled.renews_at is None
        assert cancelled.expires_at == created.expires_at

        clock.set(created.expires_at)
        assert await catalog.resolve_genres_for_user("user-1")

        clock.advance(timedelta(seconds=1))
        with pytest.raises(SubscriptionRequiredError):
            await catalog.resolve_genres_for_user("user-1")


class TestCheckoutConfirmation:
    @pytest.mark.asyncio
    async def test_earlier_paid_order_is_honoured_after_a_second_checkout(
        self, subscriptions, catalog, store
    ):
        first = await subscriptions.start_checkout("user-1", 1, "cs_a")
        second = await subscriptions.start_checkout("user-1", 2, "cs_b")

        assert store.find_by_id(first.id).status == SubscriptionStatus.PENDING
        assert store.find_by_id(second.id).status == SubscriptionStatus.PENDING

        confirmed = await subscriptions.confirm_checkout("cs_a")

        assert confirmed.id == first.id
        assert confirmed.status == SubscriptionStatus.ACTIVE
        assert store.find_by_id(second.id).status == SubscriptionStatus.PENDING
        genres = await catalog.resolve_genres_for_user("user-1")
        assert [g.id for g in genres] == [1]

    @pytest.mark.asyncio
    async def test_later_confirmation_supersedes_the_active_one(self, subscriptions, catalog, store):
        first = await subscriptions.start_checkout("user-1", 1, "cs_a")
        second = await subscriptions.start_checkout("user-1", 2, "cs_b")

        await subscriptions.confirm_checkout("cs_a")
        await subscriptions.confirm_checkout("cs_b")

        assert store.find_by_id(first.id).status == SubscriptionStatus.CANCELLED
        assert store.find_by_id(second.id).status == SubscriptionStatus.ACTIVE
        active = [
            s for s in store.subscriptions.values()
            if s.status == SubscriptionStatus.ACTIVE
        ]
        assert [s.id for s in active] == [second.id]

    @pytest.mark.asyncio
    async def test_repeated_confirmation_keeps_expiry(self, subscriptions, clock):
        await subscriptions.start_checkout("user-1", 1, "cs_a")

        once = await subscriptions.confirm_checkout("cs_a")
        clock.advance(timedelta(hours=1))
        twice = await subscriptions.confirm_checkout("cs_a")

        assert twice.expires_at == once.expires_at
