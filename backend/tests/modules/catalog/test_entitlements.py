"""Tests for the pure entitlement rules."""

import pytest
from datetime import date, datetime, timedelta, timezone

from modules.catalog.entitlements import (
    Entitlement,
    age_on,
    is_adult,
    qualifying_plan_ids,
    resolve_entitlement,
)

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def grant(plan_id=1, status="active", expires_at=NOW + timedelta(days=1)):
    return {"planId": plan_id, "status": status, "expiresAt": expires_at.isoformat()}


class TestAge:
    def test_age_before_and_on_birthday(self):
        born = date(2006, 6, 2)
        assert age_on(born, date(2024, 6, 1)) == 17
        assert age_on(born, date(2024, 6, 2)) == 18

    def test_leap_day_birthday_turns_over_on_march_first(self):
        born = date(2004, 2, 29)
        assert age_on(born, date(2022, 2, 28)) == 17
        assert age_on(born, date(2022, 3, 1)) == 18

    def test_is_adult_across_birthday_boundary(self):
        born = date(2006, 6, 2)
        eve = datetime(2024, 6, 1, 23, 59, 59, tzinfo=timezone.utc)
        assert is_adult(born, eve) is False
        assert is_adult(born, eve + timedelta(seconds=1)) is True

    def test_unknown_birth_date_is_under_age(self):
        assert is_adult(None, NOW) is False


class TestQualifyingPlans:
    def test_active_unexpired(self):
        assert qualifying_plan_ids([grant(1)], NOW) == (1,)

    def test_expiry_boundary(self):
        assert qualifying_plan_ids([grant(expires_at=NOW)], NOW) == (1,)
        assert qualifying_plan_ids([grant(expires_at=NOW - timedelta(seconds=1))], NOW) == ()

    def test_cancelled_counts_until_expiry(self):
        assert qualifying_plan_ids([grant(status="cancelled")], NOW) == (1,)

    def test_pending_never_counts(self):
        assert qualifying_plan_ids([grant(status="pending")], NOW) == ()

    def test_deduplicates_and_sorts(self):
        grants = [grant(3), grant(1), grant(3), {"planId": None, "status": "active"}]
        assert qualifying_plan_ids(grants, NOW) == (1, 3)

    def test_accepts_datetime_values(self):
        grants = [{"planId": 2, "status": "active", "expiresAt": NOW + timedelta(hours=1)}]
        assert qualifying_plan_ids(grants, NOW) == (2,)


class TestResolveEntitlement:
    def test_entitled_adult(self):
        entitlement = resolve_entitlement("user-1", date(2000, 1, 1), [grant(1)], NOW)
        assert entitlement == Entitlement(user_id="user-1", plan_ids=(1,), include_adult=True)
        assert entitlement.entitled is True

    def test_no_subscriptions(self):
        entitlement = resolve_entitlement("user-1", date(2000, 1, 1), [], NOW)
        assert entitlement.entitled is False
