"""
Entitlement rules.

Pure functions deciding what a user may see, kept apart from the queries
so the time-dependent parts can be exercised with any instant.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Iterable, Optional

from shared.clock import parse_datetime
from modules.subscriptions.models import ACCESS_GRANTING_STATUSES

ADULT_AGE = 18


@dataclass(frozen=True)
class Entitlement:
    """What a user may browse at a given instant."""

    user_id: str
    plan_ids: tuple[int, ...] = field(default_factory=tuple)
    include_adult: bool = False

    @property
    def entitled(self) -> bool:
        return bool(self.plan_ids)


def age_on(date_of_birth: date, today: date) -> int:
    """Age in completed years on ``today``."""
    years = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        years -= 1
    return years


def is_adult(date_of_birth: Optional[date], now: datetime) -> bool:
    """
    Whether someone born on ``date_of_birth`` is 18 or over at ``now``.

    An unknown date of birth is treated as under age.
    """
    if date_of_birth is None:
        return False
    return age_on(date_of_birth, now.date()) >= ADULT_AGE


def qualifying_plan_ids(subscriptions: Iterable[dict[str, Any]], now: datetime) -> tuple[int, ...]:
    """
    Plans reached through subscriptions that grant access at ``now``.

    Each subscription is a mapping with ``planId``, ``status`` and
    ``expiresAt``. A subscription qualifies while its status grants access
    and ``expiresAt >= now``. The result is sorted and free of duplicates.
    """
    plan_ids = set()
    for subscription in subscriptions:
        if subscription.get("planId") is None:
            continue
        if subscription.get("status") not in {s.value for s in ACCESS_GRANTING_STATUSES}:
            continue
        expires_at = parse_datetime(subscription.get("expiresAt"))
        if expires_at is None or expires_at < now:
            continue
        plan_ids.add(subscription["planId"])
    return tuple(sorted(plan_ids))


def resolve_entitlement(
    user_id: str,
    date_of_birth: Optional[date],
    subscriptions: Iterable[dict[str, Any]],
    now: datetime,
) -> Entitlement:
    """Combine plan reach and age-gating into one Entitlement."""
    return Entitlement(
        user_id=user_id,
        plan_ids=qualifying_plan_ids(subscriptions, now),
        include_adult=is_adult(date_of_birth, now),
    )
