"""
Time sources.

Services never read the wall clock directly; they receive a Clock so that
expiry and age comparisons are deterministic under test.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Provides the current instant as a timezone-aware UTC datetime."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Clock backed by the system time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """
    Clock frozen at a given instant.

    Used by tests and scripts that need to move time explicitly.
    """

    def __init__(self, instant: Optional[datetime] = None):
        self._instant = _as_utc(instant or datetime.now(timezone.utc))

    def now(self) -> datetime:
        return self._instant

    def set(self, instant: datetime) -> None:
        self._instant = _as_utc(instant)

    def advance(self, delta: timedelta) -> datetime:
        self._instant = self._instant + delta
        return self._instant


def _as_utc(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def parse_date(value: Any) -> Optional[date]:
    """Read a stored calendar date (a date, or an ISO date/datetime string)."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def parse_datetime(value: Any) -> Optional[datetime]:
    """Read a stored instant (a datetime or an ISO string) as UTC."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return _as_utc(value)
    return _as_utc(datetime.fromisoformat(str(value).replace("Z", "+00:00")))
