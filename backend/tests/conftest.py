"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from collections import deque
from contextlib import contextmanager
from datetime import datetime, timezone, timedelta
from typing import Any, Optional
import jwt  # PyJWT

from shared.clock import FixedClock
from shared.config import Settings


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"
TEST_WEBHOOK_SECRET = "test-webhook-secret"

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeTransaction:
    """Stand-in for a driver transaction handle."""

    def __init__(self) -> None:
        self.committed = False
        self.rolled_back = False


class FakeGraph:
    """
    Recording graph executor.

    Queued responses are returned in call order; calls with no queued
    response return no rows. Every call is recorded as
    ``(mode, query, parameters, tx)``.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, dict[str, Any], Any]] = []
        self.responses: deque = deque()
        self.transactions: list[FakeTransaction] = []

    def queue(self, *responses: list[dict[str, Any]]) -> None:
        self.responses.extend(responses)

    def read(self, query: str, parameters: Optional[dict[str, Any]] = None, tx: Any = None):
        return self._respond("read", query, parameters, tx)

    def write(self, query: str, parameters: Optional[dict[str, Any]] = None, tx: Any = None):
        return self._respond("write", query, parameters, tx)

    @contextmanager
    def transaction(self):
        tx = FakeTransaction()
        self.transactions.append(tx)
        try:
            yield tx
        except BaseException:
            tx.rolled_back = True
            raise
        else:
            tx.committed = True

    def verify_connectivity(self) -> bool:
        return True

    def _respond(self, mode: str, query: str, parameters: Optional[dict[str, Any]], tx: Any):
        self.calls.append((mode, query, parameters or {}, tx))
        if self.responses:
            return self.responses.popleft()
        return []

    @property
    def queries(self) -> list[str]:
        return [query for _, query, _, _ in self.calls]


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
    secret: str = TEST_JWT_SECRET,
    audience: str = "authenticated",
) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        secret: Signing secret
        audience: Audience claim

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "dateOfBirth": "2000-01-01",
        "aud": audience,
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def fake_graph() -> FakeGraph:
    """Provide an empty recording graph executor."""
    return FakeGraph()


@pytest.fixture
def clock() -> FixedClock:
    """Provide a clock frozen at NOW."""
    return FixedClock(NOW)


@pytest.fixture
def settings() -> Settings:
    """Settings with known secrets and no environment influence."""
    return Settings(
        _env_file=None,
        jwt_secret=TEST_JWT_SECRET,
        payment_webhook_secret=TEST_WEBHOOK_SECRET,
    )


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "test@example.com"


@pytest.fixture
def auth_token(test_user_id: str, test_user_email: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id, email=test_user_email)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
