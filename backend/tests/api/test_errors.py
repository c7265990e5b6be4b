"""Tests for the application error handler's status mapping."""

import pytest

from api.middleware.errors import status_code_for
from shared.exceptions import (
    NeoflixError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ExternalServiceError,
    TransientError,
)


@pytest.mark.parametrize(
    "error,expected",
    [
        (AuthenticationError("bad token"), 401),
        (AuthorizationError("no plan"), 403),
        (NotFoundError("missing"), 404),
        (ConflictError("email"), 409),
        (ValidationError("bad input"), 422),
        (ExternalServiceError("down", service="neo4j"), 503),
        (TransientError("neo4j"), 503),
        (NeoflixError("unexpected"), 500),
    ],
)
def test_status_code_for(error, expected):
    assert status_code_for(error) == expected
