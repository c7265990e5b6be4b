"""
Shared infrastructure for the Neoflix backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- graph: Neo4j driver factory, query executor and type conversion
- clock: Injectable time sources
- exceptions: Base exception classes

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .clock import Clock, FixedClock, SystemClock
from .graph import (
    GraphClient,
    GraphExecutor,
    get_graph_client,
    reset_graph_client,
    to_native,
)
from .exceptions import (
    NeoflixError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ExternalServiceError,
    TransientError,
)
from .models import AuthenticatedUser

__all__ = [
    "Settings",
    "get_settings",
    "Clock",
    "FixedClock",
    "SystemClock",
    "GraphClient",
    "GraphExecutor",
    "get_graph_client",
    "reset_graph_client",
    "to_native",
    "NeoflixError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "ExternalServiceError",
    "TransientError",
    "AuthenticatedUser",
]
