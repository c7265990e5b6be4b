"""
Catalog module.

Decides which genres and movies a user may browse from their unexpired
subscriptions, applies age-gating and paginates genre movie lists.

Public API:
- ICatalogService: Interface for catalog browsing
- GenreSummary, GenreDetail, Movie, MovieOrder: Data models
- Catalog exceptions: SubscriptionRequiredError, GenreNotFoundError, etc.
"""

from .interfaces import ICatalogService
from .models import GenreSummary, GenreDetail, Movie, MovieOrder
from .exceptions import (
    SubscriptionRequiredError,
    GenreNotFoundError,
    InvalidOrderingError,
    InvalidPaginationError,
)

__all__ = [
    # Interface
    "ICatalogService",
    # Models
    "GenreSummary",
    "GenreDetail",
    "Movie",
    "MovieOrder",
    # Exceptions
    "SubscriptionRequiredError",
    "GenreNotFoundError",
    "InvalidOrderingError",
    "InvalidPaginationError",
]
