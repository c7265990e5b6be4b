"""
Catalog module interface.

The HTTP layer depends on ICatalogService, not the concrete implementation.
"""

from typing import Protocol, runtime_checkable

from .models import GenreDetail, GenreSummary, Movie


@runtime_checkable
class ICatalogService(Protocol):
    """
    Interface for entitlement-scoped catalog browsing.

    Access is granted transitively: user -> unexpired subscription ->
    plan -> genre. Adult-flagged movies are only returned to users aged
    18 or over at query time.
    """

    async def resolve_genres_for_user(self, user_id: str) -> list[GenreSummary]:
        """
        List the genres the user may browse, by name.

        Raises:
            SubscriptionRequiredError: If the user has no qualifying subscription
        """
        ...

    async def resolve_genre_detail(self, user_id: str, genre_id: int) -> GenreDetail:
        """
        Get a genre with its curated "latest" and "popular" movie lists.

        Raises:
            SubscriptionRequiredError: If the user has no qualifying subscription
            GenreNotFoundError: If the genre is absent or outside the user's plans
        """
        ...

    async def list_movies_for_genre(
        self,
        user_id: str,
        genre_id: int,
        order_by: str = "title",
        limit: int = 10,
        page: int = 1,
    ) -> list[Movie]:
        """
        Get one page of the genre's movies the user may see.

        Args:
            user_id: Requesting user
            genre_id: Genre to list
            order_by: One of title, released, rating, popularity
            limit: Page size
            page: Page number (1-indexed)

        Raises:
            InvalidOrderingError: If order_by is not supported
            InvalidPaginationError: If page or limit is out of range
            SubscriptionRequiredError: If the user has no qualifying subscription
            GenreNotFoundError: If the genre is absent or outside the user's plans
        """
        ...
