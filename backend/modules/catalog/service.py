"""
Catalog service implementation.

Resolves a user's entitlement at the current instant and answers genre
and movie queries within it.
"""

import logging
from typing import Optional

from shared.clock import Clock, SystemClock, parse_date
from shared.graph import GraphExecutor

from .entitlements import Entitlement, resolve_entitlement
from .interfaces import ICatalogService
from .models import GenreDetail, GenreSummary, Movie, MovieOrder
from .exceptions import (
    GenreNotFoundError,
    InvalidOrderingError,
    InvalidPaginationError,
    SubscriptionRequiredError,
)
from .repository import CatalogRepository

logger = logging.getLogger(__name__)

DEFAULT_DETAIL_PAGE_SIZE = 6
DEFAULT_MAX_PAGE_SIZE = 100


class CatalogService(ICatalogService):
    """
    Catalog service with graph backend.

    Implements ICatalogService. The clock is injected so that expiry and
    age checks can be evaluated at any instant.
    """

    def __init__(
        self,
        graph: GraphExecutor,
        clock: Optional[Clock] = None,
        repository: Optional[CatalogRepository] = None,
        detail_page_size: int = DEFAULT_DETAIL_PAGE_SIZE,
        max_page_size: int = DEFAULT_MAX_PAGE_SIZE,
    ):
        self._graph = graph
        self._clock = clock or SystemClock()
        self._repository = repository or CatalogRepository(graph)
        self._detail_page_size = detail_page_size
        self._max_page_size = max_page_size

    async def resolve_genres_for_user(self, user_id: str) -> list[GenreSummary]:
        """List the genres the user may browse."""
        entitlement = self._resolve_entitlement(user_id)
        return self._repository.list_genres(entitlement.plan_ids)

    async def resolve_genre_detail(self, user_id: str, genre_id: int) -> GenreDetail:
        """Get a genre with its latest and popular movies."""
        entitlement = self._resolve_entitlement(user_id)
        genre = self._require_genre(entitlement, genre_id)

        latest = self._repository.list_movies(
            genre_id=genre.id,
            plan_ids=entitlement.plan_ids,
            include_adult=entitlement.include_adult,
            order=MovieOrder.RELEASED,
            skip=0,
            limit=self._detail_page_size,
            require_sort_key=True,
        )
        popular = self._repository.list_movies(
            genre_id=genre.id,
            plan_ids=entitlement.plan_ids,
            include_adult=entitlement.include_adult,
            order=MovieOrder.POPULARITY,
            skip=0,
            limit=self._detail_page_size,
            require_sort_key=True,
            exclude_ids=[movie.id for movie in latest],
        )

        return GenreDetail(**genre.model_dump(), latest=latest, popular=popular)

    async def list_movies_for_genre(
        self,
        user_id: str,
        genre_id: int,
        order_by: str = MovieOrder.TITLE.value,
        limit: int = 10,
        page: int = 1,
    ) -> list[Movie]:
        """Get one page of the genre's movies."""
        order = self._parse_order(order_by)
        skip = self._skip_for(page, limit)

        entitlement = self._resolve_entitlement(user_id)
        genre = self._require_genre(entitlement, genre_id)

        return self._repository.list_movies(
            genre_id=genre.id,
            plan_ids=entitlement.plan_ids,
            include_adult=entitlement.include_adult,
            order=order,
            skip=skip,
            limit=limit,
        )

    # -------------------------------------------------------------------------
    # Entitlement helpers
    # -------------------------------------------------------------------------

    def _resolve_entitlement(self, user_id: str) -> Entitlement:
        """
        Work out which plans the user reaches right now.

        Raises:
            SubscriptionRequiredError: If no unexpired access-granting subscription exists
        """
        now = self._clock.now()
        basis = self._repository.get_entitlement_basis(user_id) or {}

        entitlement = resolve_entitlement(
            user_id,
            parse_date(basis.get("dateOfBirth")),
            basis.get("subscriptions") or [],
            now,
        )
        if not entitlement.entitled:
            logger.debug(f"User {user_id} has no qualifying subscription")
            raise SubscriptionRequiredError()

        return entitlement

    def _require_genre(self, entitlement: Entitlement, genre_id: int) -> GenreSummary:
        genre = self._repository.find_genre(genre_id, entitlement.plan_ids)
        if genre is None:
            logger.debug(f"Genre {genre_id} not reachable for user {entitlement.user_id}")
            raise GenreNotFoundError()
        return genre

    # -------------------------------------------------------------------------
    # Argument validation
    # -------------------------------------------------------------------------

    def _parse_order(self, order_by: str) -> MovieOrder:
        try:
            return MovieOrder(order_by)
        except ValueError:
            raise InvalidOrderingError(order_by, [order.value for order in MovieOrder])

    def _skip_for(self, page: int, limit: int) -> int:
        """Offset of a 1-indexed page."""
        if page < 1:
            raise InvalidPaginationError("page", page, "Pages start at 1")
        if limit < 1 or limit > self._max_page_size:
            raise InvalidPaginationError(
                "limit", limit, f"Must be between 1 and {self._max_page_size}"
            )
        return (page - 1) * limit
