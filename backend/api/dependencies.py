"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations on top of one shared
graph client and clock.
"""

from typing import TYPE_CHECKING, Optional

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from shared.clock import Clock
    from shared.graph import GraphExecutor
    from modules.auth.interfaces import IAuthService
    from modules.catalog.interfaces import ICatalogService
    from modules.subscriptions.interfaces import ISubscriptionService


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Pass ``graph`` and ``clock`` to wire the
    services against fakes; use reset() to clear cached services.
    """

    def __init__(
        self,
        graph: "Optional[GraphExecutor]" = None,
        clock: "Optional[Clock]" = None,
    ) -> None:
        self._graph = graph
        self._clock = clock
        self._auth_service: "IAuthService | None" = None
        self._catalog_service: "ICatalogService | None" = None
        self._subscription_service: "ISubscriptionService | None" = None

    @property
    def graph(self) -> "GraphExecutor":
        """Get the graph executor."""
        if self._graph is None:
            from shared.graph import get_graph_client
            self._graph = get_graph_client()
        return self._graph

    @property
    def clock(self) -> "Clock":
        """Get the clock."""
        if self._clock is None:
            from shared.clock import SystemClock
            self._clock = SystemClock()
        return self._clock

    @property
    def subscriptions(self) -> "ISubscriptionService":
        """Get the subscription service instance."""
        if self._subscription_service is None:
            from modules.subscriptions.service import SubscriptionService
            self._subscription_service = SubscriptionService(self.graph, clock=self.clock)
        return self._subscription_service

    @property
    def catalog(self) -> "ICatalogService":
        """Get the catalog service instance."""
        if self._catalog_service is None:
            from shared.config import get_settings
            from modules.catalog.service import CatalogService
            settings = get_settings()
            self._catalog_service = CatalogService(
                self.graph,
                clock=self.clock,
                detail_page_size=settings.genre_detail_page_size,
                max_page_size=settings.max_movie_page_size,
            )
        return self._catalog_service

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                self.graph,
                subscriptions=self.subscriptions,
                clock=self.clock,
            )
        return self._auth_service

    def reset(self) -> None:
        """
        Reset all cached services.

        The graph executor and clock are kept.
        """
        self._auth_service = None
        self._catalog_service = None
        self._subscription_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_graph() -> "GraphExecutor":
    """FastAPI dependency for the graph executor."""
    return get_container().graph


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_catalog_service() -> "ICatalogService":
    """FastAPI dependency for catalog service."""
    return get_container().catalog


def get_subscription_service() -> "ISubscriptionService":
    """FastAPI dependency for subscription service."""
    return get_container().subscriptions
