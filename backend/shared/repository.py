"""
Base repository class for graph database access.

Provides a common abstraction layer for all repositories, encapsulating
the graph executor and the shared Cypher conventions.
"""

from typing import TypeVar, Generic

from .graph import GraphExecutor


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Graph executor access via self._graph
    - Generic type parameter for model type hints

    Subclasses implement domain-specific queries and map rows to
    Pydantic models internally. Every public method accepts an optional
    ``tx`` so callers can compose several writes into one transaction.

    Example:
        class PlanRepository(BaseRepository[Plan]):
            def get_by_id(self, plan_id: int, tx=None) -> Optional[Plan]:
                rows = self._graph.read(
                    "MATCH (p:Plan {id: $planId}) RETURN p",
                    {"planId": plan_id},
                    tx,
                )
                return self._map_to_plan(rows[0]) if rows else None
    """

    def __init__(self, graph: GraphExecutor) -> None:
        """
        Initialize the repository with a graph executor.

        Args:
            graph: Executor used for all queries.
        """
        self._graph = graph
