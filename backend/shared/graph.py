"""
Graph database access for Neo4j.

Provides the driver factory, a small query executor that accepts an
optional explicit transaction, and conversion of driver-native values
(nodes, temporal and spatial types) into plain Python data so nothing
above this layer ever sees a driver type.
"""

import logging
import re
from contextlib import contextmanager
from datetime import date, datetime, time
from typing import Any, Iterator, Optional, Protocol, runtime_checkable

from neo4j import Driver, GraphDatabase, READ_ACCESS, WRITE_ACCESS, Transaction
from neo4j.exceptions import (
    ClientError,
    ConstraintError,
    DriverError,
    Neo4jError,
    ServiceUnavailable,
    SessionExpired,
    TransientError as DriverTransientError,
)
from neo4j.graph import Node, Path, Relationship
from neo4j.spatial import Point
from neo4j.time import Date, DateTime, Duration, Time

from .config import Settings, get_settings
from .exceptions import ConflictError, TransientError, ValidationError

logger = logging.getLogger(__name__)

SERVICE_NAME = "neo4j"

Row = dict[str, Any]

_BACKTICKED = re.compile(r"`([A-Za-z0-9_]+)`")


@runtime_checkable
class GraphExecutor(Protocol):
    """
    Query execution interface consumed by repositories.

    Parameters are always passed separately from the query text. When a
    transaction handle is supplied the query joins it, otherwise it runs
    in its own session.
    """

    def read(
        self,
        query: str,
        parameters: Optional[dict[str, Any]] = None,
        tx: Optional[Any] = None,
    ) -> list[Row]:
        ...

    def write(
        self,
        query: str,
        parameters: Optional[dict[str, Any]] = None,
        tx: Optional[Any] = None,
    ) -> list[Row]:
        ...

    def transaction(self) -> Any:
        """Context manager yielding a transaction: commit on success, rollback on error."""
        ...


def to_native(value: Any) -> Any:
    """
    Convert a value returned by the driver into plain Python data.

    Nodes and relationships become their property dicts, temporal values
    become ISO-8601 strings, geographic points become longitude/latitude
    dicts. Lists and maps are converted recursively.
    """
    if value is None:
        return None
    if isinstance(value, (Node, Relationship)):
        return {key: to_native(item) for key, item in value.items()}
    if isinstance(value, Path):
        return [to_native(node) for node in value.nodes]
    if isinstance(value, (DateTime, Date, Time)):
        return value.to_native().isoformat()
    if isinstance(value, Duration):
        return value.iso_format()
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Point):
        return _point_to_native(value)
    if isinstance(value, dict):
        return {key: to_native(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_native(item) for item in value]
    return value


def _point_to_native(point: Point) -> dict[str, float]:
    if point.srid == 4326:
        return {"longitude": point.longitude, "latitude": point.latitude}
    if point.srid == 4979:
        return {
            "longitude": point.longitude,
            "latitude": point.latitude,
            "height": point.height,
        }
    coordinates = dict(zip(("x", "y", "z"), point))
    return coordinates


def translate_error(error: Neo4jError) -> Exception:
    """
    Map a driver error onto the application's exception taxonomy.

    Constraint violations become field-level conflicts or validation
    errors; connectivity problems become retryable transient errors.
    Anything unrecognised is returned unchanged.
    """
    message = error.message or str(error)

    if isinstance(error, ConstraintError) or "already exists with" in message:
        names = _BACKTICKED.findall(message)
        field = names[-1] if names else "value"
        return ConflictError(field)

    if "must have the property" in message:
        names = _BACKTICKED.findall(message)
        field = names[-1] if names else "value"
        return ValidationError(f"{field} is required", code="MISSING_PROPERTY", details={"field": field})

    if isinstance(error, DriverTransientError):
        return TransientError(SERVICE_NAME)

    return error


@contextmanager
def _translated() -> Iterator[None]:
    try:
        yield
    except (ServiceUnavailable, SessionExpired) as e:
        logger.warning(f"Graph database unavailable: {type(e).__name__}")
        raise TransientError(SERVICE_NAME) from e
    except (ClientError, DriverTransientError) as e:
        translated = translate_error(e)
        if translated is e:
            raise
        if isinstance(translated, TransientError):
            logger.warning("Transient graph database error")
        raise translated from e


class GraphClient(GraphExecutor):
    """
    Thin executor over a Neo4j driver.

    Every row is returned as a dict of native Python values.
    """

    def __init__(self, driver: Driver, database: Optional[str] = None) -> None:
        self._driver = driver
        self._database = database

    @property
    def driver(self) -> Driver:
        return self._driver

    def read(
        self,
        query: str,
        parameters: Optional[dict[str, Any]] = None,
        tx: Optional[Transaction] = None,
    ) -> list[Row]:
        """Run a query in a read session, or inside the given transaction."""
        return self.run(query, parameters, tx, access_mode=READ_ACCESS)

    def write(
        self,
        query: str,
        parameters: Optional[dict[str, Any]] = None,
        tx: Optional[Transaction] = None,
    ) -> list[Row]:
        """Run a query in a write session, or inside the given transaction."""
        return self.run(query, parameters, tx, access_mode=WRITE_ACCESS)

    def run(
        self,
        query: str,
        parameters: Optional[dict[str, Any]] = None,
        tx: Optional[Transaction] = None,
        access_mode: str = WRITE_ACCESS,
    ) -> list[Row]:
        """
        Run a query and return all rows converted to native values.

        Args:
            query: Cypher template; user input must only appear in parameters.
            parameters: Query parameters.
            tx: Optional open transaction to run within.
            access_mode: Session access mode when no transaction is given.

        Returns:
            List of rows keyed by the RETURN aliases.
        """
        parameters = parameters or {}

        with _translated():
            if tx is not None:
                return _collect(tx.run(query, parameters))

            with self._driver.session(
                database=self._database,
                default_access_mode=access_mode,
            ) as session:
                return _collect(session.run(query, parameters))

    @contextmanager
    def transaction(self) -> Iterator[Transaction]:
        """
        Open an explicit write transaction.

        Commits when the block exits normally and rolls back when it
        raises, so that multi-step writes are all-or-nothing.
        """
        with _translated():
            session = self._driver.session(
                database=self._database,
                default_access_mode=WRITE_ACCESS,
            )
            try:
                tx = session.begin_transaction()
                try:
                    yield tx
                except BaseException:
                    tx.rollback()
                    raise
                else:
                    tx.commit()
            finally:
                session.close()

    def verify_connectivity(self) -> bool:
        """Return True if the database answers, False otherwise."""
        try:
            self._driver.verify_connectivity()
        except (Neo4jError, DriverError, OSError):
            return False
        return True

    def close(self) -> None:
        self._driver.close()


def _collect(result: Any) -> list[Row]:
    return [
        {key: to_native(record[key]) for key in record.keys()}
        for record in result
    ]


def create_driver(settings: Optional[Settings] = None) -> Driver:
    """
    Create a Neo4j driver from settings.

    Raises:
        RuntimeError: If no password is configured.
    """
    settings = settings or get_settings()
    if not settings.neo4j_password:
        raise RuntimeError(
            "Neo4j configuration missing. "
            "Set NEO4J_HOST, NEO4J_USERNAME and NEO4J_PASSWORD environment variables."
        )
    return GraphDatabase.driver(
        settings.neo4j_uri,
        auth=(settings.neo4j_username, settings.neo4j_password),
    )


# Module-level client cache
_client: Optional[GraphClient] = None


def get_graph_client() -> GraphClient:
    """
    Get the shared graph client.

    The underlying driver pools connections and is safe for concurrent use.
    """
    global _client

    if _client is None:
        settings = get_settings()
        _client = GraphClient(create_driver(settings), settings.neo4j_database)

    return _client


def reset_graph_client() -> None:
    """
    Close and forget the cached graph client.

    Useful for testing or when configuration changes.
    """
    global _client
    if _client is not None:
        _client.close()
    _client = None
