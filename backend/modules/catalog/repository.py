"""
Catalog repository for graph access.

Encapsulates the Cypher for entitlement lookups and genre/movie reads:
- (:User)-[:PURCHASED]->(:Subscription)-[:FOR_PLAN]->(:Plan)
- (:Plan)-[:PROVIDES_ACCESS_TO]->(:Genre)<-[:IN_GENRE]-(:Movie)
- (:Person)-[:CAST_FOR]->(:Movie)
"""

from typing import Any, Optional, Sequence

from shared.repository import BaseRepository
from .models import CastMember, GenreSummary, Movie, MovieGenre, MovieOrder


# ORDER BY fragments are only ever taken from this table, never from input.
ORDERINGS: dict[MovieOrder, tuple[str, str]] = {
    MovieOrder.TITLE: ("title", "ASC"),
    MovieOrder.RELEASED: ("released", "DESC"),
    MovieOrder.RATING: ("imdbRating", "DESC"),
    MovieOrder.POPULARITY: ("popularity", "DESC"),
}

CAST_LIMIT = 5


class CatalogRepository(BaseRepository[Movie]):
    """
    Repository for genre and movie reads.

    Every movie query is scoped by the plans the caller is entitled to and
    by the adult-content flag, before ordering and windowing.
    """

    def get_entitlement_basis(
        self,
        user_id: str,
        tx: Optional[Any] = None,
    ) -> Optional[dict[str, Any]]:
        """
        Get the user's date of birth and the subscriptions they have purchased.

        Expiry and status are judged by the caller against its own clock.

        Returns:
            ``{"dateOfBirth": ..., "subscriptions": [{"planId", "status", "expiresAt"}, ...]}``
            or None if the user doesn't exist.
        """
        rows = self._graph.read(
            """
            MATCH (u:User {id: $userId})
            OPTIONAL MATCH (u)-[:PURCHASED]->(s:Subscription)-[:FOR_PLAN]->(p:Plan)
            RETURN u.dateOfBirth AS dateOfBirth,
                collect(s { planId: p.id, .status, .expiresAt }) AS subscriptions
            """,
            {"userId": user_id},
            tx,
        )
        return rows[0] if rows else None

    def list_genres(self, plan_ids: Sequence[int], tx: Optional[Any] = None) -> list[GenreSummary]:
        """Genres granted by any of the plans, by name."""
        rows = self._graph.read(
            """
            MATCH (p:Plan)-[:PROVIDES_ACCESS_TO]->(g:Genre)
            WHERE p.id IN $planIds
            WITH DISTINCT g
            ORDER BY g.name ASC, g.id ASC
            RETURN g { .* } AS genre
            """,
            {"planIds": list(plan_ids)},
            tx,
        )
        return [self._map_to_genre(row["genre"]) for row in rows]

    def find_genre(
        self,
        genre_id: int,
        plan_ids: Sequence[int],
        tx: Optional[Any] = None,
    ) -> Optional[GenreSummary]:
        """The genre if one of the plans grants it, else None."""
        rows = self._graph.read(
            """
            MATCH (p:Plan)-[:PROVIDES_ACCESS_TO]->(g:Genre {id: $genreId})
            WHERE p.id IN $planIds
            RETURN g { .* } AS genre
            LIMIT 1
            """,
            {"genreId": genre_id, "planIds": list(plan_ids)},
            tx,
        )
        return self._map_to_genre(rows[0]["genre"]) if rows else None

    def list_movies(
        self,
        genre_id: int,
        plan_ids: Sequence[int],
        include_adult: bool,
        order: MovieOrder,
        skip: int,
        limit: int,
        require_sort_key: bool = False,
        exclude_ids: Sequence[int] = (),
        tx: Optional[Any] = None,
    ) -> list[Movie]:
        """
        Window over the entitled movies of a genre.

        Ordering always ends with the movie ID so that consecutive windows
        neither overlap nor skip movies.

        Args:
            genre_id: Genre to list.
            plan_ids: Plans the caller is entitled to.
            include_adult: Whether adult-flagged movies are eligible.
            order: Ordering from the allow-list.
            skip: Number of eligible movies to skip.
            limit: Maximum number of movies to return.
            require_sort_key: Drop movies lacking the ordering property.
            exclude_ids: Movie IDs to leave out.
        """
        prop, direction = ORDERINGS[order]
        sort_key_filter = f"AND m.{prop} IS NOT NULL" if require_sort_key else ""

        rows = self._graph.read(
            f"""
            MATCH (p:Plan)-[:PROVIDES_ACCESS_TO]->(g:Genre {{id: $genreId}})<-[:IN_GENRE]-(m:Movie)
            WHERE p.id IN $planIds
                AND ($includeAdult OR NOT m:Adult)
                AND NOT m.id IN $excludeIds
                {sort_key_filter}
            WITH DISTINCT m
            ORDER BY m.{prop} {direction}, m.id ASC
            SKIP $skip
            LIMIT $limit
            RETURN m {{ .*, adult: m:Adult }} AS movie,
                [ (m)-[:IN_GENRE]->(mg:Genre) | mg {{ .id, .name }} ] AS genres,
                [ (m)<-[:CAST_FOR]-(c:Person) | c {{ .name, .poster }} ][0..{CAST_LIMIT}] AS cast
            """,
            {
                "genreId": genre_id,
                "planIds": list(plan_ids),
                "includeAdult": include_adult,
                "excludeIds": list(exclude_ids),
                "skip": skip,
                "limit": limit,
            },
            tx,
        )
        return [self._map_to_movie(row) for row in rows]

    # -------------------------------------------------------------------------
    # Private mapping methods
    # -------------------------------------------------------------------------

    def _map_to_genre(self, data: dict[str, Any]) -> GenreSummary:
        return GenreSummary(
            id=data["id"],
            name=data["name"],
            poster=data.get("poster"),
        )

    def _map_to_movie(self, row: dict[str, Any]) -> Movie:
        data = row["movie"]
        return Movie(
            id=data["id"],
            title=data["title"],
            released=data.get("released"),
            year=data.get("year"),
            plot=data.get("plot"),
            poster=data.get("poster"),
            rating=data.get("imdbRating"),
            popularity=data.get("popularity"),
            adult=bool(data.get("adult")),
            genres=[MovieGenre(**g) for g in row.get("genres") or []],
            cast=[CastMember(**c) for c in row.get("cast") or []],
        )
