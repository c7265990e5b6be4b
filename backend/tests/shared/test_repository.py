"""Tests for shared/repository.py."""

from typing import Optional

from shared.repository import BaseRepository


class TestBaseRepository:
    """Tests for BaseRepository base class."""

    def test_init_stores_graph_executor(self, fake_graph):
        """Should store the graph executor in _graph attribute."""
        repo = BaseRepository(fake_graph)
        assert repo._graph is fake_graph

    def test_subclass_can_query_graph(self, fake_graph):
        """Subclass should be able to read through _graph and pass tx along."""
        fake_graph.queue([{"id": 7, "name": "Comedy"}])

        class GenreRepository(BaseRepository[dict]):
            def get_by_id(self, genre_id: int, tx=None) -> Optional[dict]:
                rows = self._graph.read(
                    "MATCH (g:Genre {id: $genreId}) RETURN g.id AS id, g.name AS name",
                    {"genreId": genre_id},
                    tx,
                )
                return rows[0] if rows else None

        repo = GenreRepository(fake_graph)
        sentinel_tx = object()

        assert repo.get_by_id(7, tx=sentinel_tx) == {"id": 7, "name": "Comedy"}
        mode, _, params, tx = fake_graph.calls[0]
        assert mode == "read"
        assert params == {"genreId": 7}
        assert tx is sentinel_tx

    def test_subclass_gets_empty_result(self, fake_graph):
        class GenreRepository(BaseRepository[dict]):
            def get_by_id(self, genre_id: int) -> Optional[dict]:
                rows = self._graph.read("MATCH (g:Genre) RETURN g", {"genreId": genre_id})
                return rows[0] if rows else None

        assert GenreRepository(fake_graph).get_by_id(1) is None
