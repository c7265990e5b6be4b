"""Tests for shared/config.py."""

import pytest
from unittest.mock import patch
import os
from pydantic import ValidationError

from shared.config import Settings, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        settings = Settings(_env_file=None)
        assert settings.app_name == "Neoflix API"
        assert settings.debug is False
        assert settings.port == 3000
        assert settings.neo4j_scheme == "neo4j"
        assert settings.neo4j_port == 7687
        assert settings.jwt_algorithm == "HS256"
        assert settings.free_trial_plan_id == 0
        assert settings.free_trial_days == 7
        assert settings.genre_detail_page_size == 6
        assert settings.default_movie_page_size == 10
        assert settings.max_movie_page_size == 100

    def test_loads_from_env(self):
        """Settings should load from environment variables."""
        with patch.dict(os.environ, {"DEBUG": "true", "PORT": "9000"}):
            settings = Settings(_env_file=None)
            assert settings.debug is True
            assert settings.port == 9000

    def test_loads_neo4j_config_from_env(self):
        with patch.dict(os.environ, {
            "NEO4J_SCHEME": "neo4j+s",
            "NEO4J_HOST": "graph.example.com",
            "NEO4J_PORT": "7688",
            "NEO4J_PASSWORD": "secret",
        }):
            settings = Settings(_env_file=None)
            assert settings.neo4j_password == "secret"
            assert settings.neo4j_uri == "neo4j+s://graph.example.com:7688"

    def test_rejects_unknown_scheme(self):
        with patch.dict(os.environ, {"NEO4J_SCHEME": "http"}):
            with pytest.raises(ValidationError):
                Settings(_env_file=None)


class TestGetSettings:
    def test_get_settings_returns_settings_instance(self):
        """get_settings should return a Settings instance."""
        get_settings.cache_clear()
        settings = get_settings()
        assert isinstance(settings, Settings)

    def test_get_settings_caches(self):
        """get_settings should return cached instance."""
        get_settings.cache_clear()
        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2
