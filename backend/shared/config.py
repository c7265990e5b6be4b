"""
Centralized configuration for the Neoflix backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., NEO4J_*, JWT_*).
"""

from functools import lru_cache
from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


Neo4jScheme = Literal["neo4j", "neo4j+s", "neo4j+ssc", "bolt", "bolt+s", "bolt+ssc"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Neoflix API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:8080", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Neo4j
    neo4j_scheme: Neo4jScheme = "neo4j"
    neo4j_host: str = "localhost"
    neo4j_port: int = 7687
    neo4j_username: str = "neo4j"
    neo4j_password: str = ""
    neo4j_database: Optional[str] = None

    # Auth tokens
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    jwt_expires_minutes: int = 60 * 24

    # Payment provider callback
    payment_webhook_secret: str = ""

    # Registration
    minimum_registration_age: int = 13
    free_trial_plan_id: int = 0
    free_trial_days: int = 7

    # Catalog
    genre_detail_page_size: int = 6
    default_movie_page_size: int = 10
    max_movie_page_size: int = 100

    @property
    def neo4j_uri(self) -> str:
        """Connection URI assembled from scheme, host and port."""
        return f"{self.neo4j_scheme}://{self.neo4j_host}:{self.neo4j_port}"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
