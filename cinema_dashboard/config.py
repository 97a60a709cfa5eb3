"""
Configuration settings for the cinema dashboard data backend.

Uses Pydantic Settings to load environment variables for the movie source,
the local response cache, transaction generation and logging.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MOVIES_URL = (
    "http://api.rottentomatoes.com/api/public/v1.0/lists/movies/in_theaters.json"
)


class Settings(BaseSettings):
    # Movie source
    movies_url: str = Field(DEFAULT_MOVIES_URL, alias="MOVIES_URL")
    movies_api_key: str = Field("xxxxxxxxxxxxxxxxxxx", alias="ROTTENTOMATOES_APIKEY")
    movies_page_limit: int = Field(30, alias="MOVIES_PAGE_LIMIT")
    http_timeout_seconds: float = Field(10.0, alias="HTTP_TIMEOUT_SECONDS")

    # Cache
    cache_path: Path = Field(Path(".cache/movies.json"), alias="MOVIES_CACHE_PATH")
    cache_ttl_hours: float = Field(24.0, alias="MOVIES_CACHE_TTL_HOURS")

    # Geo reference data (None = bundled resource)
    cities_path: Optional[Path] = Field(None, alias="CITIES_PATH")

    # Generation
    transaction_count: int = Field(1000, alias="TRANSACTION_COUNT")
    random_seed: int = Field(1, alias="RANDOM_SEED")
    top_titles: int = Field(10, alias="TOP_TITLES")
    failure_policy: Literal["tolerant", "strict"] = Field("tolerant", alias="FAILURE_POLICY")

    # Application
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    json_logs: bool = Field(False, alias="JSON_LOGS")
    results_dir: Path = Field(Path("results"), alias="RESULTS_DIR")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings", "DEFAULT_MOVIES_URL"]
