"""
Movie source utilities for the cinema dashboard backend.

Fetches the "in theaters" list over HTTP and keeps the raw response in a local
cache file. The cache is considered fresh for a configurable window (24h by
default) counted from the file's modification time; the remote API has a daily
call limit, so repeated startups within the window never hit the network.

A fetched body is only written to the cache after it parses as JSON, so a failed
or truncated download never replaces a good cache with a corrupt one.
"""

from __future__ import annotations

import json
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional, Protocol

import requests

from cinema_dashboard.config import Settings, get_settings
from cinema_dashboard.errors import CatalogLoadError
from cinema_dashboard.utils.logging import get_logger

log = get_logger(__name__)


class MovieSource(Protocol):
    """Anything that can hand back the raw movie list JSON text."""

    def read_text(self, now: Optional[datetime] = None) -> str:
        ...


class MovieCache:
    """
    Single-file cache holding the last fetched response verbatim.
    """

    def __init__(self, path: Path, ttl: timedelta) -> None:
        self.path = path
        self.ttl = ttl

    def expires_at(self) -> Optional[datetime]:
        """Expiry instant, or None when there is no cache file yet."""
        try:
            mtime = self.path.stat().st_mtime
        except FileNotFoundError:
            return None
        return datetime.fromtimestamp(mtime) + self.ttl

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        expires = self.expires_at()
        if expires is None:
            return True
        return expires < (now or datetime.now())

    def read(self) -> str:
        return self.path.read_text(encoding="utf-8")

    def write(self, text: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(text, encoding="utf-8")


def fetch_movies_text(settings: Optional[Settings] = None) -> str:
    """
    GET the movie list from the remote API and return the body as text.

    Raises CatalogLoadError on any network or HTTP status failure.
    """
    settings = settings or get_settings()
    params = {
        "page_limit": settings.movies_page_limit,
        "apikey": settings.movies_api_key,
    }
    log.info("Fetching movies", extra={"url": settings.movies_url})
    try:
        response = requests.get(
            settings.movies_url,
            params=params,
            timeout=settings.http_timeout_seconds,
        )
        response.raise_for_status()
    except requests.RequestException as exc:
        raise CatalogLoadError(f"Fetching movies from {settings.movies_url} failed: {exc}") from exc
    return response.text


class CachedMovieSource:
    """
    Movie source backed by the remote API with a local freshness-window cache.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()
        self.cache = MovieCache(
            Path(self.settings.cache_path),
            timedelta(hours=self.settings.cache_ttl_hours),
        )

    def fetch_and_cache(self) -> str:
        text = fetch_movies_text(self.settings)
        try:
            json.loads(text)
        except ValueError as exc:
            raise CatalogLoadError("Movie source returned a body that is not JSON") from exc
        try:
            self.cache.write(text)
        except OSError as exc:
            raise CatalogLoadError(f"Could not write movie cache {self.cache.path}: {exc}") from exc
        log.info("Movie cache refreshed", extra={"cache": str(self.cache.path)})
        return text

    def read_text(self, now: Optional[datetime] = None) -> str:
        """
        Return the cached response, refetching when it is stale, missing or empty.
        """
        if self.cache.is_expired(now):
            log.info("Movie cache expired", extra={"cache": str(self.cache.path)})
            return self.fetch_and_cache()

        try:
            text = self.cache.read()
        except OSError as exc:
            raise CatalogLoadError(f"Could not read movie cache {self.cache.path}: {exc}") from exc
        if not text.strip():
            log.info("Movie cache empty", extra={"cache": str(self.cache.path)})
            return self.fetch_and_cache()
        return text


__all__ = ["MovieSource", "MovieCache", "CachedMovieSource", "fetch_movies_text"]
