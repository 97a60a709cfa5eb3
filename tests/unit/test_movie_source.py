from __future__ import annotations

import os
import time
from datetime import datetime, timedelta

import pytest
import requests

from cinema_dashboard.errors import CatalogLoadError
from cinema_dashboard.infrastructure import movie_source
from cinema_dashboard.infrastructure.movie_source import CachedMovieSource, MovieCache

TWO_DAYS = 2 * 24 * 60 * 60


class _FakeResponse:
    def __init__(self, text: str, status_code: int = 200) -> None:
        self.text = text
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class _RecordingGet:
    def __init__(self, response: _FakeResponse) -> None:
        self.response = response
        self.calls: list[dict] = []

    def __call__(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        return self.response


@pytest.fixture
def fake_get(monkeypatch, movies_text) -> _RecordingGet:
    getter = _RecordingGet(_FakeResponse(movies_text))
    monkeypatch.setattr(movie_source.requests, "get", getter)
    return getter


def _age_file(path, seconds: int) -> None:
    old = time.time() - seconds
    os.utime(path, (old, old))


class TestMovieCache:
    def test_missing_file_is_expired(self, tmp_path):
        cache = MovieCache(tmp_path / "movies.json", timedelta(hours=24))
        assert cache.expires_at() is None
        assert cache.is_expired()

    def test_fresh_file_is_not_expired(self, tmp_path):
        cache = MovieCache(tmp_path / "movies.json", timedelta(hours=24))
        cache.write("{}")
        assert not cache.is_expired()

    def test_file_older_than_ttl_is_expired(self, tmp_path):
        cache = MovieCache(tmp_path / "movies.json", timedelta(hours=24))
        cache.write("{}")
        _age_file(cache.path, TWO_DAYS)
        assert cache.is_expired()

    def test_expiry_is_relative_to_given_now(self, tmp_path):
        cache = MovieCache(tmp_path / "movies.json", timedelta(hours=24))
        cache.write("{}")
        assert cache.is_expired(datetime.now() + timedelta(days=2))


class TestCachedMovieSource:
    def test_fetches_and_caches_when_cache_missing(self, test_settings, fake_get, movies_text):
        source = CachedMovieSource(test_settings)
        assert source.read_text() == movies_text
        assert test_settings.cache_path.read_text(encoding="utf-8") == movies_text

        call = fake_get.calls[0]
        assert call["url"] == test_settings.movies_url
        assert call["params"] == {
            "page_limit": test_settings.movies_page_limit,
            "apikey": test_settings.movies_api_key,
        }
        assert call["timeout"] == test_settings.http_timeout_seconds

    def test_reuses_fresh_cache(self, test_settings, fake_get):
        test_settings.cache_path.parent.mkdir(parents=True)
        test_settings.cache_path.write_text('{"movies": []}', encoding="utf-8")

        assert CachedMovieSource(test_settings).read_text() == '{"movies": []}'
        assert fake_get.calls == []

    def test_refetches_stale_cache(self, test_settings, fake_get, movies_text):
        test_settings.cache_path.parent.mkdir(parents=True)
        test_settings.cache_path.write_text('{"movies": []}', encoding="utf-8")
        _age_file(test_settings.cache_path, TWO_DAYS)

        assert CachedMovieSource(test_settings).read_text() == movies_text
        assert len(fake_get.calls) == 1

    def test_refetches_empty_cache(self, test_settings, fake_get, movies_text):
        test_settings.cache_path.parent.mkdir(parents=True)
        test_settings.cache_path.write_text("", encoding="utf-8")

        assert CachedMovieSource(test_settings).read_text() == movies_text
        assert len(fake_get.calls) == 1

    def test_non_json_body_is_not_cached(self, test_settings, fake_get):
        fake_get.response = _FakeResponse("<html>quota exceeded</html>")

        with pytest.raises(CatalogLoadError):
            CachedMovieSource(test_settings).read_text()
        assert not test_settings.cache_path.exists()

    def test_http_error_raises_catalog_error(self, test_settings, fake_get):
        fake_get.response = _FakeResponse("{}", status_code=503)

        with pytest.raises(CatalogLoadError):
            CachedMovieSource(test_settings).read_text()

    def test_network_failure_raises_catalog_error(self, test_settings, monkeypatch):
        def boom(*args, **kwargs):
            raise requests.ConnectionError("no route to host")

        monkeypatch.setattr(movie_source.requests, "get", boom)

        with pytest.raises(CatalogLoadError, match="no route to host"):
            CachedMovieSource(test_settings).read_text()
