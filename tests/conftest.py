"""
Pytest configuration for the cinema dashboard backend.

Provides fixtures for:
- Settings isolated from the developer's environment / .env
- A canned movie-list response and an in-memory movie source
- A small geo reference file
- A fixed clock so generation is reproducible
"""

from __future__ import annotations

import json
import random
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import pytest

from cinema_dashboard.catalog import parse_movies
from cinema_dashboard.config import Settings, get_settings
from cinema_dashboard.domain.models import Movie
from cinema_dashboard.errors import CatalogLoadError

FIXED_NOW = datetime(2024, 9, 15, 12, 0, 0)

_RELEASES = [
    ("Midnight Harbor", "2024-09-06", 92),
    ("The Long Field", "2024-08-23", 78),
    ("Paper Kingdoms", "2024-08-02", 64),
    ("Second Sunrise", "2024-07-19", 85),
    ("Glass Orchard", "2024-07-05", 51),
    ("Northbound", "2024-06-14", 70),
    ("Quiet Engines", "2024-05-31", 88),
    ("Salt & Copper", "2024-05-10", 43),
    ("Lanterns", "2024-04-26", 97),
    ("Old Maps", "2024-03-08", 60),
    ("Echo Valley", "2024-02-16", 35),
    ("Harvest Moon: Returns", "2024-01-12", 81),
    ("Future Film", "2024-12-01", 99),
]


def _record(title: str, release: Optional[str], score: int, profile: Optional[str] = None) -> dict:
    slug = title.lower().replace(" ", "_")
    return {
        "id": slug,
        "title": title,
        "year": 2024,
        "synopsis": f"Synopsis of {title}.",
        "posters": {
            "thumbnail": f"http://img.example/{slug}_tmb.jpg",
            "profile": profile or f"http://img.example/{slug}_pro.jpg",
            "detailed": f"http://img.example/{slug}_det.jpg",
            "original": f"http://img.example/{slug}_ori.jpg",
        },
        "release_dates": {"theater": release} if release is not None else {},
        "ratings": {"critics_rating": "Fresh", "critics_score": score, "audience_score": 70},
    }


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def movies_payload() -> dict:
    records = [_record(title, release, score) for title, release, score in _RELEASES]
    records.append(
        _record("No Poster", "2024-08-01", 50, profile="http://img.example/poster_default.gif")
    )
    return {"total": len(records), "movies": records}


@pytest.fixture
def movies_text(movies_payload: dict) -> str:
    return json.dumps(movies_payload)


class FakeMovieSource:
    """In-memory movie source recording how often it was read."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.calls = 0

    def read_text(self, now: Optional[datetime] = None) -> str:
        self.calls += 1
        return self.text


class FailingMovieSource:
    def read_text(self, now: Optional[datetime] = None) -> str:
        raise CatalogLoadError("source unavailable")


@pytest.fixture
def fake_source(movies_text: str) -> FakeMovieSource:
    return FakeMovieSource(movies_text)


@pytest.fixture
def failing_source() -> FailingMovieSource:
    return FailingMovieSource()


@pytest.fixture
def sample_movies(movies_text: str) -> List[Movie]:
    return parse_movies(movies_text, random.Random(1))


@pytest.fixture
def cities_file(tmp_path: Path) -> Path:
    path = tmp_path / "cities.txt"
    path.write_text(
        "\n".join(
            [
                "658225\tHelsinki\tHelsinki\t60.17\t24.94\tFI\tFinland\t558457",
                "633679\tTurku\tTurku\t60.45\t22.27\tFI\tFinland\t175945",
                "2673730\tStockholm\tStockholm\t59.33\t18.06\tSE\tSweden\t1515017",
                "2988507\tParis\tParis\t48.85\t2.35\tFR\tFrance\t2138551",
            ]
        )
        + "\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def test_settings(tmp_path: Path, cities_file: Path) -> Settings:
    """
    Settings fixture with test-specific overrides; never touches the network.
    """
    return Settings(
        _env_file=None,
        movies_url="http://movies.invalid/in_theaters.json",
        cache_path=tmp_path / "cache" / "movies.json",
        cities_path=cities_file,
        transaction_count=1000,
        random_seed=1,
        results_dir=tmp_path / "results",
        log_level="DEBUG",
    )


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
