"""
Movie catalog: the list of movies currently playing in theaters.

The raw response is validated with Pydantic models mirroring the API shape.
A structurally broken response fails the whole load; a single record with an
unparseable release date is kept, without a release date (and therefore with a
sort score of zero).
"""

from __future__ import annotations

import json
import random
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError

from cinema_dashboard.domain.models import Movie
from cinema_dashboard.errors import CatalogLoadError
from cinema_dashboard.infrastructure.movie_source import MovieSource
from cinema_dashboard.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_POSTER_MARKER = "poster_default"
RELEASE_DATE_FORMAT = "%Y-%m-%d"


class _Posters(BaseModel):
    profile: str
    detailed: str


class _Ratings(BaseModel):
    critics_score: int = Field(..., le=100)


class _MovieRecord(BaseModel):
    title: str
    synopsis: Optional[str] = None
    posters: _Posters
    release_dates: Dict[str, Optional[str]] = Field(default_factory=dict)
    ratings: _Ratings

    model_config = {"extra": "ignore"}


class _MovieList(BaseModel):
    movies: List[_MovieRecord]

    model_config = {"extra": "ignore"}


def synthetic_duration(rng: random.Random) -> int:
    """Running time in minutes: one or two hours plus 45-74 minutes."""
    hours = 1 + (1 if rng.random() >= 0.5 else 0)
    return hours * 60 + 45 + rng.randrange(30)


def parse_release_date(value: Optional[str]) -> datetime:
    if value is None:
        raise ValueError("no theater release date")
    return datetime.strptime(value, RELEASE_DATE_FORMAT)


def parse_movies(text: str, rng: random.Random) -> List[Movie]:
    """
    Parse the raw movie list JSON into Movie objects.

    Records whose thumbnail is the placeholder poster are skipped. Raises
    CatalogLoadError when the text is not JSON or does not have the expected
    structure.
    """
    try:
        payload = _MovieList.model_validate(json.loads(text))
    except (ValueError, ValidationError) as exc:
        raise CatalogLoadError(f"Malformed movie list: {exc}") from exc

    movies: List[Movie] = []
    for record in payload.movies:
        if DEFAULT_POSTER_MARKER in record.posters.profile:
            log.debug("Skipping movie without poster", extra={"title": record.title})
            continue

        duration = synthetic_duration(rng)
        try:
            release_date: Optional[datetime] = parse_release_date(
                record.release_dates.get("theater")
            )
        except ValueError as exc:
            log.warning(
                f"Unparseable release date for '{record.title}': {exc}",
                extra={"title": record.title},
            )
            release_date = None

        movies.append(
            Movie(
                title=record.title,
                synopsis=record.synopsis or "",
                thumb_url=record.posters.profile,
                poster_url=record.posters.detailed,
                duration=duration,
                release_date=release_date,
                score=record.ratings.critics_score,
            )
        )
    return movies


class MovieCatalog:
    """
    Movies loaded from a MovieSource; reload replaces the whole list.
    """

    def __init__(self, source: MovieSource) -> None:
        self.source = source
        self._movies: List[Movie] = []

    @property
    def movies(self) -> List[Movie]:
        return list(self._movies)

    def __len__(self) -> int:
        return len(self._movies)

    def load(self, rng: random.Random, now: Optional[datetime] = None) -> List[Movie]:
        """
        (Re)load the catalog. On failure the catalog is left empty and
        CatalogLoadError propagates.
        """
        self._movies = []
        text = self.source.read_text(now)
        self._movies = parse_movies(text, rng)
        log.info("Movie catalog loaded", extra={"movies": len(self._movies)})
        return self.movies

    def find_by_title(self, title: str) -> Optional[Movie]:
        for movie in self._movies:
            if movie.title == title:
                return movie
        return None

    def ranked(self, at: Optional[datetime] = None) -> List[Movie]:
        """Movies ordered by relevance at ``at`` (default: now), most relevant first."""
        instant = at or datetime.now()
        return sorted(self._movies, key=lambda movie: movie.score_at(instant), reverse=True)


__all__ = [
    "MovieCatalog",
    "parse_movies",
    "parse_release_date",
    "synthetic_duration",
    "DEFAULT_POSTER_MARKER",
]
