"""
Relevance ("sort score") of a movie at a given instant.

The score decays with the number of whole five-day periods since release and
carries a constant bonus that grows with the critics score:

    0.6 / (0.01 + periods_since_release) + 10 / (101 - score)

Nothing is stored on the movie; callers compute the score for whatever
reference instant they need.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cinema_dashboard.domain.models import Movie

DECAY_PERIOD = timedelta(days=5)


def score_at(movie: "Movie", instant: datetime) -> float:
    """
    Return the sort score of ``movie`` with ``instant`` as "now".

    Zero when the release date is unknown or lies after ``instant``.
    """
    if movie.release_date is None or instant < movie.release_date:
        return 0.0
    periods = (instant - movie.release_date) // DECAY_PERIOD
    return 0.6 / (0.01 + periods) + 10.0 / (101 - movie.score)


__all__ = ["score_at", "DECAY_PERIOD"]
