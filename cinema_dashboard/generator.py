"""
Synthetic ticket-sale generation.

Implements deterministic pseudo-random transaction generation: for a fixed
seed, a fixed catalog, a fixed geo table and a fixed "now", the produced list
is identical across runs.

Each iteration picks a simulated instant somewhere in the last few months,
ranks the movies by their relevance at that instant and draws a movie with a
half-normal bias toward the front of the ranking, so currently popular movies
sell most tickets. Iterations that land on a movie not yet released produce
nothing.
"""

from __future__ import annotations

import calendar
import random
from datetime import datetime
from typing import List, Mapping, Optional, Sequence

from cinema_dashboard.domain.models import Movie, Transaction
from cinema_dashboard.store import SortField
from cinema_dashboard.utils.logging import get_logger

log = get_logger(__name__)

THEATERS = [f"Theater {n}" for n in range(1, 7)]
ROOMS = [f"Room {n}" for n in range(1, 7)]

MAX_MONTHS_BACK = 4
BASE_SEAT_PRICE = 6.0
SEAT_PRICE_JITTER = 3.0


def _with_day(moment: datetime, day: int) -> datetime:
    last_day = calendar.monthrange(moment.year, moment.month)[1]
    return moment.replace(day=min(day, last_day))


def _months_back(moment: datetime, months: int) -> datetime:
    year, month = divmod(moment.year * 12 + moment.month - 1 - months, 12)
    first = moment.replace(year=year, month=month + 1, day=1)
    return _with_day(first, moment.day)


def simulated_instant(rng: random.Random, now: datetime) -> datetime:
    """
    A random instant within the last ``MAX_MONTHS_BACK`` months, never on a later
    day than ``now``.
    """
    moment = _months_back(now, int((MAX_MONTHS_BACK + 1) * rng.random()))
    moment = _with_day(moment, 1 + int(30.0 * rng.random()))
    if moment > now:
        moment = _with_day(moment, 1 + int(now.day * rng.random()))
    # Same-day instants may still fall later in the day than `now`.
    return moment.replace(
        hour=int(rng.random() * 24.0),
        minute=int(rng.random() * 60.0),
        second=int(rng.random() * 60.0),
        microsecond=0,
    )


def pick_movie_index(rng: random.Random, count: int) -> int:
    """Half-normal draw over ``range(count)``, concentrated at index 0."""
    if count < 1:
        raise ValueError(f"count must be at least 1, got {count}")
    spread = count / 2.0 - 1
    while True:
        index = int(abs(rng.gauss(0.0, 1.0)) * spread)
        if 0 <= index < count:
            return index


class TransactionGenerator:
    """
    Generates ticket sales for a movie list and a country -> cities table.
    """

    def __init__(self, movies: Sequence[Movie], geo: Mapping[str, List[str]]) -> None:
        self.movies = list(movies)
        self.geo = geo

    def generate(
        self,
        count: int = 1000,
        seed: int = 1,
        now: Optional[datetime] = None,
        rng: Optional[random.Random] = None,
    ) -> List[Transaction]:
        """
        Run ``count`` generation iterations and return the transactions produced,
        newest first.

        ``rng`` lets the caller share an already seeded stream; otherwise a fresh
        one seeded with ``seed`` is used.
        """
        rng = rng or random.Random(seed)
        now = now or datetime.now()
        # Working order carries over between iterations; ties keep it.
        ranking = list(self.movies)
        transactions: List[Transaction] = []
        rejected = 0

        for _ in range(count):
            instant = simulated_instant(rng, now)
            transaction = self._create(rng, instant, ranking)
            if transaction is None:
                rejected += 1
                continue
            transactions.append(transaction)

        transactions.sort(key=SortField.TIMESTAMP.key, reverse=True)
        log.info(
            "Transactions generated",
            extra={"transactions": len(transactions), "rejected": rejected, "seed": seed},
        )
        return transactions

    def _create(
        self, rng: random.Random, instant: datetime, ranking: List[Movie]
    ) -> Optional[Transaction]:
        if not ranking or not self.geo:
            return None

        ranking.sort(key=lambda movie: movie.score_at(instant), reverse=True)

        countries = list(self.geo.keys())
        rng.shuffle(countries)
        country = countries[0]
        # Only the first listed city of a country is ever used.
        city = self.geo[country][0]

        theater = rng.choice(THEATERS)
        room = rng.choice(ROOMS)

        movie = ranking[pick_movie_index(rng, len(ranking))]
        if movie.release_date is not None and movie.release_date >= instant:
            return None

        seats = int(1 + rng.random() * 3)
        price = seats * (BASE_SEAT_PRICE + rng.random() * SEAT_PRICE_JITTER)

        return Transaction(
            timestamp=instant,
            country=country,
            city=city,
            theater=theater,
            room=room,
            title=movie.title,
            seats=seats,
            price=price,
        )


__all__ = [
    "TransactionGenerator",
    "simulated_instant",
    "pick_movie_index",
    "THEATERS",
    "ROOMS",
]
