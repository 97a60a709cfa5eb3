"""
Data context backing the dashboard.

Owns the movie catalog, the geo table, the transaction store and the random
stream, and exposes the query surface the UI layer consumes.

Usage:
    from cinema_dashboard.context import DashboardContext

    ctx = DashboardContext()
    ctx.reload()
    print(ctx.total_revenue(), ctx.revenue_by_title())

Every `reload()` reseeds the random stream first, so two reloads against the
same cached movie list and the same clock produce the same transactions.
"""

from __future__ import annotations

import random
from datetime import datetime
from typing import List, Optional

from cinema_dashboard import aggregator
from cinema_dashboard.catalog import MovieCatalog
from cinema_dashboard.config import Settings, get_settings
from cinema_dashboard.domain.models import DailyRevenue, Movie, TitleRevenue, Transaction
from cinema_dashboard.errors import CatalogLoadError
from cinema_dashboard.generator import TransactionGenerator
from cinema_dashboard.geo import GeoTable, load_geo_table
from cinema_dashboard.infrastructure.movie_source import CachedMovieSource, MovieSource
from cinema_dashboard.store import TransactionStore
from cinema_dashboard.utils.logging import get_logger

log = get_logger(__name__)


class DashboardContext:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        source: Optional[MovieSource] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.catalog = MovieCatalog(source or CachedMovieSource(self.settings))
        self.geo: GeoTable = {}
        self.transactions = TransactionStore()
        self.rng = random.Random()

    def reseed(self) -> None:
        self.rng.seed(self.settings.random_seed)

    def load_movies(self, now: Optional[datetime] = None) -> List[Movie]:
        """
        Load the catalog, honouring the configured failure policy.

        In ``tolerant`` mode a failed load is logged and leaves the catalog empty;
        in ``strict`` mode the CatalogLoadError propagates.
        """
        try:
            return self.catalog.load(self.rng, now)
        except CatalogLoadError:
            if self.settings.failure_policy == "strict":
                raise
            log.exception(
                "Movie catalog load failed; continuing with an empty catalog",
                extra={"failure_policy": self.settings.failure_policy},
            )
            return []

    def reload(self, now: Optional[datetime] = None) -> None:
        """Reseed, reload reference data and regenerate all transactions."""
        self.reseed()
        self.load_movies(now)
        self.geo = load_geo_table(self.settings.cities_path)

        generator = TransactionGenerator(self.catalog.movies, self.geo)
        self.transactions = TransactionStore(
            generator.generate(
                count=self.settings.transaction_count,
                seed=self.settings.random_seed,
                now=now,
                rng=self.rng,
            )
        )

    # ------------------------------------------------------------------
    # Query surface
    # ------------------------------------------------------------------
    def movies(self) -> List[Movie]:
        return self.catalog.movies

    def movie_for_title(self, title: str) -> Optional[Movie]:
        return self.catalog.find_by_title(title)

    def total_revenue(self) -> float:
        return aggregator.total_revenue(self.transactions)

    def revenue_by_title(self, limit: Optional[int] = None) -> List[TitleRevenue]:
        if limit is None:
            limit = self.settings.top_titles
        return aggregator.revenue_by_title(self.transactions, limit)

    def revenue_for_title(self, title: str) -> List[DailyRevenue]:
        return aggregator.daily_revenue_for_title(self.transactions, title)

    def recent_transactions(self, limit: int = 20) -> List[Transaction]:
        return aggregator.recent_transactions(self.transactions, limit)

    def snapshot(self) -> dict:
        """Aggregate views as plain JSON-ready data."""
        top = self.revenue_by_title()
        return {
            "seed": self.settings.random_seed,
            "movies": len(self.catalog),
            "transactions": len(self.transactions),
            "total_revenue": round(self.total_revenue(), 2),
            "revenue_by_title": [
                {"title": row.title, "revenue": round(row.revenue, 2)} for row in top
            ],
            "daily_revenue": {
                row.title: [
                    {"date": day.label, "revenue": round(day.revenue, 2)}
                    for day in self.revenue_for_title(row.title)
                ]
                for row in top
            },
        }


__all__ = ["DashboardContext"]
