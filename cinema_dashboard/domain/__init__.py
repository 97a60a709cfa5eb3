"""
Domain package for the cinema dashboard backend.

Exports the record types and the scoring function shared by the catalog, the
generator and the aggregation queries. Keep this package free of I/O.
"""

from cinema_dashboard.domain.models import DailyRevenue, Movie, TitleRevenue, Transaction
from cinema_dashboard.domain.scoring import score_at

__all__ = [
    "DailyRevenue",
    "Movie",
    "TitleRevenue",
    "Transaction",
    "score_at",
]
