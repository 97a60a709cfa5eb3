"""
Cinema Dashboard Data - synthetic ticket sales backing a sample dashboard UI.

This package provides:

- A movie catalog fetched from the Rotten Tomatoes "in theaters" list and
  cached locally for 24 hours
- A country -> cities reference table
- A deterministic, seeded generator of ticket-sale transactions
- Aggregation queries (total revenue, revenue by title, daily revenue)
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from cinema_dashboard.config import Settings, get_settings
from cinema_dashboard.context import DashboardContext
from cinema_dashboard.domain import DailyRevenue, Movie, TitleRevenue, Transaction, score_at
from cinema_dashboard.errors import CatalogLoadError, DashboardError
from cinema_dashboard.store import SortField, TransactionStore
from cinema_dashboard.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Data context
    "DashboardContext",
    # Domain
    "DailyRevenue",
    "Movie",
    "TitleRevenue",
    "Transaction",
    "score_at",
    "SortField",
    "TransactionStore",
    # Errors
    "CatalogLoadError",
    "DashboardError",
    # Logging
    "configure_logging",
    "get_logger",
]
