"""
Reporting views derived from a TransactionStore.

Every function scans the store on each call; nothing is cached, so results
always reflect the store's current contents.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List

from cinema_dashboard.domain.models import DailyRevenue, TitleRevenue, Transaction

DEFAULT_TOP_TITLES = 10


def total_revenue(transactions: Iterable[Transaction]) -> float:
    return sum(t.price for t in transactions)


def revenue_by_title(
    transactions: Iterable[Transaction], limit: int = DEFAULT_TOP_TITLES
) -> List[TitleRevenue]:
    """
    Revenue per title, highest first, truncated to ``limit`` rows.

    Transactions without a title are ignored.
    """
    totals: Dict[str, float] = defaultdict(float)
    for t in transactions:
        if not t.title:
            continue
        totals[t.title] += t.price

    rows = [TitleRevenue(title=title, revenue=revenue) for title, revenue in totals.items()]
    rows.sort(key=lambda row: row.revenue, reverse=True)
    return rows[:limit]


def daily_revenue_for_title(transactions: Iterable[Transaction], title: str) -> List[DailyRevenue]:
    """
    Revenue per calendar day for one title, oldest day first.
    """
    totals: Dict[date, float] = defaultdict(float)
    for t in transactions:
        if t.title == title:
            totals[t.timestamp.date()] += t.price

    return [DailyRevenue(day=day, revenue=totals[day]) for day in sorted(totals)]


def recent_transactions(transactions: Iterable[Transaction], limit: int = 20) -> List[Transaction]:
    return sorted(transactions, key=lambda t: t.timestamp, reverse=True)[:limit]


__all__ = [
    "total_revenue",
    "revenue_by_title",
    "daily_revenue_for_title",
    "recent_transactions",
    "DEFAULT_TOP_TITLES",
]
