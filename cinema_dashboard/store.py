"""
In-memory, ordered collection of transactions.

Sorting is driven by the SortField enum; each field maps to the Transaction
attribute it orders by. Multi-field sorts apply a per-field direction.
"""

from __future__ import annotations

import enum
from operator import attrgetter
from typing import Iterable, Iterator, List, Sequence, Union

from cinema_dashboard.domain.models import Transaction


class SortField(str, enum.Enum):
    TIMESTAMP = "timestamp"
    COUNTRY = "country"
    CITY = "city"
    THEATER = "theater"
    ROOM = "room"
    TITLE = "title"
    SEATS = "seats"
    PRICE = "price"

    @property
    def key(self):
        return attrgetter(self.value)


class TransactionStore:
    """
    Ordered sequence of Transaction records.
    """

    def __init__(self, transactions: Iterable[Transaction] = ()) -> None:
        self._items: List[Transaction] = list(transactions)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self._items)

    def __getitem__(self, index):
        return self._items[index]

    def add(self, transaction: Transaction) -> None:
        self._items.append(transaction)

    def extend(self, transactions: Iterable[Transaction]) -> None:
        self._items.extend(transactions)

    def clear(self) -> None:
        self._items.clear()

    def items(self) -> List[Transaction]:
        return list(self._items)

    def sort(
        self,
        fields: Union[SortField, Sequence[SortField]] = SortField.TIMESTAMP,
        ascending: Union[bool, Sequence[bool]] = True,
    ) -> None:
        """
        Re-sort in place. ``ascending`` is one flag for all fields or one per field.

        The first field is the primary key; ties fall through to the next one.
        """
        if isinstance(fields, SortField):
            fields = [fields]
        if isinstance(ascending, bool):
            ascending = [ascending] * len(fields)
        if len(ascending) != len(fields):
            raise ValueError("ascending must have one flag per sort field")

        # Stable sorts, least significant key first.
        for field, asc in reversed(list(zip(fields, ascending))):
            self._items.sort(key=field.key, reverse=not asc)


__all__ = ["SortField", "TransactionStore"]
