from __future__ import annotations

from operator import attrgetter
from typing import Callable, Iterable, Optional, TypeVar

T = TypeVar("T")

by_score: Callable = attrgetter("score")
by_match_rate: Callable = attrgetter("match_rate")


def rank(items: Iterable[T], key: Callable[[T], float] = by_score) -> list[T]:
    """Sort items by ``key`` descending.

    Items with equal keys keep their input order. The items themselves are
    returned untouched, so any detail they carry survives ranking.
    """
    return sorted(items, key=key, reverse=True)


def top(items: Iterable[T], limit: Optional[int]) -> list[T]:
    """Cap an already ranked sequence. ``None`` means no cap."""
    rows = list(items)
    if limit is None:
        return rows
    return rows[: max(limit, 0)]
