from __future__ import annotations

from typing import Callable, Iterable, List, Mapping, Tuple, TypeVar

T = TypeVar("T")


def top_scorers(scores: Mapping[str, int]) -> Tuple[int, List[str]]:
    """
    Highest score and every id that reached it.

    Ties are kept: all ids sharing the maximum are returned, in the
    mapping's order. A maximum of zero or less counts as nobody scoring,
    so the result is ``(0, [])``.
    """
    best = max(scores.values(), default=0)
    if best <= 0:
        return 0, []
    return best, [key for key, value in scores.items() if value == best]


def rank_by(items: Iterable[T], key: Callable[[T], int]) -> List[T]:
    """Sort highest first; equal keys keep their incoming order."""
    return sorted(items, key=key, reverse=True)
