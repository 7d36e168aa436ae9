"""Weighted random choice."""

from collections.abc import Sequence
from typing import TypeVar

from .random_source import RandomSource

T = TypeVar("T")


def weighted_pick(items: Sequence[T], weights: Sequence[float], rand: RandomSource) -> T | None:
    """
    Pick one item with probability proportional to its weight.

    Falls back to a uniform pick when the weights sum to zero or less. Returns
    None for an empty list so callers can treat an exhausted bucket as a skip.

    Args:
        items: Candidates
        weights: Non-negative weight per candidate
        rand: Random source

    Returns:
        The chosen item, or None if there were no candidates
    """
    if len(items) != len(weights):
        raise ValueError(f"Got {len(items)} items but {len(weights)} weights")
    if not items:
        return None

    total = sum(weights)
    if total <= 0:
        return items[int(rand() * len(items))]

    r = rand() * total
    for item, weight in zip(items, weights):
        r -= weight
        if r <= 0:
            return item
    # Float rounding can leave a sliver of r behind
    return items[-1]
