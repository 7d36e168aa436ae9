"""Seeded randomness and shuffling used by every session assembler."""

import time
from collections.abc import Callable, Sequence
from typing import TypeVar

T = TypeVar("T")

RandomSource = Callable[[], float]

_MULTIPLIER = 1664525
_INCREMENT = 1013904223
_MODULUS = 2**32


def seeded_random(seed: int) -> RandomSource:
    """
    Build a reproducible generator of floats in [0, 1).

    Linear congruential recurrence over 32-bit unsigned state. The seed is
    reduced to 32 bits first, so millisecond timestamps are valid seeds.

    Args:
        seed: Any integer

    Returns:
        Zero-argument function returning the next value on each call
    """
    state = seed % _MODULUS

    def rand() -> float:
        nonlocal state
        state = (_MULTIPLIER * state + _INCREMENT) % _MODULUS
        return state / _MODULUS

    return rand


def default_seed() -> int:
    """Time-derived seed (milliseconds) for callers that did not pass one."""
    return time.time_ns() // 1_000_000


def shuffle(items: Sequence[T], rand: RandomSource) -> list[T]:
    """
    Return a shuffled copy of ``items`` (Fisher-Yates, last index down to 1).

    Args:
        items: Sequence to permute; left untouched
        rand: Random source

    Returns:
        New list containing the same items
    """
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = int(rand() * (i + 1))
        result[i], result[j] = result[j], result[i]
    return result
