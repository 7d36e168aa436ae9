"""Small numeric helpers shared by the engine and grading."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3, not 2)."""
    return math.floor(value + 0.5)
