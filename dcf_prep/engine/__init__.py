"""Session assembly engine."""

from .adaptive import assemble_adaptive_session
from .exam import assemble_exam_session, difficulty_targets
from .practice import assemble_practice_session
from .presenter import with_shuffled_choices
from .random_source import default_seed, seeded_random, shuffle
from .selection import weighted_pick

__all__ = [
    "seeded_random",
    "default_seed",
    "shuffle",
    "weighted_pick",
    "with_shuffled_choices",
    "assemble_practice_session",
    "assemble_exam_session",
    "assemble_adaptive_session",
    "difficulty_targets",
]
