"""Adaptive session assembly: weak domains and harder questions first."""

import logging
from collections.abc import Sequence

from dcf_prep.models import (
    AdaptiveConfig,
    AssembledQuestion,
    Question,
    QuestionDifficulty,
    StudyProgress,
)

from .presenter import with_shuffled_choices
from .random_source import default_seed, seeded_random, shuffle

logger = logging.getLogger(__name__)

_DIFFICULTY_RANK = {
    QuestionDifficulty.EASY: 1,
    QuestionDifficulty.MEDIUM: 2,
    QuestionDifficulty.HARD: 3,
}


def assemble_adaptive_session(
    bank: Sequence[Question],
    progress: StudyProgress,
    config: AdaptiveConfig,
    seed: int | None = None,
) -> list[AssembledQuestion]:
    """
    Build a session targeting the learner's weak domains.

    Questions from weak domains come first, and within each group harder
    questions come before easier ones. The pool is shuffled before sorting so
    equal-ranked questions vary between seeds.

    Args:
        bank: Full question bank
        progress: Learner progress (only ``weak_domains`` is read)
        config: Size and optional domain filter
        seed: Seed for reproducible output; time-derived when omitted

    Returns:
        Presentable questions in session order
    """
    if seed is None:
        seed = default_seed()
    rand = seeded_random(seed)

    pool = [q for q in bank if config.domain is None or q.domain == config.domain]
    weak = set(progress.weak_domains)
    logger.debug("Adaptive session targeting weak domains: %s", sorted(weak) or "none")

    ranked = sorted(
        shuffle(pool, rand),
        key=lambda q: (q.domain.value not in weak, -_DIFFICULTY_RANK[q.difficulty]),
    )
    return [with_shuffled_choices(q, rand) for q in ranked[: config.total]]
