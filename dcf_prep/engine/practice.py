"""Practice session assembly: one domain, unseen questions first."""

import logging
from collections.abc import Sequence

from dcf_prep.models import AssembledQuestion, PracticeConfig, Question, SessionHistory

from .presenter import with_shuffled_choices
from .random_source import default_seed, seeded_random, shuffle

logger = logging.getLogger(__name__)


def assemble_practice_session(
    bank: Sequence[Question],
    history: SessionHistory,
    config: PracticeConfig,
    seed: int | None = None,
) -> list[AssembledQuestion]:
    """
    Build a single-domain practice session that avoids recent repeats.

    Questions not served in recent practice sessions fill the pool first; recent
    ones are only added when there are not enough fresh questions. The result is
    shorter than ``config.total`` when the domain has fewer questions.

    Args:
        bank: Full question bank
        history: Recently served ids (not modified)
        config: Domain and question count
        seed: Seed for reproducible output; time-derived when omitted

    Returns:
        Presentable questions in session order
    """
    if seed is None:
        seed = default_seed()
    rand = seeded_random(seed)

    recent = set(history.recent_practice_question_ids)
    domain_pool = [q for q in bank if q.domain == config.domain]

    pool = [q for q in domain_pool if q.id not in recent]
    if len(pool) < config.total:
        seen = [q for q in domain_pool if q.id in recent]
        logger.debug(
            "Only %d fresh %s questions for %d slots; adding %d seen",
            len(pool),
            config.domain.value,
            config.total,
            len(seen),
        )
        pool = pool + seen

    selected = shuffle(pool, rand)[: config.total]
    if len(selected) < config.total:
        logger.info(
            "Practice pool for %s holds %d questions, fewer than the %d requested",
            config.domain.value,
            len(selected),
            config.total,
        )

    return [with_shuffled_choices(q, rand) for q in selected]
