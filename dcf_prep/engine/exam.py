"""Exam session assembly: mixed domains, difficulty-balanced, few repeats."""

import logging
from collections import Counter
from collections.abc import Sequence

from dcf_prep.models import (
    ALL_DOMAINS,
    DIFFICULTY_ORDER,
    AssembledQuestion,
    DifficultyMix,
    Domain,
    ExamConfig,
    Question,
    QuestionDifficulty,
    SessionHistory,
)
from dcf_prep.numbers import round_half_up

from .presenter import with_shuffled_choices
from .random_source import RandomSource, default_seed, seeded_random, shuffle
from .selection import weighted_pick

logger = logging.getLogger(__name__)

# Weight multiplier for questions served in a recent exam
REPEAT_PENALTY = 0.1
# Keeps zero-weight domains selectable, just unlikely
MIN_WEIGHT = 0.0001


def difficulty_targets(total: int, mix: DifficultyMix) -> dict[QuestionDifficulty, int]:
    """
    Split an exam size across difficulties.

    Easy and medium are rounded half up and capped so they never exceed the
    exam size together (0.5/0.5 of 5 would otherwise give 3 + 3). Hard takes
    whatever is left.

    Args:
        total: Exam size
        mix: Difficulty fractions

    Returns:
        Question count per difficulty
    """
    easy = min(total, round_half_up(total * mix.easy))
    medium = min(total - easy, round_half_up(total * mix.medium))
    return {
        QuestionDifficulty.EASY: easy,
        QuestionDifficulty.MEDIUM: medium,
        QuestionDifficulty.HARD: max(0, total - easy - medium),
    }


def _pick_by_difficulty(
    bank: Sequence[Question],
    targets: dict[QuestionDifficulty, int],
    weights: dict[Domain, float],
    recent_exam: set[str],
    rand: RandomSource,
) -> list[Question]:
    """
    Fill difficulty slots by weighted sampling without replacement.

    Slots whose difficulty bucket runs dry are skipped, then refilled from the
    rest of the bank with the same weights. The result is only short when the
    whole bank is used up.

    Skipping without refilling would leave a single-difficulty bank short of
    the requested size, so keep the refill.
    """
    picked: list[Question] = []
    picked_ids: set[str] = set()

    def adjusted_weight(question: Question) -> float:
        penalty = REPEAT_PENALTY if question.id in recent_exam else 1
        return max(MIN_WEIGHT, weights[question.domain] * penalty)

    def pick_from(candidates: list[Question]) -> Question | None:
        choice = weighted_pick(candidates, [adjusted_weight(q) for q in candidates], rand)
        if choice is not None:
            picked.append(choice)
            picked_ids.add(choice.id)
        return choice

    skipped = 0
    for difficulty in DIFFICULTY_ORDER:
        for _ in range(targets[difficulty]):
            candidates = [
                q for q in bank if q.difficulty == difficulty and q.id not in picked_ids
            ]
            if pick_from(candidates) is None:
                logger.debug("No %s questions left; skipping slot", difficulty.value)
                skipped += 1

    if skipped:
        logger.debug("Backfilling %d skipped slots from other difficulties", skipped)
    for _ in range(skipped):
        if pick_from([q for q in bank if q.id not in picked_ids]) is None:
            break

    return picked


def _ensure_domain_coverage(
    bank: Sequence[Question],
    picked: list[Question],
    total: int,
) -> list[Question]:
    """
    Swap questions in so each domain appears at least once.

    Only applies when the exam has room for every domain. The evicted question
    is the first picked one whose domain keeps another question in the exam.
    When no such question exists (fewer picks than domains) the first picked
    question from any other domain goes, which can drop that domain instead.

    Evicting the first picked question of any other domain regardless of its
    count can remove that domain's only question, so keep the count check.
    """
    if total < len(ALL_DOMAINS):
        return picked

    picked = list(picked)
    picked_ids = {q.id for q in picked}
    counts = Counter(q.domain for q in picked)

    for domain in ALL_DOMAINS:
        if counts[domain]:
            continue
        candidate = next(
            (q for q in bank if q.domain == domain and q.id not in picked_ids), None
        )
        replacement_index = next(
            (i for i, q in enumerate(picked) if q.domain != domain and counts[q.domain] > 1),
            None,
        )
        if replacement_index is None:
            replacement_index = next(
                (i for i, q in enumerate(picked) if q.domain != domain), None
            )
            if replacement_index is not None and candidate is not None:
                logger.debug(
                    "Coverage swap for %s removes the only %s question",
                    domain.value,
                    picked[replacement_index].domain.value,
                )
        if replacement_index is None or candidate is None:
            logger.debug("Cannot add missing domain %s", domain.value)
            continue

        evicted = picked[replacement_index]
        logger.debug(
            "Coverage swap: %s (%s) out, %s (%s) in",
            evicted.id,
            evicted.domain.value,
            candidate.id,
            domain.value,
        )
        picked_ids.discard(evicted.id)
        counts[evicted.domain] -= 1
        picked[replacement_index] = candidate
        picked_ids.add(candidate.id)
        counts[domain] += 1

    return picked


def assemble_exam_session(
    bank: Sequence[Question],
    history: SessionHistory,
    config: ExamConfig,
    seed: int | None = None,
) -> list[AssembledQuestion]:
    """
    Build a mixed-domain exam.

    Slots are filled per difficulty (easy, medium, hard) by weighted sampling:
    each candidate weighs its domain weight, cut to a tenth if it appeared in a
    recent exam. A coverage pass then makes sure every domain is represented when
    the exam is large enough. Slots of an exhausted difficulty are refilled
    from the other difficulties; the result is only short when the bank runs out.

    Args:
        bank: Full question bank
        history: Recently served ids (not modified)
        config: Size, domain weights and difficulty mix
        seed: Seed for reproducible output; time-derived when omitted

    Returns:
        At most ``config.total`` presentable questions
    """
    if seed is None:
        seed = default_seed()
    rand = seeded_random(seed)

    recent_exam = set(history.recent_exam_question_ids)
    weights = config.resolved_weights()
    targets = difficulty_targets(config.total, config.resolved_mix())
    logger.debug(
        "Exam targets: %s",
        {difficulty.value: count for difficulty, count in targets.items()},
    )

    picked = _pick_by_difficulty(bank, targets, weights, recent_exam, rand)
    picked = _ensure_domain_coverage(bank, picked, config.total)

    if len(picked) < config.total:
        logger.info(
            "Exam assembled with %d of %d requested questions", len(picked), config.total
        )

    return [with_shuffled_choices(q, rand) for q in shuffle(picked, rand)[: config.total]]
