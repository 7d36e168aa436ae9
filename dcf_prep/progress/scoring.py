"""Session grading and the readiness numbers shown on the dashboard."""

from collections.abc import Iterable, Mapping, Sequence

from dcf_prep.models import (
    AssembledQuestion,
    DomainTally,
    ExamRecord,
    SessionMode,
    SessionResult,
    StudyProgress,
)
from dcf_prep.numbers import round_half_up

DEFAULT_WEAK_THRESHOLD = 70
# Exams at or above this score count towards the consistency boost
PASSING_EXAM_SCORE = 70
MAX_PASS_LIKELIHOOD = 99


def grade_session(
    questions: Sequence[AssembledQuestion],
    answers: Mapping[str, int | None],
    mode: SessionMode,
) -> SessionResult:
    """
    Grade answers given as presentation indexes.

    Args:
        questions: The session as presented
        answers: Question id to chosen index; missing or None means unanswered
        mode: Kind of session

    Returns:
        Score, per-domain tallies and the ids that were missed
    """
    by_domain: dict[str, DomainTally] = {}
    recorded: dict[str, int | None] = {}
    missed: list[str] = []
    correct = 0

    for question in questions:
        choice = answers.get(question.id)
        recorded[question.id] = choice
        tally = by_domain.setdefault(question.domain.value, DomainTally())
        tally.total += 1
        if choice == question.remapped_correct_answer:
            correct += 1
            tally.correct += 1
        else:
            missed.append(question.id)

    total = len(questions)
    return SessionResult(
        mode=mode,
        correct=correct,
        total=total,
        score=round_half_up(correct / total * 100) if total else 0,
        by_domain=by_domain,
        answers=recorded,
        missed_question_ids=missed,
    )


def _remember(recent: list[str], served: Iterable[str], limit: int) -> list[str]:
    """Append served ids, newest last, without duplicates, keeping ``limit`` ids."""
    served = list(served)
    served_set = set(served)
    merged = [qid for qid in recent if qid not in served_set] + served
    return merged[-limit:] if limit > 0 else []


def apply_session_result(
    progress: StudyProgress,
    result: SessionResult,
    weak_threshold: int = DEFAULT_WEAK_THRESHOLD,
    history_limit: int = 120,
) -> StudyProgress:
    """
    Fold a graded session into the learner's progress.

    Domain accuracy is replaced for the domains this session touched, weak
    domains are recomputed from it, exams are added to the exam history, and the
    served ids are remembered so the next session can avoid them.

    Args:
        progress: Progress before the session (not modified)
        result: Graded session
        weak_threshold: Accuracy below which a domain is weak
        history_limit: Recent ids kept per session mode

    Returns:
        Updated copy of the progress
    """
    updated = progress.model_copy(deep=True)
    updated.total_answered += result.total
    updated.total_correct += result.correct

    for domain, tally in result.by_domain.items():
        updated.domain_accuracy[domain] = tally.accuracy
    updated.weak_domains = [
        domain
        for domain, accuracy in updated.domain_accuracy.items()
        if accuracy < weak_threshold
    ]

    served = list(result.answers)
    if result.mode == SessionMode.EXAM:
        updated.exam_history.append(
            ExamRecord(score=result.score, by_domain=result.by_domain)
        )
        updated.history.recent_exam_question_ids = _remember(
            updated.history.recent_exam_question_ids, served, history_limit
        )
    else:
        updated.history.recent_practice_question_ids = _remember(
            updated.history.recent_practice_question_ids, served, history_limit
        )

    return updated


def readiness_score(progress: StudyProgress) -> int:
    """Overall percentage of questions answered correctly."""
    if not progress.total_answered:
        return 0
    return round_half_up(progress.total_correct / progress.total_answered * 100)


def pass_likelihood(progress: StudyProgress) -> int:
    """
    Estimate the chance of passing, as a percentage.

    85% of readiness plus 3 points for each of the last five exams scored at
    70 or better (capped at 15), clamped to 0-99.
    """
    recent_passes = sum(
        1 for record in progress.exam_history[-5:] if record.score >= PASSING_EXAM_SCORE
    )
    consistency_boost = min(15, recent_passes * 3)
    estimate = round_half_up(readiness_score(progress) * 0.85 + consistency_boost)
    return max(0, min(MAX_PASS_LIKELIHOOD, estimate))


def toggle_module(progress: StudyProgress, module_id: str, completed: bool | None = None) -> StudyProgress:
    """
    Mark a study module complete or incomplete.

    Args:
        progress: Current progress (not modified)
        module_id: Module identifier
        completed: New state; flips the current state when None

    Returns:
        Updated copy of the progress
    """
    updated = progress.model_copy(deep=True)
    current = updated.completed_modules.get(module_id, False)
    updated.completed_modules[module_id] = (not current) if completed is None else completed
    return updated
