"""Learner progress: storage, grading and readiness."""

from .repository import (
    InMemoryProgressRepository,
    JsonProgressRepository,
    ProgressRepository,
)
from .scoring import (
    apply_session_result,
    grade_session,
    pass_likelihood,
    readiness_score,
    toggle_module,
)

__all__ = [
    "ProgressRepository",
    "JsonProgressRepository",
    "InMemoryProgressRepository",
    "grade_session",
    "apply_session_result",
    "readiness_score",
    "pass_likelihood",
    "toggle_module",
]
