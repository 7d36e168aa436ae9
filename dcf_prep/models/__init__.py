"""Data models for the question bank, sessions and progress."""

from .progress import (
    DomainTally,
    ExamRecord,
    SessionResult,
    StudyProgress,
)
from .question import (
    ALL_DOMAINS,
    CHOICE_KEYS,
    DIFFICULTY_ORDER,
    AssembledQuestion,
    Domain,
    Question,
    QuestionDifficulty,
    Rationale,
    ShuffledChoice,
    Source,
)
from .session import (
    AdaptiveConfig,
    AssembledSession,
    DifficultyMix,
    ExamConfig,
    PracticeConfig,
    SessionHistory,
    SessionMode,
)

__all__ = [
    "ALL_DOMAINS",
    "CHOICE_KEYS",
    "DIFFICULTY_ORDER",
    "Domain",
    "QuestionDifficulty",
    "Rationale",
    "Source",
    "Question",
    "ShuffledChoice",
    "AssembledQuestion",
    "SessionHistory",
    "PracticeConfig",
    "DifficultyMix",
    "ExamConfig",
    "AdaptiveConfig",
    "AssembledSession",
    # Progress tracking
    "SessionMode",
    "DomainTally",
    "ExamRecord",
    "StudyProgress",
    "SessionResult",
]
