"""Pydantic models for learner progress and graded sessions."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from dcf_prep.numbers import round_half_up

from .session import SessionHistory, SessionMode


class DomainTally(BaseModel):
    """Correct answers out of questions asked for one domain."""

    total: int = Field(default=0, ge=0)
    correct: int = Field(default=0, ge=0)

    @property
    def accuracy(self) -> int:
        """Accuracy as a rounded percentage."""
        if not self.total:
            return 0
        return round_half_up(self.correct / self.total * 100)


class ExamRecord(BaseModel):
    """One completed exam."""

    when: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    score: int = Field(..., ge=0, le=100)
    by_domain: dict[str, DomainTally] = Field(default_factory=dict)


class StudyProgress(BaseModel):
    """Everything remembered about a single learner between sessions."""

    completed_modules: dict[str, bool] = Field(default_factory=dict)
    domain_accuracy: dict[str, int] = Field(default_factory=dict)
    weak_domains: list[str] = Field(default_factory=list)
    exam_history: list[ExamRecord] = Field(default_factory=list)
    total_answered: int = Field(default=0, ge=0)
    total_correct: int = Field(default=0, ge=0)
    history: SessionHistory = Field(default_factory=SessionHistory)

    @property
    def completed_module_count(self) -> int:
        """Number of modules currently marked complete."""
        return sum(1 for done in self.completed_modules.values() if done)


class SessionResult(BaseModel):
    """Outcome of one graded session."""

    mode: SessionMode
    correct: int = Field(..., ge=0)
    total: int = Field(..., ge=0)
    score: int = Field(..., ge=0, le=100)
    by_domain: dict[str, DomainTally] = Field(default_factory=dict)
    answers: dict[str, int | None] = Field(
        default_factory=dict,
        description="Question id to chosen presentation index (None if unanswered)",
    )
    missed_question_ids: list[str] = Field(default_factory=list)
