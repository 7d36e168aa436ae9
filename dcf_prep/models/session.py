"""Pydantic models for session history and assembly configuration."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field, model_validator

from .question import ALL_DOMAINS, AssembledQuestion, Domain, QuestionDifficulty


class SessionMode(str, Enum):
    """Kind of session being assembled or graded."""

    PRACTICE = "practice"
    EXAM = "exam"
    ADAPTIVE = "adaptive"


class SessionHistory(BaseModel):
    """Question ids served recently, kept by the caller between sessions."""

    recent_exam_question_ids: list[str] = Field(
        default_factory=list,
        description="Ids used in recent exam sessions",
    )
    recent_practice_question_ids: list[str] = Field(
        default_factory=list,
        description="Ids used in recent practice sessions",
    )


class PracticeConfig(BaseModel):
    """Single-domain practice session request."""

    domain: Domain = Field(..., description="Domain to practise")
    total: int = Field(..., ge=0, description="Number of questions wanted")


class DifficultyMix(BaseModel):
    """Fraction of an exam drawn from each difficulty."""

    easy: float = Field(default=0.3, ge=0.0, le=1.0)
    medium: float = Field(default=0.4, ge=0.0, le=1.0)
    hard: float = Field(default=0.3, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def check_total(self) -> "DifficultyMix":
        """Fractions may leave room to spare but never add up past 1."""
        if self.easy + self.medium + self.hard > 1 + 1e-9:
            raise ValueError("Difficulty fractions must not add up to more than 1")
        return self

    def fraction(self, difficulty: QuestionDifficulty) -> float:
        """Return the fraction configured for one difficulty."""
        return getattr(self, difficulty.value)


class ExamConfig(BaseModel):
    """Mixed-domain exam request."""

    total: int = Field(..., ge=0, description="Number of questions wanted")
    domain_weights: dict[Domain, float] | None = Field(
        None,
        description="Relative weight per domain; missing domains weigh 1",
    )
    difficulty_mix: DifficultyMix | None = Field(
        None,
        description="Difficulty fractions; defaults to 30/40/30",
    )

    def resolved_weights(self) -> dict[Domain, float]:
        """Weight for every domain, with overrides applied."""
        overrides = self.domain_weights or {}
        return {domain: overrides.get(domain, 1.0) for domain in ALL_DOMAINS}

    def resolved_mix(self) -> DifficultyMix:
        """Difficulty mix with defaults filled in."""
        return self.difficulty_mix or DifficultyMix()

    model_config = {
        "json_schema_extra": {
            "example": {
                "total": 30,
                "domain_weights": {"SNP": 2, "HSAN": 0.5},
                "difficulty_mix": {"easy": 0.2, "medium": 0.5, "hard": 0.3},
            }
        }
    }


class AdaptiveConfig(BaseModel):
    """Weak-area session request."""

    total: int = Field(..., ge=0, description="Number of questions wanted")
    domain: Domain | None = Field(None, description="Restrict to one domain")


class AssembledSession(BaseModel):
    """An assembled session as handed to the presentation layer."""

    title: str = Field(..., min_length=1, description="Session title")
    mode: SessionMode = Field(..., description="Kind of session")
    seed: int = Field(..., description="Seed the session was assembled with")
    questions: list[AssembledQuestion] = Field(default_factory=list)
    time_limit_minutes: int = Field(default=0, ge=0, description="0 means untimed")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def total_questions(self) -> int:
        """Number of questions in the session."""
        return len(self.questions)

    def domain_counts(self) -> dict[str, int]:
        """Questions per domain, in domain order, omitting empty domains."""
        counts = {d.value: 0 for d in ALL_DOMAINS}
        for question in self.questions:
            counts[question.domain.value] += 1
        return {domain: count for domain, count in counts.items() if count}
