"""Pydantic models for question bank entries and assembled questions."""

from enum import Enum

from pydantic import BaseModel, Field, field_validator

CHOICE_KEYS: tuple[str, ...] = ("A", "B", "C", "D")


class Domain(str, Enum):
    """Top-level content domains of the certification."""

    BOS25 = "BOS25"
    CAAN = "CAAN"
    SNP = "SNP"
    RNRF = "RNRF"
    SDGR = "SDGR"
    HSAN = "HSAN"


ALL_DOMAINS: tuple[Domain, ...] = tuple(Domain)


class QuestionDifficulty(str, Enum):
    """Question difficulty levels."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


DIFFICULTY_ORDER: tuple[QuestionDifficulty, ...] = (
    QuestionDifficulty.EASY,
    QuestionDifficulty.MEDIUM,
    QuestionDifficulty.HARD,
)


class Rationale(BaseModel):
    """Short and deep explanation of the correct answer."""

    short: str = Field(default="", description="One-line explanation")
    deep: str = Field(default="", description="Full explanation with section reference")

    model_config = {"frozen": True}


class Source(BaseModel):
    """Where a question was curated from."""

    zip: str = Field(default="", description="Source archive name")
    document: str = Field(default="", description="Document inside the archive")
    section: str = Field(default="", description="Section reference")

    model_config = {"frozen": True}


class Question(BaseModel):
    """A single bank question with four labelled choices."""

    id: str = Field(..., min_length=1, description="Unique identifier for the question")
    domain: Domain = Field(..., description="Content domain")
    difficulty: QuestionDifficulty = Field(..., description="Question difficulty level")
    question: str = Field(..., min_length=1, description="The question prompt")
    choices: dict[str, str] = Field(
        ...,
        description="Multiple choice options (A, B, C, D)",
    )
    correct_answer: str = Field(
        ...,
        pattern="^[A-Da-d]$",
        description="The correct answer key (A, B, C, or D)",
    )
    rationale: Rationale = Field(default_factory=Rationale)
    source: Source | None = Field(None, description="Provenance metadata")
    tags: list[str] = Field(default_factory=list)

    @field_validator("choices")
    @classmethod
    def validate_choices(cls, v: dict[str, str]) -> dict[str, str]:
        """Ensure choices contains exactly A, B, C, D."""
        if set(v.keys()) != set(CHOICE_KEYS):
            raise ValueError("Choices must contain exactly keys A, B, C, D")
        for key, value in v.items():
            if not value or not value.strip():
                raise ValueError(f"Choice {key} cannot be empty")
        return v

    @field_validator("correct_answer")
    @classmethod
    def validate_correct_answer(cls, v: str) -> str:
        """Ensure correct answer is uppercase."""
        return v.upper()

    @property
    def correct_text(self) -> str:
        """Text of the correct choice."""
        return self.choices[self.correct_answer]

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "id": "SNP-014",
                "domain": "SNP",
                "difficulty": "medium",
                "question": "Which document sets the staffing ratio for a night shift?",
                "choices": {
                    "A": "The annual budget",
                    "B": "The staffing plan",
                    "C": "The visitor policy",
                    "D": "The menu cycle",
                },
                "correct_answer": "B",
                "rationale": {
                    "short": "Ratios live in the staffing plan.",
                    "deep": "The correct answer is B because in SNP, section 3.2 ...",
                },
                "source": {"zip": "dcf.zip", "document": "snp.pdf", "section": "3.2"},
                "tags": ["staffing"],
            }
        },
    }


class ShuffledChoice(BaseModel):
    """One choice in presentation order, keeping its original label."""

    key: str = Field(..., pattern="^[A-D]$")
    text: str

    model_config = {"frozen": True}


class AssembledQuestion(Question):
    """A question ready to present: choices reordered, correct index remapped."""

    shuffled_choices: list[ShuffledChoice] = Field(
        ...,
        min_length=4,
        max_length=4,
        description="Choices in presentation order",
    )
    remapped_correct_answer: int = Field(
        ...,
        ge=0,
        le=3,
        description="0-based index of the correct entry in shuffled_choices",
    )

    @staticmethod
    def presented_letter(index: int) -> str:
        """Letter shown to the learner for a presentation slot."""
        return CHOICE_KEYS[index]

    @property
    def correct_letter(self) -> str:
        """Letter of the correct answer as presented."""
        return self.presented_letter(self.remapped_correct_answer)
