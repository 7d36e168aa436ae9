"""Application settings and configuration."""

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Load .env file if present
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Storage
    bank_path: Path = Field(
        default=Path("data/question-bank.json"),
        description="Question bank JSON file",
        validation_alias="DCF_BANK_PATH",
    )
    progress_path: Path = Field(
        default=Path.home() / ".dcf_prep" / "progress.json",
        description="Single-user progress file",
        validation_alias="DCF_PROGRESS_PATH",
    )
    output_dir: str = Field(
        default="output",
        description="Directory for exported session documents",
        validation_alias="DCF_OUTPUT_DIR",
    )

    log_level: str = Field(
        default="WARNING",
        description="Log level for the dcf_prep logger",
        validation_alias="DCF_LOG_LEVEL",
    )

    # History and progress
    history_limit: int = Field(
        default=120,
        ge=0,
        description="Recent question ids remembered per session mode",
        validation_alias="DCF_HISTORY_LIMIT",
    )
    weak_domain_threshold: int = Field(
        default=70,
        ge=0,
        le=100,
        description="Domains with accuracy below this are weak",
        validation_alias="DCF_WEAK_DOMAIN_THRESHOLD",
    )

    # Session sizes
    practice_questions: int = Field(
        default=10,
        ge=1,
        description="Default practice session size",
        validation_alias="DCF_PRACTICE_QUESTIONS",
    )
    adaptive_questions: int = Field(
        default=12,
        ge=1,
        description="Default adaptive session size",
        validation_alias="DCF_ADAPTIVE_QUESTIONS",
    )
    mini_exam_questions: int = Field(
        default=15,
        ge=1,
        description="Questions in a mini exam",
        validation_alias="DCF_MINI_EXAM_QUESTIONS",
    )
    mini_exam_minutes: int = Field(
        default=20,
        ge=0,
        description="Time limit for a mini exam (0 = untimed)",
        validation_alias="DCF_MINI_EXAM_MINUTES",
    )
    full_exam_questions: int = Field(
        default=30,
        ge=1,
        description="Questions in a full exam",
        validation_alias="DCF_FULL_EXAM_QUESTIONS",
    )
    full_exam_minutes: int = Field(
        default=45,
        ge=0,
        description="Time limit for a full exam (0 = untimed)",
        validation_alias="DCF_FULL_EXAM_MINUTES",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    def exam_preset(self, size: str) -> tuple[int, int]:
        """Return (questions, minutes) for the ``mini`` or ``full`` exam."""
        if size == "mini":
            return self.mini_exam_questions, self.mini_exam_minutes
        return self.full_exam_questions, self.full_exam_minutes


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings object with loaded configuration
    """
    return Settings()
