"""Shared test fixtures and configuration for pytest."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from dcf_prep.config import get_settings
from dcf_prep.engine import seeded_random, with_shuffled_choices
from dcf_prep.models import (
    ALL_DOMAINS,
    AssembledSession,
    Domain,
    Question,
    QuestionDifficulty,
    Rationale,
    SessionMode,
    Source,
)

QuestionFactory = Callable[..., Question]


def build_question(
    qid: str,
    domain: Domain,
    difficulty: QuestionDifficulty = QuestionDifficulty.MEDIUM,
    correct_answer: str = "A",
) -> Question:
    """Build a bank question whose deep rationale follows the curated format."""
    return Question(
        id=qid,
        domain=domain,
        difficulty=difficulty,
        question=f"Question {qid}?",
        choices={key: f"{qid} choice {key}" for key in ("A", "B", "C", "D")},
        correct_answer=correct_answer,
        rationale=Rationale(
            short=f"{correct_answer} is right for {qid}.",
            deep=(
                f"The correct answer is {correct_answer} because in {domain.value}, "
                f"section 1.{qid[-1]} says so."
            ),
        ),
    )


def build_bank(per_domain: int, split: dict[QuestionDifficulty, int] | None = None) -> list[Question]:
    """
    Build a bank ordered domain by domain.

    Args:
        per_domain: Questions per domain
        split: Questions per difficulty within each domain (all medium if omitted)
    """
    split = split or {QuestionDifficulty.MEDIUM: per_domain}
    assert sum(split.values()) == per_domain
    bank = []
    for domain in ALL_DOMAINS:
        number = 0
        for difficulty, count in split.items():
            for _ in range(count):
                number += 1
                answer = "ABCD"[number % 4]
                bank.append(build_question(f"{domain.value}-{number:03d}", domain, difficulty, answer))
    return bank


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make every test read settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_question() -> QuestionFactory:
    """Factory for single bank questions."""
    return build_question


@pytest.fixture
def sample_question() -> Question:
    """Create a sample Question for testing."""
    return Question(
        id="SNP-014",
        domain=Domain.SNP,
        difficulty=QuestionDifficulty.EASY,
        question="Which document sets the staffing ratio for a night shift?",
        choices={
            "A": "The annual budget",
            "B": "The staffing plan",
            "C": "The visitor policy",
            "D": "The menu cycle",
        },
        correct_answer="B",
        rationale=Rationale(
            short="Ratios live in the staffing plan.",
            deep="The correct answer is B because in SNP, section 3.2 sets night ratios.",
        ),
        source=Source(zip="dcf.zip", document="snp.pdf", section="3.2"),
        tags=["staffing"],
    )


@pytest.fixture
def bank_60() -> list[Question]:
    """Ten medium questions per domain, in domain order."""
    return build_bank(10)


@pytest.fixture
def mixed_bank() -> list[Question]:
    """Ninety questions per domain split 27/36/27 easy/medium/hard."""
    return build_bank(
        90,
        {
            QuestionDifficulty.EASY: 27,
            QuestionDifficulty.MEDIUM: 36,
            QuestionDifficulty.HARD: 27,
        },
    )


@pytest.fixture
def valid_bank() -> list[Question]:
    """A bank meeting every curation rule: 84 per domain, 25/34/25 per domain."""
    return build_bank(
        84,
        {
            QuestionDifficulty.EASY: 25,
            QuestionDifficulty.MEDIUM: 34,
            QuestionDifficulty.HARD: 25,
        },
    )


@pytest.fixture
def sample_session(bank_60: list[Question]) -> AssembledSession:
    """A small practice session assembled with a fixed seed."""
    rand = seeded_random(7)
    return AssembledSession(
        title="Practice: SNP",
        mode=SessionMode.PRACTICE,
        seed=7,
        questions=[with_shuffled_choices(q, rand) for q in bank_60[20:24]],
        time_limit_minutes=0,
    )


@pytest.fixture
def bank_file(tmp_path: Path, bank_60: list[Question]) -> Path:
    """The 60-question bank written to disk."""
    path = tmp_path / "bank.json"
    path.write_text(
        json.dumps({"questions": [q.model_dump(mode="json") for q in bank_60]}),
        encoding="utf-8",
    )
    return path
