"""Integrity checks run on a bank before it is trusted for sessions."""

from collections.abc import Sequence

from pydantic import BaseModel, Field

from dcf_prep.errors import BankValidationError
from dcf_prep.models import ALL_DOMAINS, DIFFICULTY_ORDER, DifficultyMix, Question


class BankRules(BaseModel):
    """Thresholds a curated bank has to meet."""

    min_total: int = Field(default=500, ge=0)
    min_per_domain: int = Field(default=80, ge=0)
    max_per_domain: int = Field(default=85, ge=0)
    target_mix: DifficultyMix = Field(default_factory=DifficultyMix)
    mix_tolerance: float = Field(default=0.03, ge=0.0, le=1.0)
    rationale_prefix: str = Field(
        default="The correct answer is {answer} because in {domain}, section",
        description="Required start of every deep rationale",
    )
    banned_phrases: list[str] = Field(
        default_factory=lambda: ["Based on source material", "According to the guide"]
    )


class BankReport(BaseModel):
    """Counts and problems found in a bank."""

    total: int = 0
    domain_counts: dict[str, int] = Field(default_factory=dict)
    difficulty_counts: dict[str, int] = Field(default_factory=dict)
    difficulty_ratios: dict[str, float] = Field(default_factory=dict)
    issues: list[str] = Field(default_factory=list)

    @property
    def passed(self) -> bool:
        """True when no rule was broken."""
        return not self.issues

    @property
    def all_domains_covered(self) -> bool:
        """True when every domain has at least one question."""
        return all(self.domain_counts.get(d.value, 0) > 0 for d in ALL_DOMAINS)


def _check_rationale(question: Question, rules: BankRules) -> list[str]:
    issues = []
    deep = question.rationale.deep
    prefix = rules.rationale_prefix.format(
        answer=question.correct_answer, domain=question.domain.value
    )
    if not deep.startswith(prefix):
        issues.append(f"Rationale format mismatch for {question.id}")
    for phrase in rules.banned_phrases:
        if phrase in deep:
            issues.append(f"Banned rationale phrase in {question.id}: {phrase!r}")
    return issues


def validate_bank(questions: Sequence[Question], rules: BankRules | None = None) -> BankReport:
    """
    Check domain coverage, per-domain counts, difficulty ratios and rationales.

    Domains and difficulties outside the known sets are rejected when the
    questions are parsed, so this only checks the curation rules.

    Args:
        questions: Loaded bank
        rules: Thresholds (defaults to the curated-bank rules)

    Returns:
        Report with counts and every issue found
    """
    rules = rules or BankRules()
    report = BankReport(
        total=len(questions),
        domain_counts={d.value: 0 for d in ALL_DOMAINS},
        difficulty_counts={d.value: 0 for d in DIFFICULTY_ORDER},
    )

    for question in questions:
        report.domain_counts[question.domain.value] += 1
        report.difficulty_counts[question.difficulty.value] += 1
        report.issues.extend(_check_rationale(question, rules))

    if report.total < rules.min_total:
        report.issues.append(f"Bank has fewer than {rules.min_total} questions ({report.total})")

    if not report.all_domains_covered:
        missing = [d for d, count in report.domain_counts.items() if count == 0]
        report.issues.append(f"Not all {len(ALL_DOMAINS)} domains covered (missing {', '.join(missing)})")

    for domain, count in report.domain_counts.items():
        if count < rules.min_per_domain or count > rules.max_per_domain:
            report.issues.append(
                f"Domain {domain} not in {rules.min_per_domain}-{rules.max_per_domain} range: {count}"
            )

    for difficulty in DIFFICULTY_ORDER:
        name = difficulty.value
        ratio = report.difficulty_counts[name] / report.total if report.total else 0.0
        report.difficulty_ratios[name] = ratio
        if abs(ratio - rules.target_mix.fraction(difficulty)) > rules.mix_tolerance:
            report.issues.append(f"{name.capitalize()} ratio out of tolerance: {ratio:.3f}")

    return report


def ensure_valid_bank(questions: Sequence[Question], rules: BankRules | None = None) -> BankReport:
    """
    Validate a bank and raise if it fails.

    Raises:
        BankValidationError: Carrying the report when any rule is broken
    """
    report = validate_bank(questions, rules)
    if not report.passed:
        raise BankValidationError(report)
    return report
