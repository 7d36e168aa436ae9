"""Typer CLI application for study sessions."""

import logging
import time
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from dcf_prep import __version__
from dcf_prep.bank import load_question_bank, validate_bank
from dcf_prep.config import get_settings, setup_logging
from dcf_prep.engine import (
    assemble_adaptive_session,
    assemble_exam_session,
    assemble_practice_session,
    default_seed,
)
from dcf_prep.errors import DcfPrepError
from dcf_prep.export import export_session_with_separate_answers
from dcf_prep.models import (
    CHOICE_KEYS,
    AdaptiveConfig,
    AssembledQuestion,
    AssembledSession,
    Domain,
    ExamConfig,
    PracticeConfig,
    Question,
    SessionMode,
    SessionResult,
    StudyProgress,
)
from dcf_prep.progress import (
    JsonProgressRepository,
    ProgressRepository,
    apply_session_result,
    grade_session,
    pass_likelihood,
    readiness_score,
    toggle_module,
)

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="dcf-prep",
    help="Practice sessions and timed exams from a certification question bank",
    add_completion=False,
)

console = Console()


class ExamSize(str, Enum):
    """Exam presets."""

    MINI = "mini"
    FULL = "full"


BANK_OPTION = typer.Option(None, "--bank", "-b", help="Question bank JSON (defaults to DCF_BANK_PATH)")
PROGRESS_OPTION = typer.Option(
    None, "--progress", "-p", help="Progress file (defaults to DCF_PROGRESS_PATH)"
)
SEED_OPTION = typer.Option(None, "--seed", "-s", help="Seed for a reproducible session")
EXPORT_OPTION = typer.Option(
    None, "--export", "-e", help="Also export a DOCX question sheet and answer key with this base name"
)
INTERACTIVE_OPTION = typer.Option(
    True,
    "--interactive/--preview",
    help="Answer the questions now, or only list the assembled session",
)


@app.command()
def validate(
    bank: Optional[Path] = typer.Argument(None, help="Question bank JSON (defaults to DCF_BANK_PATH)"),
) -> None:
    """Check a question bank's domain coverage, counts, difficulty ratios and rationales."""
    questions = _load_bank(bank)
    report = validate_bank(questions)

    table = Table(title="Question Bank", border_style="cyan")
    table.add_column("Domain", style="cyan")
    table.add_column("Questions", style="white", justify="right")
    for domain, count in report.domain_counts.items():
        table.add_row(domain, str(count))
    table.add_row("[bold]Total[/bold]", f"[bold]{report.total}[/bold]")
    console.print()
    console.print(table)

    mix_table = Table(title="Difficulty Mix", border_style="cyan")
    mix_table.add_column("Difficulty", style="cyan")
    mix_table.add_column("Questions", style="white", justify="right")
    mix_table.add_column("Ratio", style="white", justify="right")
    for difficulty, count in report.difficulty_counts.items():
        mix_table.add_row(
            difficulty.capitalize(), str(count), f"{report.difficulty_ratios[difficulty]:.3f}"
        )
    console.print(mix_table)

    covered = "[green]YES[/green]" if report.all_domains_covered else "[red]NO[/red]"
    console.print(f"All domains covered: {covered}")

    if not report.passed:
        console.print(f"\n[red]Validation: FAIL[/red] ({len(report.issues)} issues)", style="bold")
        for issue in report.issues:
            console.print(f"  • {issue}")
        raise typer.Exit(code=1)

    console.print("\n[green bold]Validation: PASS[/green bold]")


@app.command()
def practice(
    domain: Domain = typer.Option(..., "--domain", "-d", help="Domain to practise", case_sensitive=False),
    count: Optional[int] = typer.Option(
        None, "--count", "-n", min=1, help="Number of questions (defaults to DCF_PRACTICE_QUESTIONS)"
    ),
    bank: Optional[Path] = BANK_OPTION,
    progress_path: Optional[Path] = PROGRESS_OPTION,
    seed: Optional[int] = SEED_OPTION,
    export: Optional[str] = EXPORT_OPTION,
    interactive: bool = INTERACTIVE_OPTION,
) -> None:
    """
    Practise one domain, preferring questions you have not seen recently.

    Example:
        dcf-prep practice -d SNP -n 10 --seed 42
    """
    settings = get_settings()
    questions = _load_bank(bank)
    repository = _repository(progress_path)
    learner = repository.load()
    seed = default_seed() if seed is None else seed

    config = PracticeConfig(domain=domain, total=count or settings.practice_questions)
    assembled = assemble_practice_session(questions, learner.history, config, seed)
    session = AssembledSession(
        title=f"Practice: {domain.value}",
        mode=SessionMode.PRACTICE,
        seed=seed,
        questions=assembled,
    )
    _run_session(session, repository, learner, export, interactive)


@app.command()
def exam(
    size: ExamSize = typer.Option(ExamSize.FULL, "--size", help="Exam preset", case_sensitive=False),
    count: Optional[int] = typer.Option(None, "--count", "-n", min=1, help="Override the preset size"),
    weights: Optional[List[str]] = typer.Option(
        None,
        "--weight",
        "-w",
        help="Domain weight as DOMAIN=WEIGHT (can repeat: -w SNP=2 -w HSAN=0.5)",
    ),
    bank: Optional[Path] = BANK_OPTION,
    progress_path: Optional[Path] = PROGRESS_OPTION,
    seed: Optional[int] = SEED_OPTION,
    export: Optional[str] = EXPORT_OPTION,
    interactive: bool = INTERACTIVE_OPTION,
) -> None:
    """
    Take a mixed-domain exam with a difficulty mix and a time limit.

    Example:
        dcf-prep exam --size mini -w SNP=2
    """
    settings = get_settings()
    total, minutes = settings.exam_preset(size.value)
    domain_weights = parse_domain_weights(weights or [])

    questions = _load_bank(bank)
    repository = _repository(progress_path)
    learner = repository.load()
    seed = default_seed() if seed is None else seed

    config = ExamConfig(total=count or total, domain_weights=domain_weights or None)
    assembled = assemble_exam_session(questions, learner.history, config, seed)
    session = AssembledSession(
        title=f"Exam Simulation ({size.value})",
        mode=SessionMode.EXAM,
        seed=seed,
        questions=assembled,
        time_limit_minutes=minutes,
    )
    _run_session(session, repository, learner, export, interactive)


@app.command()
def adaptive(
    count: Optional[int] = typer.Option(
        None, "--count", "-n", min=1, help="Number of questions (defaults to DCF_ADAPTIVE_QUESTIONS)"
    ),
    domain: Optional[Domain] = typer.Option(
        None, "--domain", "-d", help="Restrict to one domain", case_sensitive=False
    ),
    bank: Optional[Path] = BANK_OPTION,
    progress_path: Optional[Path] = PROGRESS_OPTION,
    seed: Optional[int] = SEED_OPTION,
    export: Optional[str] = EXPORT_OPTION,
    interactive: bool = INTERACTIVE_OPTION,
) -> None:
    """Drill your weak domains, hardest questions first."""
    settings = get_settings()
    questions = _load_bank(bank)
    repository = _repository(progress_path)
    learner = repository.load()
    seed = default_seed() if seed is None else seed

    targeted = ", ".join(learner.weak_domains) or "none yet (mixed set)"
    console.print(f"[cyan]Weak domains targeted:[/cyan] {targeted}")

    config = AdaptiveConfig(total=count or settings.adaptive_questions, domain=domain)
    assembled = assemble_adaptive_session(questions, learner, config, seed)
    session = AssembledSession(
        title="Adaptive Session",
        mode=SessionMode.ADAPTIVE,
        seed=seed,
        questions=assembled,
    )
    _run_session(session, repository, learner, export, interactive)


@app.command()
def progress(
    progress_path: Optional[Path] = PROGRESS_OPTION,
) -> None:
    """Show readiness, pass likelihood and accuracy per domain."""
    display_progress(_repository(progress_path).load())


@app.command()
def modules(
    complete: Optional[List[str]] = typer.Option(None, "--complete", help="Mark a module complete"),
    reset: Optional[List[str]] = typer.Option(None, "--reset", help="Mark a module incomplete"),
    progress_path: Optional[Path] = PROGRESS_OPTION,
) -> None:
    """List study modules, or mark them complete or incomplete."""
    repository = _repository(progress_path)
    current = repository.load()

    if complete or reset:
        for module_id in complete or []:
            current = toggle_module(current, module_id, completed=True)
        for module_id in reset or []:
            current = toggle_module(current, module_id, completed=False)
        _save(repository, current)

    table = Table(title="Study Modules", border_style="cyan")
    table.add_column("Module", style="cyan")
    table.add_column("Status", style="white")
    for module_id, done in sorted(current.completed_modules.items()):
        table.add_row(module_id, "[green]Complete[/green]" if done else "Incomplete")
    console.print()
    console.print(table)
    console.print(f"Completed modules: {current.completed_module_count}")


@app.command()
def info() -> None:
    """Display information about the study tool."""
    settings = get_settings()
    info_text = f"""
[bold cyan]DCF Prep[/bold cyan]
Version: {__version__}

[bold]Session modes:[/bold]
  • Practice - one domain, unseen questions first
  • Exam - all domains, 30/40/30 easy/medium/hard, recent exam questions avoided
  • Adaptive - weak domains first, hardest questions first

[bold]Exam presets:[/bold]
  • mini - {settings.mini_exam_questions} questions, {settings.mini_exam_minutes} minutes
  • full - {settings.full_exam_questions} questions, {settings.full_exam_minutes} minutes

[bold]Domains:[/bold] {", ".join(d.value for d in Domain)}
    """
    console.print(Panel(info_text, title="DCF Prep Info", border_style="cyan"))


def parse_domain_weights(values: List[str]) -> dict[Domain, float]:
    """
    Parse ``DOMAIN=WEIGHT`` pairs.

    Raises:
        typer.BadParameter: On an unknown domain or a non-numeric or negative weight
    """
    weights: dict[Domain, float] = {}
    for value in values:
        name, sep, raw_weight = value.partition("=")
        if not sep:
            raise typer.BadParameter(f"Expected DOMAIN=WEIGHT, got {value!r}", param_hint="--weight")
        try:
            domain = Domain(name.strip().upper())
        except ValueError:
            raise typer.BadParameter(f"Unknown domain {name!r}", param_hint="--weight") from None
        try:
            weight = float(raw_weight)
        except ValueError:
            raise typer.BadParameter(f"Weight for {domain.value} must be a number", param_hint="--weight") from None
        if weight < 0:
            raise typer.BadParameter(f"Weight for {domain.value} cannot be negative", param_hint="--weight")
        weights[domain] = weight
    return weights


def _load_bank(path: Optional[Path]) -> list[Question]:
    try:
        return load_question_bank(path or get_settings().bank_path)
    except DcfPrepError as e:
        console.print(f"[red]Error:[/red] {e}", style="bold")
        raise typer.Exit(code=1)


def _repository(path: Optional[Path]) -> JsonProgressRepository:
    return JsonProgressRepository(path or get_settings().progress_path)


def _save(repository: ProgressRepository, updated: StudyProgress) -> None:
    try:
        repository.save(updated)
    except DcfPrepError as e:
        console.print(f"[red]Error:[/red] {e}", style="bold")
        raise typer.Exit(code=1)


def _run_session(
    session: AssembledSession,
    repository: ProgressRepository,
    current: StudyProgress,
    export: Optional[str],
    interactive: bool,
) -> None:
    """Show, export and (when interactive) take, grade and record a session."""
    if not session.questions:
        console.print("[red]Error:[/red] No questions available for this session.", style="bold")
        raise typer.Exit(code=1)

    display_session_summary(session)

    if export:
        questions_file, answers_file = export_session_with_separate_answers(
            session, export, get_settings().output_dir
        )
        console.print("\n[green]✓[/green] Session exported successfully!")
        console.print(f"  Questions: {questions_file}")
        console.print(f"  Answers:   {answers_file}")

    if not interactive:
        display_session_preview(session)
        return

    answers = take_session(session)
    result = grade_session(session.questions, answers, session.mode)
    settings = get_settings()
    updated = apply_session_result(
        current,
        result,
        weak_threshold=settings.weak_domain_threshold,
        history_limit=settings.history_limit,
    )
    _save(repository, updated)
    logger.debug("Recorded %s session (seed %d): %d/%d", session.mode.value, session.seed, result.correct, result.total)
    display_result(session, result, updated)


def take_session(session: AssembledSession) -> dict[str, Optional[int]]:
    """
    Ask each question on the console and collect presentation indexes.

    Exams give no feedback until the end. A timed session stops asking once the
    time limit has passed; the remaining questions stay unanswered.
    """
    answers: dict[str, Optional[int]] = {}
    deadline = (
        time.monotonic() + session.time_limit_minutes * 60 if session.time_limit_minutes else None
    )
    show_feedback = session.mode != SessionMode.EXAM

    for number, question in enumerate(session.questions, 1):
        if deadline is not None:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                console.print("\n[red bold]Time is up.[/red bold] Remaining questions are unanswered.")
                break
            minutes, seconds = divmod(int(remaining), 60)
            console.print(f"[dim]Time left: {minutes:02d}:{seconds:02d}[/dim]")

        display_question(number, session.total_questions, question)
        answers[question.id] = prompt_answer()

        if show_feedback:
            display_feedback(question, answers[question.id])

    return answers


def prompt_answer() -> Optional[int]:
    """Read a letter A-D (blank skips) and return its presentation index."""
    while True:
        raw = typer.prompt("Answer [A-D, blank to skip]", default="", show_default=False)
        letter = raw.strip().upper()
        if not letter:
            return None
        if letter in CHOICE_KEYS:
            return CHOICE_KEYS.index(letter)
        console.print("[yellow]Please enter A, B, C or D.[/yellow]")


def display_question(number: int, total: int, question: AssembledQuestion) -> None:
    """Print one question with its choices in presentation order."""
    lines = [f"[bold]{question.question}[/bold]", ""]
    for index, choice in enumerate(question.shuffled_choices):
        lines.append(f"  {question.presented_letter(index)}. {choice.text}")
    console.print()
    console.print(
        Panel(
            "\n".join(lines),
            title=f"Q {number} / {total} • {question.domain.value} • {question.difficulty.value}",
            border_style="cyan",
        )
    )


def display_feedback(question: AssembledQuestion, choice: Optional[int]) -> None:
    """Print right/wrong and the rationale after a practice answer."""
    correct = question.shuffled_choices[question.remapped_correct_answer]
    if choice == question.remapped_correct_answer:
        console.print("[green bold]Correct[/green bold]")
    else:
        console.print(
            f"[red bold]Incorrect[/red bold] • Correct: {question.correct_letter}. {correct.text}"
        )
    if question.rationale.short:
        console.print(f"[dim]{question.rationale.short}[/dim]")


def display_session_summary(session: AssembledSession) -> None:
    """Display the session before it starts."""
    table = Table(title=session.title, show_header=False, border_style="cyan")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Questions", str(session.total_questions))
    table.add_row(
        "Domains",
        ", ".join(f"{domain} ({count})" for domain, count in session.domain_counts().items()),
    )
    if session.time_limit_minutes:
        table.add_row("Time limit", f"{session.time_limit_minutes} min")
    table.add_row("Seed", str(session.seed))

    console.print()
    console.print(table)


def display_session_preview(session: AssembledSession) -> None:
    """List the assembled questions without asking them."""
    table = Table(title="Assembled Questions", border_style="cyan")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Id", style="white")
    table.add_column("Domain", style="white")
    table.add_column("Difficulty", style="white")
    table.add_column("Answer", style="green")

    for number, question in enumerate(session.questions, 1):
        table.add_row(
            str(number),
            question.id,
            question.domain.value,
            question.difficulty.value,
            question.correct_letter,
        )

    console.print()
    console.print(table)


def display_result(session: AssembledSession, result: SessionResult, updated: StudyProgress) -> None:
    """Display the score, the domain breakdown and the updated readiness."""
    if result.score >= 70:
        score_str = f"[green]{result.score}%[/green]"
    elif result.score >= 50:
        score_str = f"[yellow]{result.score}%[/yellow]"
    else:
        score_str = f"[red]{result.score}%[/red]"
    console.print(f"\n[bold]Score:[/bold] {score_str} ({result.correct}/{result.total})")

    breakdown = Table(title="Domain Breakdown", border_style="cyan")
    breakdown.add_column("Domain", style="cyan")
    breakdown.add_column("Correct", style="white", justify="right")
    breakdown.add_column("Accuracy", style="white", justify="right")
    for domain, tally in result.by_domain.items():
        breakdown.add_row(domain, f"{tally.correct}/{tally.total}", f"{tally.accuracy}%")
    console.print()
    console.print(breakdown)

    if result.missed_question_ids:
        review = Table(title="Review", border_style="red")
        review.add_column("Q#", style="cyan", justify="right")
        review.add_column("Question", style="white")
        review.add_column("Correct", style="green")
        for number, question in enumerate(session.questions, 1):
            if question.id not in result.missed_question_ids:
                continue
            correct = question.shuffled_choices[question.remapped_correct_answer]
            review.add_row(str(number), question.question, f"{question.correct_letter}. {correct.text}")
        console.print()
        console.print(review)

    console.print(
        f"\nReadiness: {readiness_score(updated)}%  |  Pass likelihood: {pass_likelihood(updated)}%"
    )


def display_progress(current: StudyProgress) -> None:
    """Display the learner's progress overview."""
    table = Table(title="Progress Overview", show_header=False, border_style="green")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Readiness", f"{readiness_score(current)}%")
    table.add_row("Pass likelihood", f"{pass_likelihood(current)}%")
    table.add_row("Completed modules", str(current.completed_module_count))
    table.add_row("Total questions answered", str(current.total_answered))
    table.add_row("Weak areas", ", ".join(current.weak_domains) or "None yet")

    console.print()
    console.print(table)

    if current.domain_accuracy:
        accuracy = Table(title="Domain Accuracy", border_style="cyan")
        accuracy.add_column("Domain", style="cyan")
        accuracy.add_column("Accuracy", style="white", justify="right")
        for domain, percent in sorted(current.domain_accuracy.items()):
            accuracy.add_row(domain, f"{percent}%")
        console.print()
        console.print(accuracy)

    if current.exam_history:
        exams = Table(title="Recent Exams", border_style="cyan")
        exams.add_column("When", style="cyan")
        exams.add_column("Score", style="white", justify="right")
        for record in current.exam_history[-5:]:
            exams.add_row(record.when.strftime("%Y-%m-%d %H:%M"), f"{record.score}%")
        console.print()
        console.print(exams)


@app.callback()
def callback(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Log level (defaults to DCF_LOG_LEVEL)"
    ),
) -> None:
    """
    DCF Prep - assemble practice sessions and exams from a question bank.
    """
    setup_logging(log_level or get_settings().log_level)


if __name__ == "__main__":
    app()
