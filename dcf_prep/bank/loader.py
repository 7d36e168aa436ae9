"""Question bank loading from JSON."""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from dcf_prep.errors import BankLoadError
from dcf_prep.models import Question

logger = logging.getLogger(__name__)


def parse_question_bank(data: Any, path: Path | str = "<memory>") -> list[Question]:
    """
    Build questions from decoded bank JSON.

    Accepts either ``{"questions": [...]}`` or a bare list of question objects.

    Args:
        data: Decoded JSON
        path: Where the data came from, for error messages

    Returns:
        Questions in file order

    Raises:
        BankLoadError: On a malformed document, an invalid question or a duplicate id
    """
    if isinstance(data, dict):
        raw_questions = data.get("questions")
    else:
        raw_questions = data
    if not isinstance(raw_questions, list):
        raise BankLoadError(path, "expected a list of questions or an object with 'questions'")

    questions: list[Question] = []
    seen_ids: set[str] = set()
    for index, raw in enumerate(raw_questions):
        try:
            question = Question.model_validate(raw)
        except ValidationError as e:
            label = raw.get("id", f"#{index}") if isinstance(raw, dict) else f"#{index}"
            raise BankLoadError(path, f"question {label} is invalid: {e}") from e
        if question.id in seen_ids:
            raise BankLoadError(path, f"duplicate question id {question.id}")
        seen_ids.add(question.id)
        questions.append(question)

    return questions


def load_question_bank(path: Path | str) -> list[Question]:
    """
    Read a question bank file.

    Args:
        path: JSON file

    Returns:
        Questions in file order

    Raises:
        BankLoadError: If the file is missing, not JSON, or holds invalid questions
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise BankLoadError(path, f"cannot read file ({e.strerror or e})") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise BankLoadError(path, f"invalid JSON at line {e.lineno}: {e.msg}") from e

    questions = parse_question_bank(data, path)
    logger.info("Loaded %d questions from %s", len(questions), path)
    return questions
