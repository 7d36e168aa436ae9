"""Export functionality for session documents."""

from .docx_generator import (
    export_session_with_separate_answers,
    export_to_docx,
    generate_answer_key,
)

__all__ = ["export_to_docx", "generate_answer_key", "export_session_with_separate_answers"]
