"""Tests for DOCX export of assembled sessions."""

import os
from pathlib import Path

from docx import Document

from dcf_prep.engine import seeded_random, with_shuffled_choices
from dcf_prep.export.docx_generator import (
    ensure_output_directory,
    export_session_with_separate_answers,
    export_to_docx,
    generate_answer_key,
    generate_timestamped_filename,
)
from dcf_prep.models import AssembledSession, SessionMode


def _paragraph_text(path: str) -> str:
    return "\n".join(para.text for para in Document(path).paragraphs)


def _table_rows(path: str) -> list[list[str]]:
    doc = Document(path)
    return [[cell.text for cell in row.cells] for table in doc.tables for row in table.rows]


class TestEnsureOutputDirectory:
    """Test output directory creation."""

    def test_creates_nested_directory(self, tmp_path: Path):
        """Test that missing parents are created."""
        output_dir = tmp_path / "exports" / "sessions"

        result = ensure_output_directory(str(output_dir))

        assert output_dir.is_dir()
        assert result == output_dir

    def test_existing_directory(self, tmp_path: Path):
        """Test that an existing directory is accepted."""
        assert ensure_output_directory(str(tmp_path)) == tmp_path


class TestGenerateTimestampedFilename:
    """Test timestamped filename generation."""

    def test_base_name_and_extension(self):
        """Test the name layout."""
        filename = generate_timestamped_filename("exam", "docx")

        assert filename.startswith("exam_")
        assert filename.endswith(".docx")
        assert len(filename) == len("exam_YYYYmmdd_HHMMSS.docx")

    def test_directory_part_dropped(self):
        """Test that only the final path component is kept."""
        filename = generate_timestamped_filename("/tmp/sheets/exam", "pdf")

        assert filename.startswith("exam_")
        assert filename.endswith(".pdf")


class TestExportToDocx:
    """Test export_to_docx."""

    def test_sheet_lists_questions_in_presented_order(self, sample_session: AssembledSession, tmp_path: Path):
        """Test that choices appear with presented letters in shuffled order."""
        output = export_to_docx(sample_session, str(tmp_path / "sheet.docx"), use_output_dir=False)
        text = _paragraph_text(output)

        assert sample_session.title in text
        assert f"Seed: {sample_session.seed}" in text
        for number, question in enumerate(sample_session.questions, 1):
            assert f"Q{number}. {question.question}" in text
            for index, choice in enumerate(question.shuffled_choices):
                assert f"{question.presented_letter(index)}. {choice.text}" in text

    def test_sheet_without_answers(self, sample_session: AssembledSession, tmp_path: Path):
        """Test that a question sheet reveals nothing."""
        output = export_to_docx(sample_session, str(tmp_path / "sheet.docx"), use_output_dir=False)
        text = _paragraph_text(output)

        assert "Answer Key" not in text
        assert "Rationale:" not in text
        assert "✓" not in text
        assert ["Q#", "Answer", "Domain", "Rationale"] not in _table_rows(output)

    def test_cover_counts_questions_per_domain(self, sample_session: AssembledSession, tmp_path: Path):
        """Test that the cover table lists each domain used."""
        output = export_to_docx(sample_session, str(tmp_path / "sheet.docx"), use_output_dir=False)

        assert _table_rows(output) == [["Domain", "Questions"], ["SNP", "4"]]

    def test_source_printed_with_answers(self, sample_question, tmp_path: Path):
        """Test that the answer version cites the source section."""
        session = AssembledSession(
            title="Single",
            mode=SessionMode.PRACTICE,
            seed=3,
            questions=[with_shuffled_choices(sample_question, seeded_random(3))],
        )

        with_answers = export_to_docx(
            session, str(tmp_path / "answers.docx"), include_answers=True, use_output_dir=False
        )
        without = export_to_docx(session, str(tmp_path / "sheet.docx"), use_output_dir=False)

        assert "Source: snp.pdf §3.2" in _paragraph_text(with_answers)
        assert "Source:" not in _paragraph_text(without)

    def test_sheet_with_answers(self, sample_session: AssembledSession, tmp_path: Path):
        """Test that the answer version marks answers and adds the key."""
        output = export_to_docx(
            sample_session, str(tmp_path / "sheet.docx"), include_answers=True, use_output_dir=False
        )
        text = _paragraph_text(output)

        assert "Answer Key" in text
        assert f"Rationale: {sample_session.questions[0].rationale.short}" in text
        assert text.count("✓") == sample_session.total_questions

    def test_time_limit_shown(self, sample_session: AssembledSession, tmp_path: Path):
        """Test that timed sessions print their limit."""
        timed = sample_session.model_copy(update={"time_limit_minutes": 45})

        output = export_to_docx(timed, str(tmp_path / "exam.docx"), use_output_dir=False)

        assert "Time limit: 45 min" in _paragraph_text(output)

    def test_uses_output_dir(self, sample_session: AssembledSession, tmp_path: Path):
        """Test that the output directory and a timestamp are applied."""
        output_dir = tmp_path / "output"

        result = export_to_docx(sample_session, "practice", output_dir=str(output_dir))

        assert result.startswith(str(output_dir))
        assert Path(result).name.startswith("practice_")
        assert os.path.exists(result)


class TestGenerateAnswerKey:
    """Test generate_answer_key."""

    def test_key_rows_use_presented_letters(self, sample_session: AssembledSession, tmp_path: Path):
        """Test one row per question with the presented letter and domain."""
        output = generate_answer_key(sample_session, str(tmp_path / "key.docx"))
        rows = _table_rows(output)

        assert rows[0] == ["Q#", "Answer", "Domain", "Rationale"]
        assert len(rows) == sample_session.total_questions + 1
        for number, (row, question) in enumerate(zip(rows[1:], sample_session.questions), 1):
            correct = question.shuffled_choices[question.remapped_correct_answer]
            assert row[0] == str(number)
            assert row[1] == f"{question.correct_letter} - {correct.text}"
            assert row[2] == "SNP"
            assert row[3] == question.rationale.deep


class TestExportSessionWithSeparateAnswers:
    """Test export with separate question and answer files."""

    def test_creates_two_files_side_by_side(self, sample_session: AssembledSession, tmp_path: Path):
        """Test that both files land in the output directory."""
        questions_file, answers_file = export_session_with_separate_answers(
            sample_session, "snp", output_dir=str(tmp_path)
        )

        assert os.path.exists(questions_file)
        assert os.path.exists(answers_file)
        assert "_questions_" in questions_file
        assert "_answers_" in answers_file
        assert os.path.dirname(questions_file) == os.path.dirname(answers_file) == str(tmp_path)

    def test_only_answers_file_has_key(self, sample_session: AssembledSession, tmp_path: Path):
        """Test that the key is kept out of the question sheet."""
        questions_file, answers_file = export_session_with_separate_answers(
            sample_session, "snp", output_dir=str(tmp_path)
        )

        assert "Answer Key" not in _paragraph_text(questions_file)
        assert f"{sample_session.title} - Answer Key" in _paragraph_text(answers_file)
        assert len(_table_rows(answers_file)) == sample_session.total_questions + 1
