"""DOCX document generator for assembled sessions."""

from datetime import datetime
from pathlib import Path

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Inches, Pt, RGBColor

from dcf_prep.models import AssembledQuestion, AssembledSession

DIFFICULTY_COLORS = {
    "easy": RGBColor(0, 128, 0),
    "medium": RGBColor(255, 140, 0),
    "hard": RGBColor(255, 0, 0),
}
CORRECT_COLOR = RGBColor(0, 128, 0)
MUTED_COLOR = RGBColor(110, 110, 110)
KEY_HEADING_COLOR = RGBColor(0, 51, 102)
TABLE_STYLE = "Light Grid Accent 1"
CHOICE_INDENT = Inches(0.5)


def ensure_output_directory(output_dir: str = "output") -> Path:
    """
    Create the export directory if needed.

    Args:
        output_dir: Directory path

    Returns:
        The directory as a Path
    """
    path = Path(output_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def _timestamp() -> str:
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def generate_timestamped_filename(base_name: str, extension: str = "docx") -> str:
    """
    Build ``<name>_<YYYYmmdd_HHMMSS>.<extension>`` from the last path component.

    Args:
        base_name: Name, possibly with directories (dropped)
        extension: File extension without the dot

    Returns:
        Bare filename
    """
    return f"{Path(base_name).name}_{_timestamp()}.{extension}"


def _new_document() -> Document:
    doc = Document()
    setup_document_styles(doc)
    return doc


def _centered(doc: Document, text: str = "", size: int | None = None, color: RGBColor | None = None):
    para = doc.add_paragraph()
    para.alignment = WD_ALIGN_PARAGRAPH.CENTER
    if text:
        run = para.add_run(text)
        if size:
            run.font.size = Pt(size)
        if color is not None:
            run.font.color.rgb = color
    return para


def _bold_header_row(table, labels: list[str]) -> None:
    for cell, label in zip(table.rows[0].cells, labels):
        cell.text = label
        for run in cell.paragraphs[0].runs:
            run.bold = True


def export_to_docx(
    session: AssembledSession,
    output_path: str,
    include_answers: bool = False,
    use_output_dir: bool = True,
    output_dir: str = "output",
) -> str:
    """
    Write a session as a printable question sheet.

    Choices are printed in presentation order and lettered A-D as presented,
    so the sheet matches what the learner saw on screen. The cover page lists
    how many questions each domain contributed.

    Args:
        session: Session to export
        output_path: Target file, or a base name when ``use_output_dir`` is set
        include_answers: Mark correct choices, print rationales and append the key
        use_output_dir: Place a timestamped file in ``output_dir`` instead
        output_dir: Export directory

    Returns:
        Path of the written file
    """
    if use_output_dir:
        filename = generate_timestamped_filename(Path(output_path).stem)
        output_path = str(ensure_output_directory(output_dir) / filename)

    doc = _new_document()
    add_cover(doc, session)

    for number, question in enumerate(session.questions, 1):
        add_question_to_document(doc, number, question, include_answers)

    if include_answers:
        add_answer_key(doc, session)

    doc.save(output_path)
    return output_path


def add_cover(doc: Document, session: AssembledSession) -> None:
    """Title, session facts and the per-domain question count."""
    doc.add_heading(session.title, level=0).alignment = WD_ALIGN_PARAGRAPH.CENTER

    facts = [f"Questions: {session.total_questions}", f"Mode: {session.mode.value}"]
    if session.time_limit_minutes:
        facts.append(f"Time limit: {session.time_limit_minutes} min")
    summary = _centered(doc)
    summary.add_run("  |  ".join(facts)).bold = True

    _centered(
        doc,
        f"Generated: {session.created_at.astimezone():%Y-%m-%d %H:%M}  |  Seed: {session.seed}",
        size=9,
        color=MUTED_COLOR,
    )

    counts = session.domain_counts()
    if counts:
        table = doc.add_table(rows=1, cols=2)
        table.style = TABLE_STYLE
        _bold_header_row(table, ["Domain", "Questions"])
        for domain, count in counts.items():
            cells = table.add_row().cells
            cells[0].text = domain
            cells[1].text = str(count)

    doc.add_page_break()


def setup_document_styles(doc: Document) -> None:
    """Calibri 11pt body text and one-inch margins."""
    body = doc.styles["Normal"].font
    body.name = "Calibri"
    body.size = Pt(11)

    for section in doc.sections:
        for side in ("top_margin", "bottom_margin", "left_margin", "right_margin"):
            setattr(section, side, Inches(1))


def add_question_to_document(
    doc: Document, number: int, question: AssembledQuestion, include_answers: bool = False
) -> None:
    """
    Add one question with its choices in presentation order.

    Args:
        doc: Document to add to
        number: 1-based question number
        question: Question to add
        include_answers: Highlight the correct choice and print the rationale
    """
    prompt = doc.add_paragraph()
    label = prompt.add_run(f"Q{number}. ")
    label.bold = True
    label.font.size = Pt(12)
    prompt.add_run(question.question)

    tag = doc.add_paragraph().add_run(
        f"  {question.domain.value}  |  {question.difficulty.value.capitalize()}"
    )
    tag.italic = True
    tag.font.size = Pt(9)
    tag.font.color.rgb = DIFFICULTY_COLORS[question.difficulty.value]

    for index, choice in enumerate(question.shuffled_choices):
        line = doc.add_paragraph()
        line.paragraph_format.left_indent = CHOICE_INDENT
        text = line.add_run(f"{question.presented_letter(index)}. {choice.text}")
        if include_answers and index == question.remapped_correct_answer:
            text.bold = True
            text.font.color.rgb = CORRECT_COLOR
            line.add_run(" ✓").font.color.rgb = CORRECT_COLOR

    if include_answers:
        notes = []
        if question.rationale.short:
            notes.append(f"Rationale: {question.rationale.short}")
        if question.source and question.source.section:
            notes.append(f"Source: {question.source.document} §{question.source.section}")
        for note in notes:
            para = doc.add_paragraph()
            para.paragraph_format.left_indent = CHOICE_INDENT
            run = para.add_run(note)
            run.italic = True
            run.font.size = Pt(10)
            run.font.color.rgb = MUTED_COLOR

    doc.add_paragraph()


def add_answer_key(doc: Document, session: AssembledSession) -> None:
    """
    Append the answer key table on a new page.

    Each row gives the presented letter and text of the correct choice, the
    domain and the deep rationale (falling back to the short one).
    """
    doc.add_page_break()
    heading = doc.add_heading("Answer Key", level=1)
    heading.alignment = WD_ALIGN_PARAGRAPH.CENTER
    heading.runs[0].font.color.rgb = KEY_HEADING_COLOR

    table = doc.add_table(rows=1, cols=4)
    table.style = TABLE_STYLE
    _bold_header_row(table, ["Q#", "Answer", "Domain", "Rationale"])

    for number, question in enumerate(session.questions, 1):
        correct = question.shuffled_choices[question.remapped_correct_answer]
        cells = table.add_row().cells
        cells[0].text = str(number)
        cells[1].text = f"{question.correct_letter} - {correct.text}"
        cells[2].text = question.domain.value
        cells[3].text = question.rationale.deep or question.rationale.short or "N/A"


def generate_answer_key(session: AssembledSession, output_path: str) -> str:
    """
    Write the answer key on its own.

    Args:
        session: Session to key
        output_path: Target file

    Returns:
        Path of the written file
    """
    doc = _new_document()
    doc.add_heading(f"{session.title} - Answer Key", level=0).alignment = WD_ALIGN_PARAGRAPH.CENTER
    _centered(doc, f"Seed: {session.seed}", size=9, color=MUTED_COLOR)
    add_answer_key(doc, session)

    doc.save(output_path)
    return output_path


def export_session_with_separate_answers(
    session: AssembledSession, base_path: str, output_dir: str = "output"
) -> tuple[str, str]:
    """
    Export a question sheet and a matching answer key side by side.

    Args:
        session: Session to export
        base_path: Base name for both files (directories are dropped)
        output_dir: Export directory

    Returns:
        (questions_path, answers_path)
    """
    directory = ensure_output_directory(output_dir)
    stamp = _timestamp()
    name = Path(base_path).name

    questions_path = str(directory / f"{name}_questions_{stamp}.docx")
    answers_path = str(directory / f"{name}_answers_{stamp}.docx")

    export_to_docx(session, questions_path, include_answers=False, use_output_dir=False)
    generate_answer_key(session, answers_path)

    return questions_path, answers_path
