"""
Re-indentation formatter.

Indentation is re-derived from the stack trace's level sequence and written as
`level * indent_size` spaces. Header lines that need a colon get one inserted
before any trailing comment. A correctly formatted document produces no edits.
"""

from roopkit.core.document import DocumentSnapshot
from roopkit.core.settings import DEFAULT_SETTINGS, AnalysisSettings
from roopkit.core.types import Range, TextEdit
from roopkit.parsing.classifier import LineClassification
from roopkit.parsing.stack import StackTrace


def format_line(text: str, classification: LineClassification, level: int, indent_size: int) -> str:
    """Rewrite one line at `level`; blank lines become empty."""
    if not text.strip():
        return ""

    if classification.missing_colon:
        column = classification.code_end
        text = text[:column] + ":" + text[column:]

    return " " * (level * indent_size) + text.strip()


def format_lines(
    snapshot: DocumentSnapshot, trace: StackTrace, indent_size: int
) -> list[str]:
    """Return every line of the document as the formatter would write it."""
    return [
        format_line(text, classification, state.level, indent_size)
        for text, classification, state in zip(
            snapshot.lines, trace.classifications, trace.states
        )
    ]


def formatting_edits(
    snapshot: DocumentSnapshot,
    trace: StackTrace,
    settings: AnalysisSettings = DEFAULT_SETTINGS,
) -> list[TextEdit]:
    """
    Compute per-line replacement edits.

    Params:
        snapshot: Document to format
        trace: Stack trace freshly built from the same snapshot
        settings: Formatter switch and indent width

    Returns:
        One whole-line edit for every line whose text changes
    """
    if not settings.format.enabled:
        return []

    edits = []
    formatted = format_lines(snapshot, trace, settings.format.indent_size)
    for index, (old, new) in enumerate(zip(snapshot.lines, formatted)):
        if old != new:
            edits.append(TextEdit(Range.on_line(index, 0, len(old)), new))
    return edits


def format_text(
    snapshot: DocumentSnapshot,
    trace: StackTrace,
    settings: AnalysisSettings = DEFAULT_SETTINGS,
) -> str:
    """Return the whole formatted document, keeping its line ending style."""
    if not settings.format.enabled:
        return snapshot.text
    return snapshot.eol.join(format_lines(snapshot, trace, settings.format.indent_size))
