"""
Outline symbols for tasks and task templates.
"""

from dataclasses import dataclass
from enum import Enum

from roopkit.core.document import DocumentSnapshot
from roopkit.core.types import Position, Range
from roopkit.parsing.stack import StackTrace


class SymbolKind(Enum):
    MODULE = "module"  # start task
    CLASS = "class"  # template task


@dataclass(frozen=True)
class DocumentSymbol:
    """
    One outline entry.

    Params:
        name: Task title; templates are prefixed with "(template)"
        kind: MODULE for tasks, CLASS for templates
        range: Opening line start to closing line end
        selection_range: The opening line
        unterminated: True when the task never reached an `end task`
    """

    name: str
    kind: SymbolKind
    range: Range
    selection_range: Range
    unterminated: bool = False


def document_symbols(
    snapshot: DocumentSnapshot, trace: StackTrace, include_templates: bool = True
) -> list[DocumentSymbol]:
    """
    Build the outline of a document.

    Unterminated tasks stay in the outline, extending to the last line, so the
    defect remains visible to the author.

    Params:
        snapshot: Document the trace was built from
        trace: Its stack trace
        include_templates: Whether template tasks get their own entries

    Returns:
        Symbols ordered by opening line
    """
    symbols = []

    for span in trace.task_spans:
        frame = span.frame
        if frame.is_template and not include_templates:
            continue

        open_text = snapshot.line_at(frame.open_line)
        close_text = snapshot.line_at(span.close_line)
        symbols.append(
            DocumentSymbol(
                name=f"(template) {frame.label}" if frame.is_template else frame.label,
                kind=SymbolKind.CLASS if frame.is_template else SymbolKind.MODULE,
                range=Range(
                    Position(frame.open_line, 0),
                    Position(span.close_line, len(close_text)),
                ),
                selection_range=Range.on_line(frame.open_line, 0, len(open_text)),
                unterminated=not span.explicit,
            )
        )

    return symbols
