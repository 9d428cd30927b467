"""
Quick fixes for the mechanically repairable diagnostics.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from roopkit.core.document import DocumentSnapshot
from roopkit.core.settings import DEFAULT_SETTINGS, AnalysisSettings
from roopkit.core.types import Position, Range, TextEdit
from roopkit.diagnostics.model import Diagnostic, DiagnosticCode
from roopkit.parsing.stack import BlockFrame, StackTrace

QUICK_FIX = "quickfix"


@dataclass(frozen=True)
class CodeAction:
    """An edit the host can offer for one diagnostic."""

    title: str
    diagnostic: Diagnostic
    edits: tuple[TextEdit, ...]
    kind: str = QUICK_FIX


def quick_fixes(
    snapshot: DocumentSnapshot,
    trace: StackTrace,
    diagnostics: Iterable[Diagnostic],
    settings: AnalysisSettings = DEFAULT_SETTINGS,
) -> list[CodeAction]:
    """
    Build quick fixes for the given diagnostics.

    `missing-colon` gets an inserted ':' after the header's code. An unclosed task
    opener gets an `end task` appended at the end of the document. Orphan closers
    and unrecognized tokens have no mechanical fix.

    Params:
        snapshot: Document the diagnostics were computed for
        trace: Stack trace of the same snapshot
        diagnostics: Diagnostics the host wants fixes for
        settings: Indent width used for inserted closers

    Returns:
        One CodeAction per fixable diagnostic
    """
    unclosed = {frame.open_line: frame for frame in trace.unclosed_tasks}
    actions = []

    for diagnostic in diagnostics:
        line = diagnostic.range.start.line

        if diagnostic.code is DiagnosticCode.MISSING_COLON:
            if not trace.classifications[line].missing_colon:
                continue
            column = trace.classifications[line].code_end
            actions.append(
                CodeAction(
                    title="Add ':' to block header",
                    diagnostic=diagnostic,
                    edits=(TextEdit(Range.on_line(line, column, column), ":"),),
                )
            )

        elif diagnostic.code is DiagnosticCode.UNBALANCED_TASK and line in unclosed:
            actions.append(
                CodeAction(
                    title="Add missing 'end task'",
                    diagnostic=diagnostic,
                    edits=(
                        _append_closer(
                            snapshot, unclosed[line], settings.format.indent_size
                        ),
                    ),
                )
            )

    return actions


def _append_closer(
    snapshot: DocumentSnapshot, frame: BlockFrame, indent_size: int
) -> TextEdit:
    closer = " " * (frame.depth * indent_size) + "end task"
    last_line = max(snapshot.line_count - 1, 0)
    last_text = snapshot.line_at(last_line)

    # Keep a trailing newline at the end of the document
    if snapshot.line_count > 1 and not last_text.strip():
        position = Position(last_line, 0)
        return TextEdit(Range(position, position), closer + snapshot.eol)

    position = Position(last_line, len(last_text))
    return TextEdit(Range(position, position), snapshot.eol + closer)
