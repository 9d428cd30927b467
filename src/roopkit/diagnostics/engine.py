"""
Diagnostics engine.

Three independent checks run over the whole document on every pass:

- missing-colon: a block header whose syntax needs a trailing ':' lacks it
- unbalanced-task: an `end task` without an open task, or a task never closed
- unrecognized-leading-token: a statement starts with a word outside the vocabulary

Each check has its own severity and its own share of the diagnostic budget, so
switching one off or exhausting its budget never changes what the others report.
"""

import logging
from collections.abc import Iterator

from roopkit.core.catalog import DEFAULT_CATALOG, KeywordCatalog
from roopkit.core.document import DocumentSnapshot
from roopkit.core.settings import DEFAULT_SETTINGS, AnalysisSettings
from roopkit.core.types import Range
from roopkit.diagnostics.model import Diagnostic, DiagnosticCode, DiagnosticSeverity
from roopkit.parsing.classifier import LineKind
from roopkit.parsing.stack import StackTrace

logger = logging.getLogger(__name__)


def compute_diagnostics(
    snapshot: DocumentSnapshot,
    trace: StackTrace,
    settings: AnalysisSettings = DEFAULT_SETTINGS,
    catalog: KeywordCatalog = DEFAULT_CATALOG,
) -> list[Diagnostic]:
    """
    Run every enabled check over a document.

    Params:
        snapshot: Document the trace was built from
        trace: Stack trace of the snapshot
        settings: Severities, budget and validation switch
        catalog: Vocabulary for the unrecognized-token check (extended by settings)

    Returns:
        Diagnostics grouped by check, each group in document order
    """
    if not settings.validation.enable:
        return []

    budget = settings.validation.max_problems
    lint = settings.lint
    diagnostics: list[Diagnostic] = []

    severity = DiagnosticSeverity.from_lint_level(lint.missing_colon.severity)
    if severity is not None:
        diagnostics.extend(
            _take(
                missing_colon_diagnostics(snapshot, trace, severity),
                budget,
                DiagnosticCode.MISSING_COLON,
            )
        )

    severity = DiagnosticSeverity.from_lint_level(lint.unbalanced_task.severity)
    if severity is not None:
        diagnostics.extend(
            _take(
                unbalanced_task_diagnostics(snapshot, trace, severity),
                budget,
                DiagnosticCode.UNBALANCED_TASK,
            )
        )

    severity = DiagnosticSeverity.from_lint_level(lint.unrecognized_token.severity)
    if severity is not None:
        vocabulary = catalog.with_extra_keywords(settings.completion.extra_keywords)
        diagnostics.extend(
            _take(
                unrecognized_token_diagnostics(trace, vocabulary, severity),
                budget,
                DiagnosticCode.UNRECOGNIZED_LEADING_TOKEN,
            )
        )

    logger.debug(
        "Computed %d diagnostics for %s (version %s)",
        len(diagnostics),
        snapshot.uri or "<untitled>",
        snapshot.version,
    )
    return diagnostics


def missing_colon_diagnostics(
    snapshot: DocumentSnapshot, trace: StackTrace, severity: DiagnosticSeverity
) -> Iterator[Diagnostic]:
    """Yield one diagnostic per header line that needs, but lacks, a trailing ':'."""
    for index, classification in enumerate(trace.classifications):
        if classification.missing_colon:
            yield Diagnostic(
                range=_whole_line(snapshot, index),
                severity=severity,
                code=DiagnosticCode.MISSING_COLON,
                message="Block header is missing a trailing ':'",
            )


def unbalanced_task_diagnostics(
    snapshot: DocumentSnapshot, trace: StackTrace, severity: DiagnosticSeverity
) -> Iterator[Diagnostic]:
    """Yield diagnostics for orphan closers and unclosed task openers, in line order."""
    findings = [
        (line, '"end task" without a matching "start task".')
        for line in trace.orphan_closers
    ]
    findings.extend(
        (frame.open_line, f'"{frame.keyword}" has no matching "end task".')
        for frame in trace.unclosed_tasks
    )

    for line, message in sorted(findings):
        yield Diagnostic(
            range=_whole_line(snapshot, line),
            severity=severity,
            code=DiagnosticCode.UNBALANCED_TASK,
            message=message,
        )


def unrecognized_token_diagnostics(
    trace: StackTrace, catalog: KeywordCatalog, severity: DiagnosticSeverity
) -> Iterator[Diagnostic]:
    """Yield an advisory for each statement whose leading word is not in the vocabulary."""
    known = catalog.known_starters

    for index, classification in enumerate(trace.classifications):
        token = classification.leading_token
        if classification.kind is not LineKind.PLAIN_STATEMENT or not token:
            continue
        if token in known:
            continue
        yield Diagnostic(
            range=Range.on_line(index, classification.token_start, classification.token_end),
            severity=severity,
            code=DiagnosticCode.UNRECOGNIZED_LEADING_TOKEN,
            message=f"Unrecognized leading verb '{token}'.",
        )


def _take(
    diagnostics: Iterator[Diagnostic], budget: int, code: DiagnosticCode
) -> list[Diagnostic]:
    taken = []
    for diagnostic in diagnostics:
        if len(taken) >= budget:
            logger.warning(
                "Diagnostic budget of %d reached for '%s'; further findings dropped",
                budget,
                code.value,
            )
            break
        taken.append(diagnostic)
    return taken


def _whole_line(snapshot: DocumentSnapshot, line: int) -> Range:
    return Range.on_line(line, 0, len(snapshot.line_at(line)))
