"""
Analysis facade for host integrations.

A `StructureAnalyzer` binds one keyword catalog, one settings value and one
line classifier. Every call recomputes from the snapshot it is given; nothing
is cached between calls, so an analyzer can be shared by any number of
documents and results never go stale.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from roopkit.completion import (
    CompletionItem,
    ContextTag,
    Hover,
    completion_items,
    hover_at,
    resolve_completion_context,
)
from roopkit.core.catalog import DEFAULT_CATALOG, KeywordCatalog
from roopkit.core.document import DocumentSnapshot
from roopkit.core.settings import DEFAULT_SETTINGS, AnalysisSettings
from roopkit.core.types import Position
from roopkit.diagnostics import CodeAction, Diagnostic, compute_diagnostics, quick_fixes
from roopkit.parsing import (
    LineClassification,
    LineClassifier,
    RegexLineClassifier,
    StackTrace,
    build_stack_trace,
)
from roopkit.views import StructureViews, compute_structure_views, format_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    """Everything one pass produces for a snapshot."""

    uri: str | None
    version: int
    trace: StackTrace
    diagnostics: tuple[Diagnostic, ...]
    views: StructureViews


class StructureAnalyzer:
    """
    Entry point bundling the five engine operations.

    Params:
        catalog: Vocabulary; the settings' extra keywords are merged in
        settings: Host configuration
        classifier: Line classifier; defaults to the regex classifier for `catalog`
    """

    def __init__(
        self,
        catalog: KeywordCatalog = DEFAULT_CATALOG,
        settings: AnalysisSettings = DEFAULT_SETTINGS,
        classifier: LineClassifier | None = None,
    ):
        self.settings = settings
        self.catalog = catalog.with_extra_keywords(settings.completion.extra_keywords)
        self.classifier = classifier or RegexLineClassifier(self.catalog)

    def classify(self, line: str) -> LineClassification:
        return self.classifier.classify(line)

    def classify_document(self, snapshot: DocumentSnapshot) -> list[LineClassification]:
        return [self.classifier.classify(line) for line in snapshot.lines]

    def build_stack_trace(
        self, source: DocumentSnapshot | Sequence[LineClassification]
    ) -> StackTrace:
        """Build a stack trace from a snapshot or from already classified lines."""
        if isinstance(source, DocumentSnapshot):
            source = self.classify_document(source)
        return build_stack_trace(source)

    def compute_diagnostics(self, snapshot: DocumentSnapshot) -> list[Diagnostic]:
        trace = self.build_stack_trace(snapshot)
        return compute_diagnostics(snapshot, trace, self.settings, self.catalog)

    def compute_structure_views(self, snapshot: DocumentSnapshot) -> StructureViews:
        """Folding ranges, outline symbols and formatter edits, from a fresh trace."""
        trace = self.build_stack_trace(snapshot)
        return compute_structure_views(snapshot, trace, self.settings)

    def resolve_completion_context(self, line_prefix: str) -> ContextTag:
        return resolve_completion_context(line_prefix)

    def analyze(self, snapshot: DocumentSnapshot) -> AnalysisResult:
        """
        Run a full pass: one trace, then diagnostics and every derived view.

        Params:
            snapshot: Document to analyse

        Returns:
            AnalysisResult tagged with the snapshot's identity and version
        """
        trace = self.build_stack_trace(snapshot)
        result = AnalysisResult(
            uri=snapshot.uri,
            version=snapshot.version,
            trace=trace,
            diagnostics=tuple(
                compute_diagnostics(snapshot, trace, self.settings, self.catalog)
            ),
            views=compute_structure_views(snapshot, trace, self.settings),
        )
        logger.debug(
            "Analysed %s v%d: %d lines, %d diagnostics, %d folds",
            snapshot.uri or "<untitled>",
            snapshot.version,
            snapshot.line_count,
            len(result.diagnostics),
            len(result.views.folding_ranges),
        )
        return result

    def format_text(self, snapshot: DocumentSnapshot) -> str:
        return format_text(snapshot, self.build_stack_trace(snapshot), self.settings)

    def complete(self, snapshot: DocumentSnapshot, position: Position) -> list[CompletionItem]:
        """Suggestions for the cursor at `position`."""
        prefix = snapshot.line_at(position.line)[: position.character]
        return completion_items(prefix, self.catalog, self.settings)

    def hover(self, snapshot: DocumentSnapshot, position: Position) -> Hover | None:
        return hover_at(
            snapshot.line_at(position.line), position.line, position.character, self.catalog
        )

    def quick_fixes(
        self, snapshot: DocumentSnapshot, diagnostics: Iterable[Diagnostic]
    ) -> list[CodeAction]:
        trace = self.build_stack_trace(snapshot)
        return quick_fixes(snapshot, trace, diagnostics, self.settings)
