"""
Read-only views derived from a stack trace.

This package provides folding ranges, outline symbols and formatter edits. The
three builders read the same trace independently and never modify it.
"""

from dataclasses import dataclass

from roopkit.core.document import DocumentSnapshot
from roopkit.core.settings import DEFAULT_SETTINGS, AnalysisSettings
from roopkit.core.types import TextEdit
from roopkit.parsing.stack import StackTrace
from roopkit.views.folding import (
    FoldingKind,
    FoldingRange,
    block_folding_ranges,
    folding_ranges,
    region_folding_ranges,
)
from roopkit.views.formatter import format_line, format_lines, format_text, formatting_edits
from roopkit.views.symbols import DocumentSymbol, SymbolKind, document_symbols


@dataclass(frozen=True)
class StructureViews:
    """Folds, outline and formatter edits computed from one stack trace."""

    folding_ranges: tuple[FoldingRange, ...]
    symbols: tuple[DocumentSymbol, ...]
    edits: tuple[TextEdit, ...]


def compute_structure_views(
    snapshot: DocumentSnapshot,
    trace: StackTrace,
    settings: AnalysisSettings = DEFAULT_SETTINGS,
) -> StructureViews:
    """Build folding ranges, outline symbols and formatter edits for a snapshot."""
    return StructureViews(
        folding_ranges=tuple(folding_ranges(trace)),
        symbols=tuple(document_symbols(snapshot, trace)),
        edits=tuple(formatting_edits(snapshot, trace, settings)),
    )


__all__ = [
    "DocumentSymbol",
    "FoldingKind",
    "FoldingRange",
    "StructureViews",
    "SymbolKind",
    "block_folding_ranges",
    "compute_structure_views",
    "document_symbols",
    "folding_ranges",
    "format_line",
    "format_lines",
    "format_text",
    "formatting_edits",
    "region_folding_ranges",
]
