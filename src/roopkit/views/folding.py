"""
Folding ranges derived from a stack trace.

Block folding and region-marker folding are computed independently: region
markers are comments, which the stack tracker never sees as structure.
"""

from dataclasses import dataclass
from enum import Enum

from roopkit.parsing.classifier import RegionMarker
from roopkit.parsing.stack import StackTrace


class FoldingKind(Enum):
    TASK = "task"
    BLOCK = "block"
    REGION = "region"


@dataclass(frozen=True)
class FoldingRange:
    """Inclusive line span the editor may collapse."""

    start_line: int
    end_line: int
    kind: FoldingKind


def block_folding_ranges(trace: StackTrace) -> list[FoldingRange]:
    """
    One fold per task span, and per generic block spanning more than one line.

    Task folds are kept even for a single line so every outline entry has a
    fold with the same extent.
    """
    folds = []
    for span in trace.spans:
        if span.frame.is_task:
            folds.append(
                FoldingRange(span.frame.open_line, span.close_line, FoldingKind.TASK)
            )
        elif span.close_line > span.frame.open_line:
            folds.append(
                FoldingRange(span.frame.open_line, span.close_line, FoldingKind.BLOCK)
            )
    return folds


def region_folding_ranges(trace: StackTrace) -> list[FoldingRange]:
    """Pair `// region` / `// endregion` comments; unpaired markers are ignored."""
    folds = []
    starts: list[int] = []

    for index, classification in enumerate(trace.classifications):
        if classification.region is RegionMarker.START:
            starts.append(index)
        elif classification.region is RegionMarker.END and starts:
            start = starts.pop()
            if index > start:
                folds.append(FoldingRange(start, index, FoldingKind.REGION))

    return folds


def folding_ranges(trace: StackTrace) -> list[FoldingRange]:
    """All folds of a document, ordered by start line then end line."""
    folds = block_folding_ranges(trace) + region_folding_ranges(trace)
    return sorted(folds, key=lambda fold: (fold.start_line, fold.end_line))
