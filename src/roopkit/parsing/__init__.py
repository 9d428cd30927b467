"""
ROOP structural parsing components.

This package provides the lexical line classifier and the block stack tracker
that every diagnostic and derived view is computed from.
"""

from roopkit.parsing.classifier import (
    LineClassification,
    LineClassifier,
    LineKind,
    RegexLineClassifier,
    RegionMarker,
    classify,
    split_code_and_comment,
)
from roopkit.parsing.stack import (
    BlockFrame,
    FrameKind,
    FrameSpan,
    LineState,
    StackTrace,
    StackTracker,
    build_stack_trace,
)

__all__ = [
    "BlockFrame",
    "FrameKind",
    "FrameSpan",
    "LineClassification",
    "LineClassifier",
    "LineKind",
    "LineState",
    "RegexLineClassifier",
    "RegionMarker",
    "StackTrace",
    "StackTracker",
    "build_stack_trace",
    "classify",
    "split_code_and_comment",
]
