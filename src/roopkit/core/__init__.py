"""
Core roopkit components.

This package provides the value types, document snapshots, keyword catalog and
settings model shared by the classifier, stack tracker and derived builders.
"""

from roopkit.core.catalog import DEFAULT_CATALOG, KeywordCatalog
from roopkit.core.document import DocumentSnapshot
from roopkit.core.settings import (
    DEFAULT_SETTINGS,
    AnalysisSettings,
    CheckSettings,
    CompletionSettings,
    FormatSettings,
    LintSettings,
    ValidationSettings,
)
from roopkit.core.types import Position, Range, TextEdit

__all__ = [
    "AnalysisSettings",
    "CheckSettings",
    "CompletionSettings",
    "DEFAULT_CATALOG",
    "DEFAULT_SETTINGS",
    "DocumentSnapshot",
    "FormatSettings",
    "KeywordCatalog",
    "LintSettings",
    "Position",
    "Range",
    "TextEdit",
    "ValidationSettings",
]
