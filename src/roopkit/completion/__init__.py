"""
ROOP authoring assistance.

This package provides the completion context resolver, the suggestion sets per
context, and keyword hover documentation.
"""

from roopkit.completion.context import (
    CONTEXT_RULES,
    ContextTag,
    resolve_completion_context,
)
from roopkit.completion.hover import Hover, hover_at, word_span_at
from roopkit.completion.items import (
    CompletionItem,
    CompletionItemKind,
    catalog_items,
    completion_items,
    contextual_items,
)

__all__ = [
    "CONTEXT_RULES",
    "CompletionItem",
    "CompletionItemKind",
    "ContextTag",
    "Hover",
    "catalog_items",
    "completion_items",
    "contextual_items",
    "hover_at",
    "resolve_completion_context",
    "word_span_at",
]
