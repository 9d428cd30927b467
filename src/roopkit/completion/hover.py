"""
Inline keyword documentation for the word under the cursor.
"""

import re
from dataclasses import dataclass

from roopkit.core.catalog import DEFAULT_CATALOG, KeywordCatalog
from roopkit.core.types import Range

_WORD_CHARS = re.compile(r"[A-Za-z0-9_\-]")


@dataclass(frozen=True)
class Hover:
    """Markdown shown for a documented keyword."""

    contents: str
    range: Range


def word_span_at(line_text: str, character: int) -> tuple[int, int]:
    """Return the [start, end) columns of the word touching `character`."""
    start = min(max(character, 0), len(line_text))
    end = start
    while start > 0 and _WORD_CHARS.match(line_text[start - 1]):
        start -= 1
    while end < len(line_text) and _WORD_CHARS.match(line_text[end]):
        end += 1
    return start, end


def hover_at(
    line_text: str,
    line: int,
    character: int,
    catalog: KeywordCatalog = DEFAULT_CATALOG,
) -> Hover | None:
    """
    Look up documentation for the keyword or phrase under the cursor.

    Documented multi-word phrases covering the cursor (`turn on`, `end task`)
    win over the single word.

    Params:
        line_text: Text of the cursor's line
        line: Line index, used for the returned range
        character: Cursor column
        catalog: Source of the documentation table

    Returns:
        Hover for a documented keyword, or None
    """
    lowered = line_text.lower()

    for key in sorted(catalog.docs, key=len, reverse=True):
        if " " not in key:
            continue
        pattern = r"\b" + r"\s+".join(re.escape(word) for word in key.split()) + r"\b"
        for match in re.finditer(pattern, lowered):
            if match.start() <= character <= match.end():
                return Hover(
                    contents=f"**{key}** - {catalog.docs[key]}",
                    range=Range.on_line(line, match.start(), match.end()),
                )

    start, end = word_span_at(line_text, character)
    word = lowered[start:end]
    doc = catalog.doc_for(word) if word else None
    if doc is None:
        return None
    return Hover(contents=f"**{word}** - {doc}", range=Range.on_line(line, start, end))
