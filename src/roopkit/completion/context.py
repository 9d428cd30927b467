"""
Completion context resolver.

Classifies the text before the cursor into a context tag using an ordered rule
table. Specific patterns come first; anything unmatched is `ANYWHERE`, which
means the full catalog with no contextual snippets.
"""

import re
from enum import Enum

from roopkit.parsing.classifier import split_code_and_comment


class ContextTag(Enum):
    """Authoring context at the cursor."""

    LINE_START = "line_start"
    EVENT_BRANCH = "event_branch"
    LOOP_COUNT = "loop_count"
    MODULE_DECLARATION = "module_declaration"
    TIME_TRIGGER = "time_trigger"
    CONDITION = "condition"
    ANYWHERE = "anywhere"


# Checked in order; the first match wins
CONTEXT_RULES: tuple[tuple[re.Pattern[str], ContextTag], ...] = (
    (re.compile(r"^\s*$"), ContextTag.LINE_START),
    (re.compile(r"\bon\s+$", re.IGNORECASE), ContextTag.EVENT_BRANCH),
    (re.compile(r"\brepeat\s+\d*\s*$", re.IGNORECASE), ContextTag.LOOP_COUNT),
    (re.compile(r"\buse\s+$", re.IGNORECASE), ContextTag.MODULE_DECLARATION),
    (re.compile(r"\bat\s+time\s*$", re.IGNORECASE), ContextTag.TIME_TRIGGER),
    (re.compile(r"\bif\s+$", re.IGNORECASE), ContextTag.CONDITION),
)


def resolve_completion_context(line_prefix: str) -> ContextTag:
    """
    Classify the line text before the cursor.

    Params:
        line_prefix: Text of the cursor's line from column 0 up to the cursor

    Returns:
        The first matching ContextTag, or ANYWHERE
    """
    # Keywords typed inside a comment are prose, not structure
    _, comment = split_code_and_comment(line_prefix)
    if comment is not None:
        return ContextTag.ANYWHERE

    for pattern, tag in CONTEXT_RULES:
        if pattern.search(line_prefix):
            return tag
    return ContextTag.ANYWHERE
