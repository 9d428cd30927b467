"""
Lexical line classifier for the ROOP DSL.

Classification is a pure function of one line's text: it never looks at
neighbouring lines or at the position of the line in the document. Keyword-like
text inside string literals or after a `//` comment marker never makes a line
a header. Unrecognised text is a plain statement; nothing here raises.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from roopkit.core.catalog import DEFAULT_CATALOG, KeywordCatalog

TAB_WIDTH = 4


class LineKind(Enum):
    """Structural role of a line."""

    BLANK = "blank"
    COMMENT = "comment"
    OPENING_HEADER = "opening_header"
    CLOSING_KEYWORD = "closing_keyword"
    TRANSITIONAL_HEADER = "transitional_header"
    PLAIN_STATEMENT = "plain_statement"


class RegionMarker(Enum):
    """Explicit folding-region comment markers."""

    START = "start"
    END = "end"


@dataclass(frozen=True)
class LineClassification:
    """
    Everything the downstream builders need to know about a single line.

    Params:
        kind: Structural role of the line
        indent: Source indentation width in columns (tabs expanded)
        has_trailing_colon: True if the code part (comment removed) ends with ':'
        requires_colon: True if the header's syntax demands a trailing ':'
        keyword: Normalised header keyword (e.g. "if", "start task"); None for non-headers
        opens_task: True for task and template-task openers
        is_template: True for template-task openers
        title: Quoted title of a task opener, if present
        leading_token: Normalised first word or known phrase, lower-case
        token_start: Column where the leading token starts in the raw line
        token_end: Column just past the leading token
        code_end: Column just past the last code character (before comment/whitespace)
        region: Region marker carried by a comment-only line
        region_name: Optional name following a region start marker
    """

    kind: LineKind
    indent: int = 0
    has_trailing_colon: bool = False
    requires_colon: bool = False
    keyword: str | None = None
    opens_task: bool = False
    is_template: bool = False
    title: str | None = None
    leading_token: str | None = None
    token_start: int = 0
    token_end: int = 0
    code_end: int = 0
    region: RegionMarker | None = None
    region_name: str | None = None

    @property
    def is_structural(self) -> bool:
        """False for blank and comment lines, which are transparent to nesting."""
        return self.kind not in (LineKind.BLANK, LineKind.COMMENT)

    @property
    def is_header(self) -> bool:
        return self.kind in (LineKind.OPENING_HEADER, LineKind.TRANSITIONAL_HEADER)

    @property
    def missing_colon(self) -> bool:
        return self.is_header and self.requires_colon and not self.has_trailing_colon


class LineClassifier(Protocol):
    """Anything that maps a line of text to a `LineClassification`.

    The stack tracker and every derived builder depend only on this shape, so a
    grammar-based parser can replace the regex classifier without touching them.
    """

    def classify(self, line: str) -> LineClassification: ...


def split_code_and_comment(line: str) -> tuple[str, str | None]:
    """
    Split a line at the first `//` that is not inside a string literal.

    A single quote opens a string only at a word boundary, so apostrophes in
    words like "robot's" do not swallow a later comment.

    Params:
        line: Raw line text

    Returns:
        (code part, comment body without the marker) - comment is None if absent
    """
    quote = None
    escaped = False

    for i, char in enumerate(line):
        if quote:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
        elif char == '"':
            quote = char
        elif char == "'" and (i == 0 or not line[i - 1].isalnum()):
            quote = char
        elif char == "/" and line.startswith("//", i):
            return line[:i], line[i + 2 :]

    return line, None


def indent_width(line: str) -> int:
    """Width of the leading whitespace, expanding tabs."""
    prefix = line[: len(line) - len(line.lstrip())]
    return len(prefix.expandtabs(TAB_WIDTH))


class RegexLineClassifier:
    """Regex-driven, stateless classifier for the ROOP block keywords."""

    CLOSER_PATTERN = re.compile(r"^end\s+task\b", re.IGNORECASE)

    TASK_OPENER_PATTERN = re.compile(
        r'^start\s+task\b(?:\s+"(?P<title>[^"]*)")?', re.IGNORECASE
    )

    TEMPLATE_OPENER_PATTERN = re.compile(
        r'^template\s+task\b(?:\s+"(?P<title>[^"]*)")?', re.IGNORECASE
    )

    TRANSITIONAL_PATTERN = re.compile(r"^(?P<keyword>elseif|else)\b", re.IGNORECASE)

    # Always block headers; a missing ':' is a defect
    REQUIRED_COLON_HEADER_PATTERN = re.compile(
        r"^(?P<keyword>sync\s+when|with\s+timeout|when|on|at|if|repeat|while|for"
        r"|parallel|every|fallback)\b",
        re.IGNORECASE,
    )

    # Block headers only when written with ':'; otherwise ordinary statements
    OPTIONAL_COLON_HEADER_PATTERN = re.compile(
        r"^(?P<keyword>await\s+run|detached\s+run|run|context)\b", re.IGNORECASE
    )

    REGION_START_PATTERN = re.compile(r"^\s*#?region\b\s*(?P<name>.*?)\s*$")
    REGION_END_PATTERN = re.compile(r"^\s*#?endregion\b")

    WORD_PATTERN = re.compile(r"[A-Za-z][A-Za-z\-]*")

    def __init__(self, catalog: KeywordCatalog = DEFAULT_CATALOG):
        self._catalog = catalog
        phrases = sorted(
            {phrase.lower() for phrase in catalog.multi_word_phrases},
            key=len,
            reverse=True,
        )
        # A phrase only counts when followed by end, whitespace, ':' or a quote
        self._phrase_patterns = [
            (
                phrase,
                re.compile(
                    r"\s+".join(re.escape(word) for word in phrase.split())
                    + r"(?=$|[\s:\"'])",
                    re.IGNORECASE,
                ),
            )
            for phrase in phrases
        ]

    @property
    def catalog(self) -> KeywordCatalog:
        return self._catalog

    def classify(self, line: str) -> LineClassification:
        """
        Classify one line of text.

        Params:
            line: Raw line text without its line terminator

        Returns:
            LineClassification for the line
        """
        indent = indent_width(line)
        code, comment = split_code_and_comment(line)
        code_text = code.strip()

        if not code_text:
            if comment is None:
                return LineClassification(kind=LineKind.BLANK, indent=indent)
            return self._classify_comment(comment, indent)

        code_start = len(code) - len(code.lstrip())
        code_end = len(code.rstrip())
        has_colon = code_text.endswith(":")
        token, token_start, token_end = self._leading_token(code_text)
        common = {
            "indent": indent,
            "has_trailing_colon": has_colon,
            "leading_token": token,
            "token_start": code_start + token_start,
            "token_end": code_start + token_end,
            "code_end": code_end,
        }

        if self.CLOSER_PATTERN.match(code_text):
            return LineClassification(
                kind=LineKind.CLOSING_KEYWORD, keyword="end task", **common
            )

        match = self.TASK_OPENER_PATTERN.match(code_text)
        if match:
            return LineClassification(
                kind=LineKind.OPENING_HEADER,
                keyword="start task",
                opens_task=True,
                title=match.group("title"),
                **common,
            )

        match = self.TEMPLATE_OPENER_PATTERN.match(code_text)
        if match:
            return LineClassification(
                kind=LineKind.OPENING_HEADER,
                keyword="template task",
                requires_colon=True,
                opens_task=True,
                is_template=True,
                title=match.group("title"),
                **common,
            )

        match = self.TRANSITIONAL_PATTERN.match(code_text)
        if match:
            return LineClassification(
                kind=LineKind.TRANSITIONAL_HEADER,
                keyword=match.group("keyword").lower(),
                requires_colon=True,
                **common,
            )

        match = self.REQUIRED_COLON_HEADER_PATTERN.match(code_text)
        if match:
            return LineClassification(
                kind=LineKind.OPENING_HEADER,
                keyword=_normalize_phrase(match.group("keyword")),
                requires_colon=True,
                **common,
            )

        match = self.OPTIONAL_COLON_HEADER_PATTERN.match(code_text)
        if match and has_colon:
            return LineClassification(
                kind=LineKind.OPENING_HEADER,
                keyword=_normalize_phrase(match.group("keyword")),
                **common,
            )

        return LineClassification(kind=LineKind.PLAIN_STATEMENT, **common)

    def _classify_comment(self, comment: str, indent: int) -> LineClassification:
        match = self.REGION_START_PATTERN.match(comment)
        if match:
            return LineClassification(
                kind=LineKind.COMMENT,
                indent=indent,
                region=RegionMarker.START,
                region_name=match.group("name") or None,
            )
        if self.REGION_END_PATTERN.match(comment):
            return LineClassification(
                kind=LineKind.COMMENT, indent=indent, region=RegionMarker.END
            )
        return LineClassification(kind=LineKind.COMMENT, indent=indent)

    def _leading_token(self, code_text: str) -> tuple[str | None, int, int]:
        """Find the first known phrase or word; offsets are relative to `code_text`."""
        if code_text[0] in "\"'":
            return None, 0, 0

        for phrase, pattern in self._phrase_patterns:
            match = pattern.match(code_text)
            if match:
                return phrase, match.start(), match.end()

        match = self.WORD_PATTERN.match(code_text)
        if match:
            return match.group(0).lower(), match.start(), match.end()
        return None, 0, 0


def _normalize_phrase(text: str) -> str:
    return " ".join(text.lower().split())


_default_classifier = RegexLineClassifier()


def classify(line: str) -> LineClassification:
    """Classify `line` with the default catalog."""
    return _default_classifier.classify(line)
