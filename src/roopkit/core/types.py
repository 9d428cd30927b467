"""
Core value types shared by every roopkit component.

Positions and ranges use the editor convention: 0-based line and character
offsets, with the end position exclusive.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """A 0-based (line, character) location in a document."""

    line: int
    character: int


@dataclass(frozen=True)
class Range:
    """A half-open span between two positions."""

    start: Position
    end: Position

    @classmethod
    def on_line(cls, line: int, start_char: int, end_char: int) -> "Range":
        """Build a range that stays within a single line."""
        return cls(Position(line, start_char), Position(line, end_char))

    @property
    def is_empty(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True)
class TextEdit:
    """Replacement of the text in `range` with `new_text`."""

    range: Range
    new_text: str
