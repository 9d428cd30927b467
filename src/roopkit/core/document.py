"""
Immutable document snapshots handed to the engine by the host.
"""

import re

from attrs import field, frozen

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@frozen
class DocumentSnapshot:
    """One version of a document's text, split into lines.

    The engine never mutates a snapshot; every analysis pass reads one
    snapshot and returns values derived from it alone.
    """

    lines: tuple[str, ...] = field(converter=tuple)
    version: int = 0
    uri: str | None = None
    eol: str = "\n"

    @classmethod
    def from_text(
        cls, text: str, *, version: int = 0, uri: str | None = None
    ) -> "DocumentSnapshot":
        """Split raw text into a snapshot, remembering the first line ending seen."""
        match = _LINE_BREAK.search(text)
        eol = match.group(0) if match else "\n"
        return cls(
            lines=_LINE_BREAK.split(text), version=version, uri=uri, eol=eol
        )

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def text(self) -> str:
        return self.eol.join(self.lines)

    def line_at(self, index: int) -> str:
        """Return the text of line `index`, or an empty string past the end."""
        if 0 <= index < len(self.lines):
            return self.lines[index]
        return ""
