"""
Tests for document snapshots and shared value types.
"""

import pytest
from attrs.exceptions import FrozenInstanceError

from roopkit.core.document import DocumentSnapshot
from roopkit.core.types import Position, Range


class TestDocumentSnapshot:
    """Test splitting and reassembling document text."""

    def test_split_lines(self):
        """Test text is split on line breaks."""
        snapshot = DocumentSnapshot.from_text("a\nb\nc", version=3, uri="file:///x.roop")

        assert snapshot.lines == ("a", "b", "c")
        assert snapshot.version == 3
        assert snapshot.uri == "file:///x.roop"
        assert snapshot.eol == "\n"

    def test_trailing_newline_gives_empty_last_line(self):
        """Test a final newline leaves an empty last line."""
        assert DocumentSnapshot.from_text("a\n").lines == ("a", "")

    def test_empty_text_is_one_line(self):
        """Test an empty document has one empty line."""
        snapshot = DocumentSnapshot.from_text("")

        assert snapshot.lines == ("",)
        assert snapshot.line_count == 1

    @pytest.mark.parametrize("eol", ["\n", "\r\n", "\r"])
    def test_line_endings(self, eol):
        """Test each line ending style is split and remembered."""
        text = eol.join(["a", "b", ""])
        snapshot = DocumentSnapshot.from_text(text)

        assert snapshot.lines == ("a", "b", "")
        assert snapshot.eol == eol
        assert snapshot.text == text

    def test_mixed_line_endings_use_first(self):
        """Test the first line ending seen wins."""
        snapshot = DocumentSnapshot.from_text("a\r\nb\nc")

        assert snapshot.lines == ("a", "b", "c")
        assert snapshot.eol == "\r\n"

    def test_line_at(self):
        """Test line access is safe past either end."""
        snapshot = DocumentSnapshot.from_text("a\nb")

        assert snapshot.line_at(1) == "b"
        assert snapshot.line_at(2) == ""
        assert snapshot.line_at(-1) == ""

    def test_lines_converted_to_tuple(self):
        """Test snapshots built from a list hold a tuple."""
        assert DocumentSnapshot(lines=["a", "b"]).lines == ("a", "b")

    def test_frozen(self):
        """Test snapshots are immutable."""
        snapshot = DocumentSnapshot.from_text("a")
        with pytest.raises(FrozenInstanceError):
            snapshot.version = 2


class TestRange:
    """Test range helpers."""

    def test_on_line(self):
        """Test single-line ranges."""
        assert Range.on_line(2, 1, 4) == Range(Position(2, 1), Position(2, 4))

    def test_is_empty(self):
        """Test empty ranges are insertion points."""
        assert Range.on_line(0, 3, 3).is_empty
        assert not Range.on_line(0, 3, 4).is_empty
