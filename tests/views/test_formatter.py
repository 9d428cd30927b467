"""
Tests for the re-indentation formatter.
"""

import pytest

from roopkit.core.document import DocumentSnapshot
from roopkit.core.settings import AnalysisSettings
from roopkit.core.types import Range, TextEdit
from roopkit.views import compute_structure_views, format_text, formatting_edits
from tests.support import SAMPLE_DOCUMENT, trace_for


def formatted(text: str, settings: AnalysisSettings | None = None) -> str:
    snapshot, trace = trace_for(text)
    return format_text(snapshot, trace, settings or AnalysisSettings())


def indent(size: int) -> AnalysisSettings:
    return AnalysisSettings.from_host({"format": {"indentSize": size}})


class TestFormatText:
    """Test the rewritten document text."""

    def test_task_body_indented(self):
        """Test task bodies are indented one level."""
        assert formatted('start task "A"\nsay hi\nend task') == 'start task "A"\n  say hi\nend task'

    def test_over_indented_body(self):
        """Test deep source indentation collapses to one level per block."""
        assert formatted("if a:\n        say x\nsay y") == "if a:\n  say x\nsay y"

    def test_missing_colon_inserted(self):
        """Test headers gain their missing colon."""
        assert formatted("repeat 3 times\n  say hi") == "repeat 3 times:\n  say hi"

    def test_colon_inserted_before_comment(self):
        """Test the colon goes before a trailing comment."""
        assert formatted("while busy  // spin\n  say hi") == "while busy:  // spin\n  say hi"

    def test_blank_lines_emptied(self):
        """Test whitespace-only lines lose their whitespace."""
        assert formatted("if a:\n  say x\n   \n  say y") == "if a:\n  say x\n\n  say y"

    def test_tabs_replaced(self):
        """Test tab indentation is rewritten with spaces."""
        text = "when a:\n\tif b:\n\t\tsay x\n\telse:\n\t\tsay y"
        assert formatted(text) == "when a:\n  if b:\n    say x\n  else:\n    say y"

    def test_indent_size(self):
        """Test the configured indent width is used."""
        assert formatted("if a:\n say x", indent(4)) == "if a:\n    say x"

    def test_indent_size_is_clamped(self):
        """Test out-of-range indent widths are clamped."""
        assert formatted("if a:\n say x", indent(20)) == "if a:\n" + " " * 8 + "say x"

    def test_comment_lines_follow_depth(self):
        """Test comments are aligned with the block they sit in."""
        assert formatted("if a:\n// note\n  say x") == "if a:\n  // note\n  say x"

    def test_line_endings_preserved(self):
        """Test CRLF documents stay CRLF."""
        assert formatted('start task "A"\r\nsay hi\r\nend task\r\n') == (
            'start task "A"\r\n  say hi\r\nend task\r\n'
        )

    def test_disabled_returns_original(self):
        """Test a disabled formatter leaves text untouched."""
        settings = AnalysisSettings.from_host({"format": {"enabled": False}})
        assert formatted("if a\n      say x", settings) == "if a\n      say x"


class TestIdempotence:
    """Test formatting a formatted document changes nothing."""

    @pytest.mark.parametrize(
        "text",
        [
            SAMPLE_DOCUMENT,
            "\n".join(line.strip() for line in SAMPLE_DOCUMENT.splitlines()),
            "if a\n      say x\nsay y",
            'start task "A"\nsay hi\nend task\nend task',
            "when a:\n\tif b:\n\t\tsay x\n\telse:\n\t\tsay y",
            "say hi\nelse:\n     x\n",
        ],
        ids=["sample", "flattened", "overindented", "orphan_closer", "tabs", "orphan_else"],
    )
    def test_format_twice(self, text):
        """Test format(format(d)) == format(d)."""
        once = formatted(text)
        assert formatted(once) == once

    def test_formatted_document_has_no_edits(self):
        """Test edits for a formatted document are empty."""
        once = formatted('start task "A"\nif x\nsay hi\nend task')
        snapshot, trace = trace_for(once)
        assert formatting_edits(snapshot, trace) == []


class TestFormattingEdits:
    """Test the per-line edit list."""

    def test_sample_needs_no_edits(self):
        """Test the correctly formatted sample produces no edits."""
        snapshot, trace = trace_for(SAMPLE_DOCUMENT)
        assert formatting_edits(snapshot, trace) == []

    def test_only_changed_lines_edited(self):
        """Test whole-line edits are emitted for changed lines only."""
        snapshot, trace = trace_for('start task "A"\nsay hi\n  say bye\nend task')

        assert formatting_edits(snapshot, trace) == [
            TextEdit(Range.on_line(1, 0, len("say hi")), "  say hi"),
        ]

    def test_disabled_produces_no_edits(self):
        """Test a disabled formatter emits no edits."""
        settings = AnalysisSettings.from_host({"format": {"enabled": False}})
        snapshot, trace = trace_for("if a\n      say x")
        assert formatting_edits(snapshot, trace, settings) == []

    def test_structure_views_bundle(self):
        """Test the views bundle carries folds, symbols and edits from one trace."""
        snapshot = DocumentSnapshot.from_text('start task "A"\nsay hi\nend task')
        _, trace = trace_for(snapshot.text)
        views = compute_structure_views(snapshot, trace)

        assert len(views.folding_ranges) == 1
        assert [symbol.name for symbol in views.symbols] == ["A"]
        assert len(views.edits) == 1
