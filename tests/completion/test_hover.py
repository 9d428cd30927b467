"""
Tests for keyword hover documentation.
"""

from roopkit.completion import hover_at, word_span_at
from roopkit.core.catalog import KeywordCatalog
from roopkit.core.types import Range


class TestWordSpan:
    """Test word boundary detection."""

    def test_inside_word(self):
        """Test the span covers the whole word around the cursor."""
        assert word_span_at("  grasp cup", 4) == (2, 7)

    def test_hyphenated(self):
        """Test hyphens are word characters."""
        assert word_span_at("self-check now", 6) == (0, 10)

    def test_between_words(self):
        """Test a cursor on whitespace yields an empty span."""
        assert word_span_at("a  b", 2) == (2, 2)

    def test_cursor_past_end(self):
        """Test the cursor is clamped to the line."""
        assert word_span_at("say", 99) == (0, 3)


class TestHover:
    """Test documentation lookup."""

    def test_single_word(self):
        """Test a documented single word."""
        hover = hover_at("  grasp cup", 3, 4)

        assert hover.contents.startswith("**grasp** - ")
        assert hover.range == Range.on_line(3, 2, 7)

    def test_phrase_wins_over_word(self):
        """Test a documented phrase covering the cursor wins over its words."""
        hover = hover_at("turn on Light1", 0, 6)

        assert hover.contents.startswith("**turn on** - Switches a device")
        assert hover.range == Range.on_line(0, 0, 7)

    def test_phrase_case_insensitive(self):
        """Test phrases match regardless of case."""
        hover = hover_at("End Task", 0, 1)

        assert hover.contents == "**end task** - Ends the current task."

    def test_undocumented_word(self):
        """Test undocumented words have no hover."""
        assert hover_at("wipe table", 0, 1) is None

    def test_whitespace(self):
        """Test hovering whitespace returns nothing."""
        assert hover_at("say   hi", 0, 4) is None

    def test_custom_docs(self):
        """Test the catalog's documentation table is used."""
        catalog = KeywordCatalog(docs={"hum": "Makes a noise."})

        assert hover_at("hum", 0, 0, catalog).contents == "**hum** - Makes a noise."
