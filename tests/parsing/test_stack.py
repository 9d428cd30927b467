"""
Tests for the block stack tracker.

This module tests level computation, implicit and explicit block closing,
branch chains, balance facts and the invariants of the stack trace.
"""

import pytest

from roopkit.exceptions import StackInvariantError
from roopkit.parsing.classifier import LineKind, classify
from roopkit.parsing.stack import FrameKind, StackTracker, build_stack_trace
from tests.support import SAMPLE_DOCUMENT, trace_for


def levels(text: str) -> list[int]:
    _, trace = trace_for(text)
    return list(trace.levels)


class TestLevels:
    """Test the indentation level recorded for each line."""

    def test_flat_document(self):
        """Test statements outside any block are at level 0."""
        assert levels("say hi\nsay bye") == [0, 0]

    def test_task_body_is_nested(self):
        """Test task bodies are one level deeper than the opener."""
        assert levels('start task "A"\nsay hi\nend task') == [0, 1, 0]

    def test_task_body_without_source_indent(self):
        """Test task frames do not close on dedent."""
        assert levels('start task "A"\nif x:\n  say hi\nsay bye\nend task') == [0, 1, 2, 1, 0]

    def test_generic_block_closes_on_dedent(self):
        """Test a generic block closes when indentation returns to its header."""
        assert levels("if x:\n  say hi\nsay bye") == [0, 1, 0]

    def test_generic_block_with_empty_body(self):
        """Test a header followed by a same-indent line has an empty body."""
        assert levels("if x:\nsay hi") == [0, 0]

    def test_nested_dedent_closes_several_blocks(self):
        """Test one dedent can close more than one generic block."""
        text = "when a:\n  if b:\n    while c:\n      say hi\nsay bye"
        assert levels(text) == [0, 1, 2, 3, 0]

    def test_partial_dedent(self):
        """Test dedenting to an inner header's column closes only that block."""
        text = "if a:\n    if b:\n        x\n  y"
        assert levels(text) == [0, 1, 2, 1]

    def test_blank_and_comment_lines_are_transparent(self):
        """Test blank and comment lines take the current depth and close nothing."""
        text = "if a:\n  x\n\n// note\n  y\nz"
        assert levels(text) == [0, 1, 1, 1, 1, 0]

    def test_opener_increments_by_one(self):
        """Test the line after any opener is exactly one level deeper."""
        _, trace = trace_for(SAMPLE_DOCUMENT)
        for state, classification in zip(trace.states, trace.classifications):
            if classification.kind is LineKind.OPENING_HEADER and state.line + 1 < len(trace.states):
                next_state = trace.states[state.line + 1]
                assert next_state.level == state.level + 1

    def test_levels_never_negative(self):
        """Test stray closers never push the level below zero."""
        assert min(levels("end task\nend task\nsay hi\nelse:\n  x")) >= 0


class TestBranchChains:
    """Test elseif/else handling."""

    def test_else_realigns_with_if(self):
        """Test the transitional line sits at the if's level and its body one deeper."""
        text = "if a:\n  x\nelseif b:\n  y\nelse:\n  z"
        assert levels(text) == [0, 1, 0, 1, 0, 1]

    def test_else_closes_nested_blocks(self):
        """Test else closes deeper blocks inside the if body."""
        text = "if a:\n  while b:\n    x\nelse:\n  y"
        assert levels(text) == [0, 1, 2, 0, 1]

    def test_else_at_nested_if_column(self):
        """Test else at an inner if's column continues the inner if."""
        text = "if a:\n  if b:\n    x\n  else:\n    y\nz"
        assert levels(text) == [0, 1, 2, 1, 2, 0]

    def test_sibling_block_at_else_column_is_closed(self):
        """Test a non-chain block at the else's column is closed first."""
        text = "if a:\n  x\n  while c:\n    y\nelse:\n  z"
        _, trace = trace_for(text)
        assert list(trace.levels) == [0, 1, 1, 2, 0, 1]
        assert trace.orphan_branches == ()

    def test_chain_spans(self):
        """Test each branch is its own span ending before the next branch."""
        _, trace = trace_for("if a:\n  x\nelse:\n  y")
        spans = {(span.frame.keyword, span.frame.open_line, span.close_line) for span in trace.spans}
        assert spans == {("if", 0, 1), ("else", 2, 3)}

    def test_orphan_else_opens_fresh_block(self):
        """Test an else with no if chain opens a new block and is recorded."""
        _, trace = trace_for("say hi\nelse:\n  x")
        assert list(trace.levels) == [0, 0, 1]
        assert trace.orphan_branches == (1,)

    def test_else_after_else_is_orphan(self):
        """Test else does not continue an else."""
        _, trace = trace_for("if a:\n  x\nelse:\n  y\nelse:\n  z")
        assert trace.orphan_branches == (4,)


class TestTaskBalance:
    """Test explicit task closing and balance facts."""

    def test_balanced(self):
        """Test matched tasks leave no facts."""
        _, trace = trace_for('start task "A"\n  say hi\nend task')
        assert trace.is_balanced
        assert trace.task_spans[0].explicit

    def test_closer_without_opener(self):
        """Test a stray closer is recorded and leaves the stack empty."""
        _, trace = trace_for("end task\nsay hi")
        assert trace.orphan_closers == (0,)
        assert trace.states[0].frames == ()
        assert trace.states[1].level == 0

    def test_unclosed_task(self):
        """Test an unclosed task is reported and spans to the last line."""
        _, trace = trace_for('start task "A"\n  say hi\n')
        assert [frame.label for frame in trace.unclosed_tasks] == ["A"]
        span = trace.task_spans[0]
        assert span.close_line == 2
        assert not span.explicit

    def test_closer_pops_innermost_task(self):
        """Test end task closes the innermost task, leaving the outer one open."""
        _, trace = trace_for('start task "A"\nstart task "B"\nend task')
        assert [frame.label for frame in trace.unclosed_tasks] == ["A"]

    def test_closer_closes_open_generic_blocks(self):
        """Test end task first closes generic blocks nested inside the task."""
        _, trace = trace_for('start task "A"\n  if x:\n    say hi\nend task')
        if_span = next(span for span in trace.spans if span.frame.keyword == "if")
        assert if_span.close_line == 2
        assert trace.states[3].level == 0

    def test_closer_ignores_generic_blocks_without_task(self):
        """Test end task never closes a generic block on its own."""
        _, trace = trace_for("if x:\n  end task\n  say hi")
        assert trace.orphan_closers == (1,)
        assert list(trace.levels) == [0, 1, 1]

    def test_generic_blocks_need_no_closer(self):
        """Test generic blocks open at end of document are not facts."""
        _, trace = trace_for("when a:\n  if b:\n    x")
        assert trace.is_balanced
        assert {span.close_line for span in trace.spans} == {2}

    def test_untitled_task_label(self):
        """Test untitled tasks are labelled by line number."""
        _, trace = trace_for("say hi\nstart task\nend task")
        frame = trace.task_spans[0].frame
        assert frame.label == "Task@2"
        assert not frame.titled


class TestTraceShape:
    """Test structural properties of the trace."""

    def test_one_state_per_line(self):
        """Test every line gets exactly one state."""
        snapshot, trace = trace_for(SAMPLE_DOCUMENT)
        assert len(trace.states) == snapshot.line_count
        assert len(trace.classifications) == snapshot.line_count

    def test_frames_snapshot_nesting_order(self):
        """Test open frames are listed outermost first."""
        _, trace = trace_for(SAMPLE_DOCUMENT)
        frames = trace.states[5].frames
        assert [frame.kind for frame in frames] == [
            FrameKind.TASK,
            FrameKind.GENERIC_BLOCK,
            FrameKind.GENERIC_BLOCK,
        ]
        assert [frame.open_line for frame in frames] == sorted(f.open_line for f in frames)

    def test_spans_sorted_by_open_line(self):
        """Test spans are ordered by the line that opened them."""
        _, trace = trace_for(SAMPLE_DOCUMENT)
        opens = [span.frame.open_line for span in trace.spans]
        assert opens == sorted(opens)

    def test_empty_input(self):
        """Test an empty classification list yields an empty trace."""
        trace = build_stack_trace([])
        assert trace.states == ()
        assert trace.spans == ()

    def test_pop_on_empty_stack_is_invariant_error(self):
        """Test the tracker refuses to pop an empty stack."""
        tracker = StackTracker([classify("say hi")])
        with pytest.raises(StackInvariantError):
            tracker._pop(0, 0)
