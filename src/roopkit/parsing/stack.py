"""
Block stack tracker.

Folds a document's line classifications into a stack trace in one left-to-right
pass: the indentation level of every line, the frames open at every line, the
span of every block, and the balance facts the diagnostics engine reports.

Only task frames need an explicit `end task`. Generic blocks close implicitly
when a later statement is indented at or left of their header, when a closer or
branch of lower nesting arrives, or at end of document.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from roopkit.exceptions import ErrorContext, StackInvariantError
from roopkit.parsing.classifier import LineClassification, LineKind

logger = logging.getLogger(__name__)

# Frames a transitional header may continue
CHAIN_KEYWORDS = frozenset({"if", "elseif"})


class FrameKind(Enum):
    """Kind of an open block."""

    TASK = "task"
    GENERIC_BLOCK = "generic_block"


@dataclass(frozen=True)
class BlockFrame:
    """
    One open block on the stack.

    Params:
        label: Task title, or the header keyword phrase for generic blocks
        open_line: Line index of the header that pushed the frame
        kind: Task or generic block
        keyword: Normalised header keyword
        indent: Source indentation of the header line
        depth: Nesting level the header line itself is written at
        is_template: True for template-task frames
        titled: False when a task opener carried no quoted title
    """

    label: str
    open_line: int
    kind: FrameKind
    keyword: str
    indent: int
    depth: int
    is_template: bool = False
    titled: bool = True

    @property
    def is_task(self) -> bool:
        return self.kind is FrameKind.TASK

    @property
    def continues_chain(self) -> bool:
        return self.kind is FrameKind.GENERIC_BLOCK and self.keyword in CHAIN_KEYWORDS


@dataclass(frozen=True)
class FrameSpan:
    """
    The extent of a block once it has been closed.

    Params:
        frame: The block
        close_line: Last line belonging to the block
        explicit: True when closed by an `end task` line
    """

    frame: BlockFrame
    close_line: int
    explicit: bool = False

    @property
    def line_count(self) -> int:
        return self.close_line - self.frame.open_line + 1


@dataclass(frozen=True)
class LineState:
    """Nesting level a line is written at and the frames open after it."""

    line: int
    level: int
    frames: tuple[BlockFrame, ...]


@dataclass(frozen=True)
class StackTrace:
    """
    Per-line nesting record for a whole document.

    Params:
        classifications: One classification per line
        states: One LineState per line
        spans: Every block's extent, ordered by opening line
        orphan_closers: Lines holding `end task` with no open task
        unclosed_tasks: Task frames still open at end of document, in opening order
        orphan_branches: Lines holding `elseif`/`else` with no `if` chain to continue
    """

    classifications: tuple[LineClassification, ...]
    states: tuple[LineState, ...]
    spans: tuple[FrameSpan, ...]
    orphan_closers: tuple[int, ...] = ()
    unclosed_tasks: tuple[BlockFrame, ...] = ()
    orphan_branches: tuple[int, ...] = ()

    @property
    def levels(self) -> tuple[int, ...]:
        return tuple(state.level for state in self.states)

    @property
    def task_spans(self) -> tuple[FrameSpan, ...]:
        return tuple(span for span in self.spans if span.frame.is_task)

    @property
    def is_balanced(self) -> bool:
        return not self.orphan_closers and not self.unclosed_tasks

    def level_at(self, line: int) -> int:
        return self.states[line].level


class StackTracker:
    """Single-pass builder of a `StackTrace`; use once per document."""

    def __init__(self, classifications: Sequence[LineClassification]):
        self._classifications = tuple(classifications)
        self._stack: list[BlockFrame] = []
        self._states: list[LineState] = []
        self._spans: list[FrameSpan] = []
        self._orphan_closers: list[int] = []
        self._orphan_branches: list[int] = []
        self._unclosed_tasks: list[BlockFrame] = []
        self._last_content_line = -1

    def build(self) -> StackTrace:
        for index, classification in enumerate(self._classifications):
            self._visit(index, classification)
        self._close_at_end_of_document()

        logger.debug(
            "Stack trace built: %d lines, %d spans, %d orphan closers, %d unclosed tasks",
            len(self._states),
            len(self._spans),
            len(self._orphan_closers),
            len(self._unclosed_tasks),
        )

        return StackTrace(
            classifications=self._classifications,
            states=tuple(self._states),
            spans=tuple(sorted(self._spans, key=lambda span: span.frame.open_line)),
            orphan_closers=tuple(self._orphan_closers),
            unclosed_tasks=tuple(self._unclosed_tasks),
            orphan_branches=tuple(self._orphan_branches),
        )

    def _visit(self, index: int, classification: LineClassification) -> None:
        kind = classification.kind

        # Blank and comment lines neither open nor close anything
        if not classification.is_structural:
            self._record(index, len(self._stack))
            if kind is LineKind.COMMENT:
                self._last_content_line = index
            return

        if kind is LineKind.CLOSING_KEYWORD:
            level = self._close_task(index)
        elif kind is LineKind.TRANSITIONAL_HEADER:
            level = self._continue_chain(index, classification)
        else:
            self._close_dedented(classification.indent)
            level = len(self._stack)
            if kind is LineKind.OPENING_HEADER:
                self._stack.append(self._new_frame(index, classification, level))

        self._record(index, level)
        self._last_content_line = index

    def _close_task(self, index: int) -> int:
        task_position = next(
            (
                position
                for position in range(len(self._stack) - 1, -1, -1)
                if self._stack[position].is_task
            ),
            None,
        )
        if task_position is None:
            self._orphan_closers.append(index)
            return len(self._stack)

        while len(self._stack) > task_position + 1:
            self._pop(self._last_content_line, index)
        self._pop(index, index, explicit=True)
        return len(self._stack)

    def _continue_chain(self, index: int, classification: LineClassification) -> int:
        indent = classification.indent
        # Deeper blocks, and non-chain blocks at the branch's own column, end here
        while self._stack and not self._stack[-1].is_task:
            top = self._stack[-1]
            if top.indent > indent or (top.indent == indent and not top.continues_chain):
                self._pop(self._last_content_line, index)
            else:
                break

        if self._stack and self._stack[-1].continues_chain:
            self._pop(self._last_content_line, index)
        else:
            self._orphan_branches.append(index)

        level = len(self._stack)
        self._stack.append(self._new_frame(index, classification, level))
        return level

    def _close_dedented(self, indent: int) -> None:
        while (
            self._stack
            and not self._stack[-1].is_task
            and self._stack[-1].indent >= indent
        ):
            self._pop(self._last_content_line, None)

    def _close_at_end_of_document(self) -> None:
        last_line = len(self._classifications) - 1
        unclosed = []
        while self._stack:
            frame = self._stack[-1]
            if frame.is_task:
                unclosed.append(frame)
                self._pop(last_line, None)
            else:
                self._pop(self._last_content_line, None)
        self._unclosed_tasks = sorted(unclosed, key=lambda frame: frame.open_line)

    def _pop(self, close_line: int, at_line: int | None, explicit: bool = False) -> None:
        if not self._stack:
            raise StackInvariantError(
                "pop on an empty block stack", ErrorContext(line=at_line)
            )
        frame = self._stack.pop()
        self._spans.append(
            FrameSpan(frame=frame, close_line=max(close_line, frame.open_line), explicit=explicit)
        )

    def _record(self, index: int, level: int) -> None:
        if level < 0:
            raise StackInvariantError(
                f"negative nesting level {level}", ErrorContext(line=index)
            )
        self._states.append(LineState(line=index, level=level, frames=tuple(self._stack)))

    @staticmethod
    def _new_frame(
        index: int, classification: LineClassification, depth: int
    ) -> BlockFrame:
        keyword = classification.keyword or ""
        if classification.opens_task:
            titled = bool(classification.title)
            return BlockFrame(
                label=classification.title if titled else f"Task@{index + 1}",
                open_line=index,
                kind=FrameKind.TASK,
                keyword=keyword,
                indent=classification.indent,
                depth=depth,
                is_template=classification.is_template,
                titled=titled,
            )
        return BlockFrame(
            label=keyword,
            open_line=index,
            kind=FrameKind.GENERIC_BLOCK,
            keyword=keyword,
            indent=classification.indent,
            depth=depth,
        )


def build_stack_trace(classifications: Iterable[LineClassification]) -> StackTrace:
    """
    Fold classified lines into a stack trace.

    Params:
        classifications: One classification per document line, in order

    Returns:
        StackTrace describing nesting, block spans and balance facts
    """
    return StackTracker(list(classifications)).build()
