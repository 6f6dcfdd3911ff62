"""Mutable parse cursor and failure values.

Python 3.13+. Zero external dependencies.

Design Philosophy:
    - One State per parse: the only mutable object in the engine
    - Parsers return either a success value or a ParseFailure; the
      type alone tells them apart, no wrapper object on the hot path
    - Failures are plain data, never raised across combinator boundaries
    - Line:column computed on-demand (O(n) only for errors)

Line Ending Support:
    - LF (Unix, \\n): Fully supported
    - CRLF (Windows, \\r\\n): Supported (\\n is the line delimiter)
    - CR-only (Classic Mac, \\r): NOT supported

Pattern Reference:
    - Haskell Parsec
    - Rust nom parser combinator library
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Final, TypeIs

from crazyparser.core.depth_guard import DepthGuard
from crazyparser.diagnostics import Diagnostic, ErrorTemplate, SourceSpan

__all__ = [
    "FAIL",
    "NOTHING",
    "Absent",
    "NestingDepthExceeded",
    "ParseFailure",
    "State",
    "is_failure",
]


@dataclass(slots=True)
class State:
    """Parse cursor: the input plus the current read offset.

    Key Design Decisions:
        1. Mutable - primitives advance index in place
        2. Slots - many parsers touch it per code point
        3. Owned by exactly one run(); never shared across parses
        4. Depth guard travels with the cursor so lazy() needs no globals

    Example:
        >>> state = State("hello")
        >>> state.index
        0
        >>> state.index = 5
        >>> state.is_eof
        True
    """

    source: str
    index: int = 0
    depth_guard: DepthGuard = field(default_factory=DepthGuard)

    @property
    def is_eof(self) -> bool:
        """Check if the cursor sits at (or past) the end of input."""
        return self.index >= len(self.source)

    @property
    def remaining(self) -> str:
        """Unconsumed input from the cursor to the end."""
        return self.source[self.index :]

    def compute_line_col(self, pos: int | None = None) -> tuple[int, int]:
        """Compute line and column for a position.

        Args:
            pos: Offset to locate (default: the current index)

        Returns:
            (line, column) tuple (1-indexed, like text editors)

        Performance:
            O(n) where n = position. Only call for error reporting,
            not during normal parsing!

        Example:
            >>> state = State("line1\\nline2\\nline3", 8)
            >>> state.compute_line_col()
            (2, 3)
            >>> state.compute_line_col(0)
            (1, 1)
        """
        if pos is None:
            pos = self.index
        pos = max(0, min(pos, len(self.source)))

        line = self.source.count("\n", 0, pos) + 1
        last_newline = self.source.rfind("\n", 0, pos)
        col = pos - last_newline if last_newline >= 0 else pos + 1

        return (line, col)

    def span(self, start: int, end: int | None = None) -> SourceSpan:
        """Build a SourceSpan for [start, end) with line/column resolved.

        Args:
            start: Start offset
            end: End offset (default: start)
        """
        if end is None:
            end = start
        line, col = self.compute_line_col(start)
        return SourceSpan(start=start, end=end, line=line, column=col)


@dataclass(frozen=True, slots=True)
class ParseFailure:
    """A parse failure, returned as an ordinary value.

    Subclass to build grammar-specific failure taxonomies:

        >>> class MissingColon(ParseFailure):
        ...     pass
        >>> p = char(":").error(MissingColon())

    Subclasses propagate unchanged through map, bind and sequencing, so
    the caller receives exactly the instance attached with error().

    Attributes:
        diagnostic: Structured description of the failure (optional)
    """

    diagnostic: Diagnostic | None = None

    @property
    def message(self) -> str:
        """Human-readable failure message."""
        if self.diagnostic is not None:
            return self.diagnostic.message
        return ErrorTemplate.parse_failed().message

    def position(self, state: State) -> int:
        """Offset the failure refers to.

        The diagnostic span wins when present; otherwise the cursor
        position where parsing stopped.
        """
        if self.diagnostic is not None and self.diagnostic.span is not None:
            return self.diagnostic.span.start
        return state.index

    def format_error(self, state: State) -> str:
        """Format failure with line:column.

        Args:
            state: Final state of the parse that produced this failure

        Returns:
            Formatted error string with location

        Example:
            >>> state = State("hello\\nworld", 7)
            >>> FAIL.format_error(state)
            '2:2: Parsing failed'
        """
        line, col = state.compute_line_col(self.position(state))
        error_msg = f"{line}:{col}: {self.message}"

        if self.diagnostic is not None and self.diagnostic.expected:
            expected_str = ", ".join(f"'{e}'" for e in self.diagnostic.expected)
            error_msg += f" (expected: {expected_str})"

        return error_msg

    def format_with_context(self, state: State, context_lines: int = 2) -> str:
        """Format failure with source context and pointer.

        Shows the problematic line and a caret pointing to the failure.

        Args:
            state: Final state of the parse that produced this failure
            context_lines: Number of lines to show before/after the failure

        Returns:
            Multi-line formatted error with context

        Example:
            >>> state = State("a = 1\\nb = [2\\nc = 3", 11)
            >>> print(FAIL.format_with_context(state))
            2:6: Parsing failed
            <BLANKLINE>
               1 | a = 1
               2 | b = [2
                 |      ^
               3 | c = 3
        """
        line, col = state.compute_line_col(self.position(state))
        lines = state.source.split("\n")

        result_lines = [self.format_error(state), ""]

        start_line = max(1, line - context_lines)
        end_line = min(len(lines), line + context_lines)

        for i in range(start_line, end_line + 1):
            line_num_str = f"{i:4} | "
            result_lines.append(line_num_str + lines[i - 1])

            if i == line:
                gutter = " " * (len(line_num_str) - 2) + "| "
                result_lines.append(gutter + " " * (col - 1) + "^")

        return "\n".join(result_lines)


class NestingDepthExceeded(ParseFailure):
    """Parse aborted because lazy() rules nested deeper than allowed."""

    __slots__ = ()


# Shared no-detail failure. Frozen, so sharing it between parses is safe.
FAIL: Final[ParseFailure] = ParseFailure()


class Absent(Enum):
    """Sentinel type for "the optional parser matched nothing".

    A dedicated enum member, because None is a legitimate parse result
    (eof, JSON null).
    """

    NOTHING = "NOTHING"

    def __repr__(self) -> str:
        return "NOTHING"


NOTHING: Final = Absent.NOTHING


def is_failure(result: object) -> TypeIs[ParseFailure]:
    """Check whether a parse result is a failure value.

    Example:
        >>> is_failure(digit.eval("x"))
        True
        >>> is_failure(digit.eval("7"))
        False
    """
    return isinstance(result, ParseFailure)
