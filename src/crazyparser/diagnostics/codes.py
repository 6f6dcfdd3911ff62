"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Grammar construction faults (programming errors)
        3000-3999: Parse-time failures (malformed input)
        5000-5999: Value validation failures
    """

    # Grammar construction faults (1000-1999)
    INVALID_REPETITION = 1001
    INVALID_CHAR_LITERAL = 1002
    INVALID_TEMPLATE = 1003
    INVALID_FAILURE_VALUE = 1004

    # Parse-time failures (3000-3999)
    PARSE_FAILED = 3000
    EXPECTED = 3002
    NESTING_DEPTH_EXCEEDED = 3005

    # Value validation failures (5000-5999)
    VALIDATION_TYPE_MISMATCH = 5001
    VALIDATION_INVALID_ITEM = 5002
    VALIDATION_MISSING_KEY = 5003
    VALIDATION_INVALID_KEY = 5004
    VALIDATION_LENGTH_MISMATCH = 5005
    VALIDATION_NO_ALTERNATIVE = 5006
    VALIDATION_STEP_FAILED = 5007
    VALIDATION_NOT_EQUAL = 5008
    VALIDATION_PREDICATE_FAILED = 5009


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for error reporting.

    Note:
        Positions are measured in code points, the unit a parse cursor
        advances by. For multi-byte UTF-8 characters, character offset
        differs from byte offset.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, line is
                less than 1 (lines are 1-indexed), or column is less than 1
                (columns are 1-indexed).
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Source location (None when no source is involved)
        hint: Suggestion for fixing the error
        expected: What the parser expected to find at span.start
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    expected: tuple[str, ...] = ()
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Delegates to DiagnosticFormatter for consistent output with
        control-character escaping.

        Example output:
            error[EXPECTED]: Expected closing bracket
              --> line 3, column 7
              = expected: ']'
              = help: Arrays are closed with ']'

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
