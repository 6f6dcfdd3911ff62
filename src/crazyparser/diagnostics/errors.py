"""crazyparser exception hierarchy with structured diagnostics.

Parse-time failures are NOT exceptions: combinators return ParseFailure
values (see crazyparser.syntax.cursor). The exceptions here cover the
places where an error must leave the engine:

- GrammarError: a malformed grammar detected while building a parser
- ParseFailedError: raised by the async entry points and the bundled
  grammar helpers (loads, parse_markup) when a parse fails
- InvalidValueError: returned (not raised) by value validators

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .codes import Diagnostic

if TYPE_CHECKING:
    from crazyparser.syntax.cursor import ParseFailure, State

__all__ = [
    "CrazyParserError",
    "GrammarError",
    "InvalidValueError",
    "JSONSyntaxError",
    "MarkupSyntaxError",
    "ParseFailedError",
]


class CrazyParserError(Exception):
    """Base exception for all crazyparser errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize CrazyParserError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class GrammarError(CrazyParserError, ValueError):
    """Malformed grammar detected at construction time.

    Examples:
    - times(0): fixed repetition needs at least one application
    - char("ab"): a char parser matches exactly one code point
    - template("{}-{}", p): slot count differs from parser count

    Never produced while parsing: it signals a bug in the grammar,
    not in the input.
    """


class ParseFailedError(CrazyParserError):
    """A parse failed and the caller asked for an exception.

    Attributes:
        failure: The failure value the root parser returned
        state: Cursor state at the point of failure
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        failure: ParseFailure,
        state: State,
    ) -> None:
        """Initialize ParseFailedError.

        Args:
            message: Error message string OR Diagnostic object
            failure: The failure value the root parser returned
            state: Cursor state at the point of failure
        """
        super().__init__(message)
        self.failure = failure
        self.state = state

    @property
    def position(self) -> int:
        """Offset where parsing stopped."""
        return self.state.index


class JSONSyntaxError(ParseFailedError, ValueError):
    """Malformed JSON document passed to grammars.json_value.loads()."""


class MarkupSyntaxError(ParseFailedError, ValueError):
    """Malformed markup passed to grammars.markup.parse_markup()."""


class InvalidValueError(CrazyParserError, TypeError):
    """Structured value rejected by a validator.

    Validators RETURN this error instead of raising it, so validation
    composes the same way parse failures do.
    """
