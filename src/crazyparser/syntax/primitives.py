"""Primitive parsers.

The only parsers that read the input directly. Every primitive either
consumes what it matched or leaves the cursor exactly where it was.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Callable, Iterable
from typing import Any

from crazyparser.diagnostics import ErrorTemplate, GrammarError

from .cursor import FAIL, ParseFailure, State
from .parser import Parser

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Input readers
    "one",
    "char",
    "string",
    "span",
    "eof",
    "index",
    # Constants
    "pure",
    "empty",
    # Choice helpers
    "any_char",
    "any_string",
    # Character classes
    "digit",
    "upper",
    "lower",
    "alpha",
    "hexdigit",
    "space",
    "tab",
    "cr",
    "lf",
]


def _one(state: State) -> str | ParseFailure:
    if state.index >= len(state.source):
        return FAIL
    c = state.source[state.index]
    state.index += 1
    return c


one: Parser[str] = Parser(_one)
"""Consume exactly one code point. Fails at EOF."""


def char(c: str) -> Parser[str]:
    """Parse the code point ``c``.

    Args:
        c: A single code point

    Raises:
        GrammarError: If ``c`` is not exactly one code point

    Example:
        >>> char("a").eval("abc")
        'a'
    """
    if not isinstance(c, str) or len(c) != 1:
        raise GrammarError(ErrorTemplate.invalid_char_literal(c))

    def parse(state: State) -> str | ParseFailure:
        i = state.index
        if i < len(state.source) and state.source[i] == c:
            state.index = i + 1
            return c
        return FAIL

    return Parser(parse)


def string(s: str) -> Parser[str]:
    """Parse the literal ``s`` and return it.

    Fails without consuming on mismatch or when fewer than ``len(s)``
    code points remain. The empty literal always succeeds.
    """

    def parse(state: State) -> str | ParseFailure:
        if state.source.startswith(s, state.index):
            state.index += len(s)
            return s
        return FAIL

    return Parser(parse)


def span(predicate: Callable[[str], bool]) -> Parser[str]:
    """Consume the longest run of code points satisfying ``predicate``.

    Never fails; an empty run yields ``""``.

    Example:
        >>> span(str.isdigit).run("123abc")[0]
        '123'
    """

    def parse(state: State) -> str:
        source = state.source
        start = i = state.index
        end = len(source)
        while i < end and predicate(source[i]):
            i += 1
        state.index = i
        return source[start:i]

    return Parser(parse)


def _eof(state: State) -> None | ParseFailure:
    if state.index < len(state.source):
        return FAIL
    return None


eof: Parser[None] = Parser(_eof)
"""Succeed with None, consuming nothing, at the end of input."""

index: Parser[int] = Parser(lambda state: state.index)
"""Succeed with the current offset, consuming nothing."""


def pure[A](value: A) -> Parser[A]:
    """Always succeed with ``value`` without consuming input."""
    return Parser(lambda _: value)


empty: Parser[Any] = Parser(lambda _: FAIL)
"""Always fail with FAIL."""


def any_char(chars: Iterable[str]) -> Parser[str]:
    """Parse any one of ``chars``, tried in order.

    Example:
        >>> any_char("+-").eval("-1")
        '-'
    """
    from .combinators import asum  # noqa: PLC0415 - circular

    return asum([char(c) for c in chars])


def any_string(strings: Iterable[str]) -> Parser[str]:
    """Parse the first of ``strings`` that matches, tried in order."""
    from .combinators import asum  # noqa: PLC0415 - circular

    return asum([string(s) for s in strings])


def _satisfy(predicate: Callable[[str], bool]) -> Parser[str]:
    """Parse one code point accepted by ``predicate``."""

    def parse(state: State) -> str | ParseFailure:
        i = state.index
        if i < len(state.source):
            c = state.source[i]
            if predicate(c):
                state.index = i + 1
                return c
        return FAIL

    return Parser(parse)


_DIGITS = frozenset("0123456789")
_UPPER = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZ")
_LOWER = frozenset("abcdefghijklmnopqrstuvwxyz")
_HEX = _DIGITS | frozenset("abcdefABCDEF")

# ASCII only: str.isdigit() and friends accept non-Latin scripts.
digit: Parser[str] = _satisfy(_DIGITS.__contains__)
upper: Parser[str] = _satisfy(_UPPER.__contains__)
lower: Parser[str] = _satisfy(_LOWER.__contains__)
alpha: Parser[str] = upper | lower
hexdigit: Parser[str] = _satisfy(_HEX.__contains__)
space: Parser[str] = char(" ")
tab: Parser[str] = char("\t")
cr: Parser[str] = char("\r")
lf: Parser[str] = char("\n")
