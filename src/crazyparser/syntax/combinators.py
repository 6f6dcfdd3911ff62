"""Prefix-form combinators.

Functions that build parsers from lists of parsers (asum, sequence),
defer construction for recursive grammars (lazy), splice parsers into
literal text (template), plus prefix spellings of the repetition methods.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Callable, Iterable
from string import Formatter
from typing import Any

from crazyparser.diagnostics import ErrorTemplate, GrammarError

from .cursor import NOTHING, ParseFailure, State
from .parser import Parser
from .primitives import empty, string

__all__ = [
    "asum",
    "lazy",
    "many",
    "optional",
    "sequence",
    "some",
    "template",
    "with_range",
]


def _collect(parsers: tuple[Any, ...]) -> list[Parser[Any]]:
    """Accept both ``f(a, b, c)`` and ``f([a, b, c])``."""
    if len(parsers) == 1 and not isinstance(parsers[0], Parser):
        return list(parsers[0])
    return list(parsers)


def asum(*parsers: Parser[Any] | Iterable[Parser[Any]]) -> Parser[Any]:
    """Fold or_ over ``parsers``: the first success wins.

    Inherits the commit-as-you-go semantics of or_. With no parsers the
    result is ``empty``.

    Example:
        >>> asum(string("114514"), string("42")).eval("42")
        '42'
        >>> asum([string("a"), string("b")]).eval("b")
        'b'
    """
    ps = _collect(parsers)
    if not ps:
        return empty
    result = ps[0]
    for p in ps[1:]:
        result = result.or_(p)
    return result


def sequence(*parsers: Parser[Any] | Iterable[Parser[Any]]) -> Parser[list[Any]]:
    """Run ``parsers`` left to right, collecting their results in a list.

    If any parser fails, the cursor is restored to where the sequence
    started and that parser's failure value is returned unchanged.

    Example:
        >>> sequence(string("apple"), index, string("banana")).eval("applebanana")
        ['apple', 5, 'banana']
    """
    ps = tuple(_collect(parsers))

    def parse(state: State) -> list[Any] | ParseFailure:
        start = state.index
        results: list[Any] = []
        for p in ps:
            result = p(state)
            if isinstance(result, ParseFailure):
                state.index = start
                return result
            results.append(result)
        return results

    return Parser(parse)


def lazy[A](factory: Callable[[], Parser[A]]) -> Parser[A]:
    """Defer building a parser until parse time.

    Needed for self- and mutually-recursive rules, which cannot refer to
    each other while still being defined:

        >>> def a() -> Parser[str]:
        ...     return lazy(lambda: (char("A") & (b() | char("!"))).map("".join))
        >>> def b() -> Parser[str]:
        ...     return lazy(lambda: (char("B") & (a() | char("!"))).map("".join))
        >>> a().eval("ABAB!")
        'ABAB!'

    ``factory`` is called once per invocation and never memoized. Each
    invocation counts as one nesting level against the parse's depth
    guard; exceeding it aborts the parse with a NestingDepthExceeded
    failure.

    Note:
        The default limit is MAX_DEPTH (100) levels per parse. A
        right-recursive grammar like the one above nests once per input
        token, so ``a().eval("AB" * 60 + "!")`` exceeds it; pass a larger
        ``max_depth`` to run()/eval() for such inputs:

            >>> len(a().eval("AB" * 60 + "!", max_depth=500))
            121

        Python's own recursion limit still applies. A parse that hits it
        first fails with NestingDepthExceeded as well.
    """

    def parse(state: State) -> A | ParseFailure:
        with state.depth_guard:
            return factory()(state)

    return Parser(parse)


def template(fmt: str, *parsers: Parser[Any]) -> Parser[list[Any]]:
    """Interleave literal text with parsers.

    ``fmt`` uses ``str.format`` syntax: every ``{}`` marks the slot of the
    next parser, ``{{`` and ``}}`` match literal braces. The literal text
    must match exactly; the result is the list of the parsers' results.

    Example:
        >>> hh = (digit * 2).map("".join).map(int)
        >>> template("{}:{}", hh, hh).eval("12:34")
        [12, 34]

    Raises:
        GrammarError: On malformed format strings, non-bare fields such as
            ``{0}`` or ``{:>3}``, or a slot count that differs from the
            number of parsers
    """
    try:
        chunks = list(Formatter().parse(fmt))
    except ValueError as exc:
        raise GrammarError(ErrorTemplate.invalid_template(str(exc))) from exc

    prefixes: list[str] = []
    pending = ""
    for literal, field_name, format_spec, conversion in chunks:
        pending += literal
        if field_name is None:
            continue
        if field_name or format_spec or conversion is not None:
            reason = f"only bare '{{}}' fields are supported, got field {field_name!r}"
            raise GrammarError(ErrorTemplate.invalid_template(reason))
        prefixes.append(pending)
        pending = ""

    if len(prefixes) != len(parsers):
        reason = f"{len(prefixes)} field(s) but {len(parsers)} parser(s)"
        raise GrammarError(ErrorTemplate.invalid_template(reason))

    steps = [string(prefix).right(p) for prefix, p in zip(prefixes, parsers, strict=True)]
    return sequence(steps).left(string(pending))


# Prefix spellings of the Parser methods


def many[A](p: Parser[A]) -> Parser[list[A]]:
    """Prefix form of Parser.many()."""
    return p.many()


def some[A](p: Parser[A]) -> Parser[list[A]]:
    """Prefix form of Parser.some()."""
    return p.some()


def optional[A, D](p: Parser[A], default: D = NOTHING) -> Parser[A | D]:  # type: ignore[assignment]
    """Prefix form of Parser.optional()."""
    return p.optional(default)


def with_range[A](p: Parser[A]) -> Parser[tuple[A, tuple[int, int]]]:
    """Prefix form of Parser.with_range()."""
    return p.with_range()
