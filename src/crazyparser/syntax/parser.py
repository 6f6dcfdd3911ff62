"""Parser: the combinator algebra and the parse entry points.

A Parser wraps a function ``State -> A | ParseFailure``. Combinators build
new Parsers from existing ones; nothing runs until an entry point (run,
eval, run_async, eval_async) creates a State and drives the tree.

Cursor contract:
    - Success: the cursor has advanced over the consumed input
    - Failure: primitives leave the cursor unchanged; compound
      combinators leave it wherever the failing part stopped, unless
      they restore it explicitly (try_, where, sequence)

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from dataclasses import replace
from typing import Any

from crazyparser.constants import MAX_DEPTH, MAX_SOURCE_SIZE, TRACE_FAILURE, TRACE_SUCCESS
from crazyparser.core.depth_guard import DepthGuard, DepthLimitExceededError
from crazyparser.diagnostics import ErrorTemplate, GrammarError, ParseFailedError

from .cursor import FAIL, NOTHING, NestingDepthExceeded, ParseFailure, State

__all__ = ["Parser"]

logger = logging.getLogger(__name__)


def _require_failure(value: object) -> ParseFailure:
    """Reject non-ParseFailure objects used as failure values."""
    if not isinstance(value, ParseFailure):
        raise GrammarError(ErrorTemplate.invalid_failure_value(value))
    return value


class Parser[A]:
    """A composable parser producing values of type A.

    Parsers are immutable and reusable: build once, run any number of
    times, from any number of threads. All per-parse state lives in the
    State passed to ``__call__``.

    Operator sugar:
        p | q   ordered alternation (or_)
        p & q   pair of both results (and_)
        p << q  keep the left result (left)
        p >> q  keep the right result (right)
        p * n   exactly n repetitions (times)

    Example:
        >>> boolean = string("true").const(True) | string("false").const(False)
        >>> boolean.eval("false")
        False
        >>> boolean.eval("42")
        ParseFailure(diagnostic=None)
    """

    __slots__ = ("_fn",)

    def __init__(self, fn: Callable[[State], A | ParseFailure]) -> None:
        """Wrap a parse function.

        Args:
            fn: Callable taking the cursor and returning a value or a
                ParseFailure. It must advance the cursor only over input
                it consumed.
        """
        self._fn = fn

    def __call__(self, state: State) -> A | ParseFailure:
        """Run this parser against an existing cursor."""
        return self._fn(state)

    # ------------------------------------------------------------------
    # Functor / monad
    # ------------------------------------------------------------------

    def map[B](self, f: Callable[[A], B]) -> Parser[B]:
        """Transform the success value; failures pass through untouched."""
        fn = self._fn

        def parse(state: State) -> B | ParseFailure:
            result = fn(state)
            if isinstance(result, ParseFailure):
                return result
            return f(result)

        return Parser(parse)

    def const[B](self, value: B) -> Parser[B]:
        """Replace the success value with a constant."""
        return self.map(lambda _: value)

    def bind[B](self, g: Callable[[A], Parser[B]]) -> Parser[B]:
        """Continue with a parser chosen from this parser's result.

        On success the value is fed to ``g`` and the returned parser runs
        from the current cursor. On failure ``g`` is never called and the
        failure is returned unchanged.

        Example:
            >>> # A length-prefixed field: "3:abc"
            >>> field = digit.map(int).left(char(":")).bind(lambda n: one * n)
            >>> field.eval("3:abc")
            ['a', 'b', 'c']
        """
        fn = self._fn

        def parse(state: State) -> B | ParseFailure:
            result = fn(state)
            if isinstance(result, ParseFailure):
                return result
            return g(result)(state)

        return Parser(parse)

    def and_[B](self, other: Parser[B]) -> Parser[tuple[A, B]]:
        """Run both parsers in order, keeping both results as a pair.

        No rollback: if ``other`` fails, the input consumed by this
        parser stays consumed.
        """
        return self.bind(lambda a: other.map(lambda b: (a, b)))

    def left[B](self, other: Parser[B]) -> Parser[A]:
        """Run both parsers in order, keeping the left result."""
        return self.bind(lambda a: other.map(lambda _: a))

    def right[B](self, other: Parser[B]) -> Parser[B]:
        """Run both parsers in order, keeping the right result."""
        return self.bind(lambda _: other)

    # ------------------------------------------------------------------
    # Alternation and backtracking
    # ------------------------------------------------------------------

    def or_[B](self, other: Parser[B]) -> Parser[A | B]:
        """Ordered alternation: try this parser, then ``other``.

        IMPORTANT: this is commit-as-you-go choice, NOT PEG backtracking.
        ``other`` starts wherever this parser left the cursor. If this
        parser consumed input before failing, that input stays consumed
        and ``other`` runs from the advanced position. Wrap the left side
        in try_() to restart ``other`` from the original offset:

            >>> ab = char("A").and_(char("B"))
            >>> ab.or_(string("AC")).eval("AC")        # "A" already consumed
            ParseFailure(diagnostic=None)
            >>> ab.try_().or_(string("AC")).eval("AC")
            'AC'

        The first success wins. When both branches fail the result is
        the generic FAIL; branch-specific failure values do not escape
        the alternation.
        """
        fn = self._fn
        other_fn = other._fn

        def parse(state: State) -> A | B | ParseFailure:
            result = fn(state)
            if not isinstance(result, ParseFailure):
                return result
            alternative = other_fn(state)
            if isinstance(alternative, ParseFailure):
                return FAIL
            return alternative

        return Parser(parse)

    def try_(self) -> Parser[A]:
        """Rewind the cursor to where this parser started if it fails.

        The failure value itself is returned unchanged.
        """
        fn = self._fn

        def parse(state: State) -> A | ParseFailure:
            start = state.index
            result = fn(state)
            if isinstance(result, ParseFailure):
                state.index = start
            return result

        return Parser(parse)

    def otherwise[B](self, value: B) -> Parser[A | B]:
        """Fall back to a constant when this parser fails (``self | pure(value)``)."""
        from .primitives import pure  # noqa: PLC0415 - circular

        return self.or_(pure(value))

    def when(self, condition: bool) -> Parser[A]:
        """Return this parser if ``condition`` holds, otherwise ``empty``."""
        if condition:
            return self
        from .primitives import empty  # noqa: PLC0415 - circular

        return empty

    # ------------------------------------------------------------------
    # Filtering and failure shaping
    # ------------------------------------------------------------------

    def where(
        self,
        predicate: Callable[[A], bool],
        failure: ParseFailure | None = None,
    ) -> Parser[A]:
        """Reject successful results that fail ``predicate``.

        On rejection the cursor is restored to where this parser started
        and ``failure`` (default: FAIL) is returned. Failures of the inner
        parser propagate unchanged, without rollback.

        Args:
            predicate: Test applied to the success value
            failure: Failure value returned on rejection

        Raises:
            GrammarError: If ``failure`` is not a ParseFailure
        """
        rejection = FAIL if failure is None else _require_failure(failure)
        fn = self._fn

        def parse(state: State) -> A | ParseFailure:
            start = state.index
            result = fn(state)
            if isinstance(result, ParseFailure):
                return result
            if not predicate(result):
                state.index = start
                return rejection
            return result

        return Parser(parse)

    def error(self, failure: ParseFailure) -> Parser[A]:
        """Replace any failure of this parser with ``failure``.

        Raises:
            GrammarError: If ``failure`` is not a ParseFailure
        """
        replacement = _require_failure(failure)
        fn = self._fn

        def parse(state: State) -> A | ParseFailure:
            result = fn(state)
            if isinstance(result, ParseFailure):
                return replacement
            return result

        return Parser(parse)

    def expecting(self, description: str) -> Parser[A]:
        """Label this parser for diagnostics.

        Any failure is replaced by a ParseFailure carrying an EXPECTED
        diagnostic that points at the offset where this parser started.

        Example:
            >>> result, state = digit.expecting("a digit").run("x")
            >>> result.message
            'Expected a digit'
        """
        fn = self._fn

        def parse(state: State) -> A | ParseFailure:
            start = state.index
            result = fn(state)
            if isinstance(result, ParseFailure):
                return ParseFailure(ErrorTemplate.expected(description, state.span(start)))
            return result

        return Parser(parse)

    # ------------------------------------------------------------------
    # Repetition
    # ------------------------------------------------------------------

    def optional[D](self, default: D = NOTHING) -> Parser[A | D]:  # type: ignore[assignment]
        """Succeed with ``default`` (NOTHING) when this parser fails.

        No rollback is forced: input consumed by a failing attempt stays
        consumed.
        """
        fn = self._fn

        def parse(state: State) -> A | D:
            result = fn(state)
            if isinstance(result, ParseFailure):
                return default
            return result

        return Parser(parse)

    def many(self) -> Parser[list[A]]:
        """Apply this parser until it fails; never fails itself.

        An iteration that succeeds without consuming input ends the loop
        after its value is collected, so ``many`` always terminates.
        """
        fn = self._fn

        def parse(state: State) -> list[A]:
            results: list[A] = []
            while True:
                start = state.index
                result = fn(state)
                if isinstance(result, ParseFailure):
                    return results
                results.append(result)
                if state.index == start:
                    return results

        return Parser(parse)

    def some(self) -> Parser[list[A]]:
        """Like many(), but fail with FAIL when nothing matched."""
        repeated = self.many()._fn

        def parse(state: State) -> list[A] | ParseFailure:
            results = repeated(state)
            if not results:
                return FAIL
            return results

        return Parser(parse)

    def times(self, n: int) -> Parser[list[A]]:
        """Apply this parser exactly ``n`` times in sequence.

        Fails if any application fails (the cursor is restored, as with
        sequence()).

        Raises:
            GrammarError: If ``n`` is not an integer >= 1
        """
        if isinstance(n, bool) or not isinstance(n, int) or n < 1:
            raise GrammarError(ErrorTemplate.invalid_repetition(n))
        from .combinators import sequence  # noqa: PLC0415 - circular

        return sequence([self] * n)

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def with_range(self) -> Parser[tuple[A, tuple[int, int]]]:
        """Pair the success value with the ``(start, end)`` offsets it spans."""
        fn = self._fn

        def parse(state: State) -> tuple[A, tuple[int, int]] | ParseFailure:
            start = state.index
            result = fn(state)
            if isinstance(result, ParseFailure):
                return result
            return (result, (start, state.index))

        return Parser(parse)

    def trace(self, message: object = "") -> Parser[A]:
        """Log WIN or BAD with the consumed range at DEBUG level.

        For debugging grammars only; the outcome is never altered.
        """
        fn = self._fn

        def parse(state: State) -> A | ParseFailure:
            start = state.index
            result = fn(state)
            if isinstance(result, ParseFailure):
                logger.debug("%s %s at %d", TRACE_FAILURE, message, start)
            else:
                logger.debug("%s %s (%d..%d)", TRACE_SUCCESS, message, start, state.index)
            return result

        return Parser(parse)

    # ------------------------------------------------------------------
    # Operator sugar
    # ------------------------------------------------------------------

    def __or__[B](self, other: Parser[B]) -> Parser[A | B]:
        return self.or_(other)

    def __and__[B](self, other: Parser[B]) -> Parser[tuple[A, B]]:
        return self.and_(other)

    def __lshift__[B](self, other: Parser[B]) -> Parser[A]:
        return self.left(other)

    def __rshift__[B](self, other: Parser[B]) -> Parser[B]:
        return self.right(other)

    def __mul__(self, n: int) -> Parser[list[A]]:
        return self.times(n)

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def run(
        self,
        source: str | bytes,
        *,
        max_source_size: int | None = None,
        max_depth: int | None = None,
    ) -> tuple[A | ParseFailure, State]:
        """Parse ``source`` from offset 0.

        Trailing input is NOT an error unless the grammar ends with eof.

        Args:
            source: Text to parse; bytes are decoded as UTF-8
            max_source_size: Maximum source length in code points
                (default: 10 MiB). Set to 0 to disable the limit.
            max_depth: Maximum lazy() nesting depth (default: 100)

        Returns:
            ``(result, state)``: the success value or failure value, and
            the final cursor (on failure: where parsing stopped)

        Raises:
            ValueError: If source exceeds max_source_size (DoS prevention)
            UnicodeDecodeError: If bytes input is not valid UTF-8
        """
        if isinstance(source, bytes):
            source = source.decode("utf-8")

        size_limit = MAX_SOURCE_SIZE if max_source_size is None else max_source_size
        if size_limit > 0 and len(source) > size_limit:
            msg = (
                f"Source size ({len(source):,} characters) exceeds maximum "
                f"({size_limit:,} characters). "
                "Pass max_source_size to run() to increase the limit."
            )
            raise ValueError(msg)

        guard = DepthGuard(MAX_DEPTH if max_depth is None else max_depth)
        state = State(source, 0, guard)

        result: Any
        try:
            result = self._fn(state)
        except DepthLimitExceededError as exc:
            logger.warning(
                "Nesting depth limit (%d) exceeded at offset %d", guard.max_depth, state.index
            )
            diagnostic = ErrorTemplate.nesting_depth_exceeded(guard.max_depth)
            if exc.diagnostic is not None:
                diagnostic = exc.diagnostic
            result = NestingDepthExceeded(replace(diagnostic, span=state.span(state.index)))
        except RecursionError:
            # The depth guards have unwound by now; report the configured limit.
            logger.warning(
                "Python recursion limit (%d) hit at offset %d before max_depth (%d)",
                sys.getrecursionlimit(),
                state.index,
                guard.max_depth,
            )
            result = NestingDepthExceeded(
                ErrorTemplate.nesting_depth_exceeded(guard.max_depth, state.span(state.index))
            )

        if isinstance(result, ParseFailure):
            logger.debug("Parse failed at offset %d: %s", state.index, result.message)
        else:
            logger.debug("Parse succeeded, consumed %d of %d", state.index, len(source))
        return result, state

    def eval(
        self,
        source: str | bytes,
        *,
        max_source_size: int | None = None,
        max_depth: int | None = None,
    ) -> A | ParseFailure:
        """Parse ``source`` and return only the result (see run())."""
        result, _ = self.run(source, max_source_size=max_source_size, max_depth=max_depth)
        return result

    async def run_async(
        self,
        source: str | bytes,
        *,
        max_source_size: int | None = None,
        max_depth: int | None = None,
    ) -> tuple[A, State]:
        """Coroutine form of run() for callers that prefer exceptions.

        Parsing happens synchronously; the coroutine only changes how the
        outcome is delivered.

        Raises:
            ParseFailedError: If parsing fails (carries .failure and .state)
        """
        result, state = self.run(source, max_source_size=max_source_size, max_depth=max_depth)
        if isinstance(result, ParseFailure):
            raise _parse_failed(result, state)
        return result, state

    async def eval_async(
        self,
        source: str | bytes,
        *,
        max_source_size: int | None = None,
        max_depth: int | None = None,
    ) -> A:
        """Coroutine form of eval() (see run_async())."""
        result, _ = await self.run_async(
            source, max_source_size=max_source_size, max_depth=max_depth
        )
        return result


def _parse_failed(failure: ParseFailure, state: State) -> ParseFailedError:
    """Wrap a failure value in the exception raised by the async entry points."""
    diagnostic = failure.diagnostic
    if diagnostic is None:
        diagnostic = ErrorTemplate.parse_failed(state.span(state.index))
    return ParseFailedError(diagnostic, failure=failure, state=state)
