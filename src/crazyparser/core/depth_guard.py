"""Nesting depth tracking for recursive grammars.

Every lazy() rule that is currently executing counts as one nesting level.
Exceeding the limit aborts the parse with DepthLimitExceededError, which the
entry points turn into a NestingDepthExceeded failure. Adversarial input
such as ten thousand opening brackets therefore fails cleanly instead of
exhausting the interpreter stack.

Thread-safe: uses explicit state, no thread-local storage.
Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from crazyparser.constants import DEPTH_RESERVE_FRAMES, MAX_DEPTH
from crazyparser.diagnostics import CrazyParserError
from crazyparser.diagnostics.templates import ErrorTemplate

__all__ = ["DepthGuard", "DepthLimitExceededError", "depth_clamp"]

logger = logging.getLogger(__name__)


class DepthLimitExceededError(CrazyParserError):
    """Raised when the lazy() nesting limit is exceeded.

    Never escapes Parser.run(): the entry point converts it into a
    NestingDepthExceeded failure positioned where the limit was hit.
    """


@dataclass(slots=True)
class DepthGuard:
    """Context manager for tracking nesting depth during one parse.

    Usage in lazy():
        with state.depth_guard:
            return factory()(state)

    Mutability Note:
        Intentionally mutable (not frozen=True) to enable stateful depth
        tracking via context manager protocol. The current_depth field is
        incremented/decremented on __enter__/__exit__.

    Thread Safety:
        Each State owns its own DepthGuard, so concurrent parses of
        different inputs never share a counter.

    Attributes:
        max_depth: Maximum allowed depth (default: MAX_DEPTH)
        current_depth: Current nesting depth
    """

    max_depth: int = MAX_DEPTH
    current_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        """Clamp max_depth against Python recursion limit."""
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        """Enter one nesting level.

        Validates depth limit BEFORE incrementing: __exit__ is not called
        when __enter__ raises, so incrementing first would leave
        current_depth permanently elevated.
        """
        if self.current_depth >= self.max_depth:
            raise DepthLimitExceededError(
                ErrorTemplate.nesting_depth_exceeded(self.max_depth)
            )
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Leave one nesting level."""
        self.current_depth -= 1

    @property
    def depth(self) -> int:
        """Current depth (alias for current_depth)."""
        return self.current_depth

    def is_exceeded(self) -> bool:
        """Check if entering another level would exceed the limit."""
        return self.current_depth >= self.max_depth


def depth_clamp(requested_depth: int, reserve_frames: int = DEPTH_RESERVE_FRAMES) -> int:
    """Clamp requested depth against Python recursion limit.

    Validates requested depth against sys.getrecursionlimit() to prevent
    RecursionError on systems with constrained stack limits. Logs warning
    if clamping occurs.

    Args:
        requested_depth: Desired maximum depth
        reserve_frames: Stack frames to reserve for call overhead

    Returns:
        Safe depth value, clamped if necessary

    Example:
        >>> import sys
        >>> sys.setrecursionlimit(200)
        >>> depth_clamp(100)  # OK, within limit
        100
        >>> depth_clamp(500)  # Exceeds limit, clamped to 150
        150
    """
    max_safe_depth = sys.getrecursionlimit() - reserve_frames
    if requested_depth > max_safe_depth:
        logger.warning(
            "Requested nesting depth %d exceeds Python recursion limit (%d). "
            "Clamping to %d.",
            requested_depth,
            sys.getrecursionlimit(),
            max_safe_depth,
        )
        return max_safe_depth
    return requested_depth
