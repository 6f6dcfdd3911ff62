"""Shared constants for crazyparser.

This module provides centralized configuration constants used across
the engine and its bundled grammars. Placing constants here avoids
circular imports and provides a single source of truth.

Constants are grouped by domain:
- Depth limits: Recursion protection for lazily-built grammars
- Input limits: DoS prevention via size constraints
- Tracing: Markers written by Parser.trace()

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    "DEPTH_RESERVE_FRAMES",
    # Input limits
    "MAX_SOURCE_SIZE",
    # Tracing
    "TRACE_SUCCESS",
    "TRACE_FAILURE",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================
#
# Every lazy() invocation that is still on the call stack counts as one
# nesting level. Mutually recursive rules (JSON arrays inside objects,
# S-expressions inside S-expressions) nest one level per construct.
#
# Each level costs several interpreter frames (lazy -> or_ -> bind -> ...),
# so the guard is a first line of defence; the entry point additionally
# converts a RecursionError into a NestingDepthExceeded failure.
#
# ============================================================================

# Maximum number of nested lazy() invocations in one parse.
MAX_DEPTH: int = 100

# Stack frames kept free below sys.getrecursionlimit() when clamping depth.
DEPTH_RESERVE_FRAMES: int = 50

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum source size in code points (10 MiB worth of ASCII).
# Parsing is orders of magnitude slower than a hand-written scanner, so very
# large inputs are rejected before any work is done.
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# TRACING
# ============================================================================

TRACE_SUCCESS: str = "WIN"
TRACE_FAILURE: str = "BAD"
