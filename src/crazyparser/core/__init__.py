"""Core infrastructure shared by the parsing engine.

Python 3.13+. Zero external dependencies.
"""

from .depth_guard import DepthGuard, DepthLimitExceededError, depth_clamp

__all__ = ["DepthGuard", "DepthLimitExceededError", "depth_clamp"]
