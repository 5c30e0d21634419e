"""Unified depth limiting for recursion protection.

Provides reusable depth tracking to prevent stack overflow from:
- Deep array/object nesting during serialization
- Programmatically constructed adversarial ASTs
- Parser nesting limits configured above the interpreter recursion limit

Thread-safe: uses explicit state, no thread-local storage.
Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from combjson.constants import MAX_DEPTH, RESERVED_STACK_FRAMES
from combjson.diagnostics import CombJsonError
from combjson.diagnostics.templates import ErrorTemplate

__all__ = ["DepthGuard", "DepthLimitExceededError", "depth_clamp"]

logger = logging.getLogger(__name__)


class DepthLimitExceededError(CombJsonError):
    """Raised when a guarded recursion goes deeper than its limit."""


@dataclass(slots=True)
class DepthGuard:
    """Context manager for tracking and limiting recursion depth.

    Usage in serialization:
        guard = DepthGuard(max_depth=32)
        with guard:
            self._serialize_value(item, output, guard)

    Mutability Note:
        Intentionally mutable (not frozen=True); current_depth is
        incremented/decremented on __enter__/__exit__.

    Thread Safety:
        Each call stack owns its own DepthGuard instance.

    Attributes:
        max_depth: Maximum allowed depth (default: MAX_DEPTH)
        current_depth: Current recursion depth
    """

    max_depth: int = MAX_DEPTH
    current_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        """Clamp max_depth against Python recursion limit."""
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        """Enter guarded section, increment depth.

        Checks the limit BEFORE incrementing: __exit__ does not run when
        __enter__ raises, so incrementing first would leave the guard
        permanently elevated.
        """
        self.check()
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit guarded section, decrement depth."""
        self.current_depth -= 1

    @property
    def depth(self) -> int:
        """Current depth (alias for current_depth)."""
        return self.current_depth

    def check(self) -> None:
        """Raise if the next level would exceed the limit.

        Raises:
            DepthLimitExceededError: If depth limit exceeded
        """
        if self.current_depth >= self.max_depth:
            raise DepthLimitExceededError(
                ErrorTemplate.serialization_depth_exceeded(self.max_depth)
            )


def depth_clamp(
    requested_depth: int,
    *,
    frames_per_level: int = 1,
    reserve_frames: int = RESERVED_STACK_FRAMES,
) -> int:
    """Clamp requested depth against Python recursion limit.

    Each nesting level of a recursive algorithm costs ``frames_per_level``
    interpreter frames. Returns the largest depth that fits under
    sys.getrecursionlimit() after reserving ``reserve_frames``, and logs a
    warning if clamping occurs.

    Args:
        requested_depth: Desired maximum depth
        frames_per_level: Stack frames consumed per nesting level
        reserve_frames: Stack frames to reserve for call overhead

    Returns:
        Safe depth value, clamped if necessary

    Example:
        >>> import sys
        >>> sys.setrecursionlimit(1000)
        >>> depth_clamp(32, frames_per_level=20)  # OK, within limit
        32
        >>> depth_clamp(100, frames_per_level=20)  # Clamped to (1000 - 100) // 20
        45
    """
    max_safe_depth = max(1, (sys.getrecursionlimit() - reserve_frames) // frames_per_level)
    if requested_depth > max_safe_depth:
        logger.warning(
            "Requested depth %d exceeds Python recursion limit (%d). "
            "Clamping to %d to prevent RecursionError. "
            "Consider increasing sys.setrecursionlimit() if needed.",
            requested_depth,
            sys.getrecursionlimit(),
            max_safe_depth,
        )
        return max_safe_depth
    return requested_depth
