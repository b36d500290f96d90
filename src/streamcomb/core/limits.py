"""Unified limit handling for recursion and input size protection.

Provides reusable guards to prevent:
- Stack overflow from deeply nested recursive grammars (JSON)
- Unbounded memory growth from oversized complete inputs

Thread-safe: pure functions, no module state.
Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from streamcomb.constants import MAX_JSON_DEPTH
from streamcomb.diagnostics import ErrorTemplate, InputLimitExceededError

__all__ = ["DepthGuard", "check_source_size", "depth_clamp", "resolve_limit"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DepthGuard:
    """Context manager for tracking and limiting recursion depth.

    Usage in serialization:
        guard = DepthGuard(max_depth=32)
        with guard:
            self._write_value(nested, output)

    Mutability Note:
        Intentionally mutable (not frozen=True): current_depth is
        incremented/decremented on __enter__/__exit__.

    Attributes:
        max_depth: Maximum allowed depth (default: MAX_JSON_DEPTH)
        current_depth: Current recursion depth
    """

    max_depth: int = MAX_JSON_DEPTH
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
        if self.current_depth >= self.max_depth:
            raise InputLimitExceededError(
                ErrorTemplate.json_depth_exceeded(self.max_depth), limit=self.max_depth
            )
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
        """Current depth."""
        return self.current_depth


def depth_clamp(
    requested_depth: int,
    *,
    frames_per_level: int = 1,
    reserve_frames: int = 50,
) -> int:
    """Clamp requested depth against Python recursion limit.

    Validates requested depth against sys.getrecursionlimit() to prevent
    RecursionError on systems with constrained stack limits. Logs warning
    if clamping occurs.

    Args:
        requested_depth: Desired maximum depth
        frames_per_level: Interpreter frames one level of nesting consumes
        reserve_frames: Stack frames to reserve for call overhead (default: 50)

    Returns:
        Safe depth value, clamped if necessary (never below 1)

    Example:
        >>> import sys
        >>> sys.setrecursionlimit(1000)
        >>> depth_clamp(10, frames_per_level=20)  # OK, within limit
        10
        >>> depth_clamp(100, frames_per_level=20)  # Clamped to (1000 - 50) // 20
        47
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


def resolve_limit(value: int | None, default: int) -> int:
    """Resolve a keyword-only limit override.

    Args:
        value: Caller override (None selects the default)
        default: Module default from streamcomb.constants

    Returns:
        The effective limit (0 means disabled)

    Raises:
        ValueError: If value is negative
    """
    if value is None:
        return default
    if value < 0:
        msg = f"Limit must be >= 0 (0 disables it), got {value}"
        raise ValueError(msg)
    return value


def check_source_size(size: int, limit: int) -> None:
    """Reject complete inputs larger than limit.

    Args:
        size: Input size in elements
        limit: Maximum size (0 disables the check)

    Raises:
        InputLimitExceededError: If size exceeds a non-zero limit
    """
    if limit > 0 and size > limit:
        raise InputLimitExceededError(
            ErrorTemplate.source_size_exceeded(size, limit), limit=limit
        )
