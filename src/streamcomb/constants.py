"""Shared constants for streamcomb.

This module provides centralized configuration constants used across the
engine, the streaming driver and the grammars. Placing constants here avoids
circular imports and provides a single source of truth.

Constants are grouped by domain:
- Read sizes: Chunking of byte sources
- Input limits: DoS prevention via size constraints
- Depth limits: Recursion protection for recursive grammars

Every entry point that uses one of these accepts a keyword-only override.
Passing None selects the default below; passing 0 disables a size guard.

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Read sizes
    "DEFAULT_READ_SIZE",
    # Input limits
    "MAX_BUFFER_SIZE",
    "MAX_SOURCE_SIZE",
    "MAX_HEADER_COUNT",
    # Depth limits
    "MAX_JSON_DEPTH",
    "FRAMES_PER_JSON_LEVEL",
]

# ============================================================================
# READ SIZES
# ============================================================================

# Bytes requested from a byte source per read.
# A read that returns fewer bytes than this while the parser still needs
# more input is treated as end of data for the current phase.
DEFAULT_READ_SIZE: int = 1024

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Maximum bytes one driver phase may accumulate (64 KiB).
# A request line or a single header larger than this is almost certainly
# adversarial. The accumulator is reparsed from the start on every chunk,
# so this also bounds the quadratic reparse cost.
MAX_BUFFER_SIZE: int = 64 * 1024

# Maximum size of a fully buffered input handed to parse_all() (10 MB).
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# Maximum number of header lines read by the HTTP request head reader.
MAX_HEADER_COUNT: int = 100

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum nesting of JSON arrays/objects.
# Each nesting level costs a stack of combinator closures, so the limit is
# also clamped against sys.getrecursionlimit() at grammar construction.
MAX_JSON_DEPTH: int = 32

# Approximate interpreter frames consumed per JSON nesting level
# (value -> between -> serial -> either_of -> array -> separated_items -> value).
FRAMES_PER_JSON_LEVEL: int = 20
