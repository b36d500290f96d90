"""Core utilities shared across the engine, the driver and the grammars.

By isolating these utilities here, we maintain a clean dependency graph:

    core <- syntax <- stream <- grammars

Exports:
    DepthGuard: Context manager bounding recursion in the JSON serializer
    depth_clamp: Clamp a nesting limit against the interpreter recursion limit
    resolve_limit: Resolve a keyword-only limit override against its default
    check_source_size: Enforce the complete-input size guard

Python 3.13+.
"""

from .limits import DepthGuard, check_source_size, depth_clamp, resolve_limit

__all__ = ["DepthGuard", "check_source_size", "depth_clamp", "resolve_limit"]
