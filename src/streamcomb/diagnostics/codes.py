"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Parse errors (outcomes escalated at an entry point)
        2000-2999: Stream errors (byte source and buffer failures)
        3000-3999: HTTP request head errors
        4000-4999: JSON and URI grammar errors
    """

    # Parse errors (1000-1999)
    PARSE_REJECTED = 1001
    PARSE_FATAL = 1002
    INCOMPLETE_INPUT = 1003
    TRAILING_INPUT = 1004

    # Stream errors (2000-2999)
    SOURCE_READ_FAILED = 2001
    BUFFER_LIMIT_EXCEEDED = 2002
    SOURCE_SIZE_EXCEEDED = 2003

    # HTTP request head errors (3000-3999)
    MALFORMED_REQUEST_LINE = 3001
    MALFORMED_HEADER = 3002
    DUPLICATE_HEADER = 3003
    MISSING_DIVIDER = 3004
    HEADER_LIMIT_EXCEEDED = 3005

    # Grammar errors (4000-4999)
    JSON_INVALID = 4001
    JSON_DEPTH_EXCEEDED = 4002
    URI_INVALID = 4101
    PERCENT_DECODING_FAILED = 4102


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Input location for error reporting.

    Note:
        Offsets are measured in elements of the parsed input: characters for
        str input, bytes for bytes input.

    Attributes:
        start: Starting offset (0-indexed)
        end: Ending offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, or line or
                column is less than 1 (both are 1-indexed).
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Input location (None when the failure has no position)
        hint: Suggestion for fixing the error
        reason: Reason string carried by the engine outcome, if any
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    reason: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Delegates to DiagnosticFormatter for consistent output.

        Example output:
            error[DUPLICATE_HEADER]: Header 'host' appears more than once
              --> line 3, column 1
              = reason: duplicate header name
              = help: Send each header name at most once

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
