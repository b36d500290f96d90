"""streamcomb exception hierarchy with structured diagnostics.

Exceptions only exist at API boundaries: the streaming driver, parse_all()
and the grammar entry points. Inside the engine every outcome is a value.
All exceptions can carry a Diagnostic for rich error information.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class StreamcombError(Exception):
    """Base exception for all streamcomb errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize StreamcombError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class ParseFailure(StreamcombError):
    """Input could not be parsed.

    Raised for a Rejected or Fatal outcome at an entry point. At the top
    level "no branch matched" and "malformed" are reported the same way;
    the fatal flag records which one it was.

    Attributes:
        reason: Reason string of the outcome that ended the parse
        fatal: True if the outcome was Fatal rather than Rejected
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        reason: str = "",
        fatal: bool = False,
    ) -> None:
        """Initialize ParseFailure.

        Args:
            message: Error message string OR Diagnostic object
            reason: Reason string of the failing outcome
            fatal: Whether the failing outcome was Fatal
        """
        super().__init__(message)
        self.reason = reason
        self.fatal = fatal


class IncompleteInputError(ParseFailure):
    """Input ended while the parser still needed more.

    Raised when a byte source is exhausted (or a complete input ends) while
    the parser is still Truncated.
    """


class DuplicateHeaderError(ParseFailure):
    """A header name occurred twice in one request head.

    Attributes:
        name: The lower-cased header name
    """

    def __init__(self, message: str | Diagnostic, *, name: str) -> None:
        """Initialize DuplicateHeaderError.

        Args:
            message: Error message string OR Diagnostic object
            name: The repeated header name (lower-cased)
        """
        super().__init__(message, reason=f"duplicate header {name!r}", fatal=True)
        self.name = name


class SourceReadError(StreamcombError):
    """The byte source failed while being read.

    The original OSError is chained as __cause__.
    """


class InputLimitExceededError(StreamcombError):
    """Input exceeded a configured size or count limit.

    Attributes:
        limit: The limit that was exceeded
    """

    def __init__(self, message: str | Diagnostic, *, limit: int) -> None:
        """Initialize InputLimitExceededError.

        Args:
            message: Error message string OR Diagnostic object
            limit: The configured limit
        """
        super().__init__(message)
        self.limit = limit
