"""Enumerations for streamcomb type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class OutcomeKind(StrEnum):
    """Variant tag of a parse outcome.

    StrEnum provides automatic string conversion: str(OutcomeKind.MATCHED) == "matched"
    """

    MATCHED = "matched"
    """Prefix recognized; value and remainder available."""

    REJECTED = "rejected"
    """Input does not match here; an alternative may still apply."""

    FATAL = "fatal"
    """Input is malformed; no alternative may be tried."""

    TRUNCATED = "truncated"
    """Input ran out before a decision could be made."""


class RequestPhase(StrEnum):
    """Driver phase of the HTTP request head reader.

    StrEnum provides automatic string conversion: str(RequestPhase.HEADERS) == "headers"
    """

    REQUEST_LINE = "request_line"
    """METHOD SP TARGET SP HTTP/VERSION CRLF"""

    HEADERS = "headers"
    """name: value CRLF, one line per phase"""

    DIVIDER = "divider"
    """The lone CRLF separating head and body"""


__all__ = [
    "OutcomeKind",
    "RequestPhase",
]
