"""Four-outcome result type produced by every parser.

Every parser is a function ``Cursor -> Outcome[O]``. Exactly one of four
outcomes is returned:

    Matched(value, remainder)     consumed a prefix and recognized it
    Rejected(reason)              does not match here; alternatives may run
    Fatal(reason)                 malformed; aborts the whole parse
    Truncated(partial, remainder) ran out of input before deciding

Outcomes are values, never exceptions. ``Rejected`` is frequent and cheap;
raising for it would make alternation the hot path of the exception
machinery. Exceptions appear only at the API boundary (see
streamcomb.syntax.core and streamcomb.stream.driver).

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Callable
from dataclasses import dataclass, field

from streamcomb.enums import OutcomeKind

from .cursor import Cursor

__all__ = [
    "Fatal",
    "Matched",
    "Outcome",
    "Parser",
    "Rejected",
    "Truncated",
]


@dataclass(frozen=True, slots=True)
class Matched[O]:
    """Parser consumed a prefix and definitively recognized it.

    Attributes:
        value: Parsed value
        remainder: Cursor over the unconsumed suffix (same source object)
    """

    value: O
    remainder: Cursor
    kind: OutcomeKind = field(default=OutcomeKind.MATCHED, init=False, repr=False)


@dataclass(frozen=True, slots=True)
class Rejected:
    """Input does not match at this position; recoverable by alternation."""

    reason: str
    kind: OutcomeKind = field(default=OutcomeKind.REJECTED, init=False, repr=False)


@dataclass(frozen=True, slots=True)
class Fatal:
    """Input is malformed; propagates unchanged through every combinator."""

    reason: str
    kind: OutcomeKind = field(default=OutcomeKind.FATAL, init=False, repr=False)


@dataclass(frozen=True, slots=True)
class Truncated[O]:
    """Parser ran out of input before it could decide.

    Attributes:
        partial: Best-effort value recognized so far, or None when there is none
        remainder: Cursor where parsing stopped
    """

    partial: O | None
    remainder: Cursor
    kind: OutcomeKind = field(default=OutcomeKind.TRUNCATED, init=False, repr=False)


type Outcome[O] = Matched[O] | Rejected | Fatal | Truncated[O]

type Parser[O] = Callable[[Cursor], Outcome[O]]
