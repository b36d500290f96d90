"""Diagnostics wrappers: naming failures and changing their severity."""

from .cursor import Cursor
from .outcome import Fatal, Matched, Outcome, Parser, Rejected, Truncated

__all__ = ["accept_limit", "halt", "label"]


def label[O](parser: Parser[O], name: str) -> Parser[O]:
    """Rewrite Rejected/Fatal reasons to name the construct being parsed.

    Matched and Truncated pass through untouched.

    Example:
        >>> p = label(char("a"), "greeting")
        >>> p(Cursor.complete("b")).reason
        "Error parsing greeting: Expected 'a' at position 0, found 'b'"
    """

    def parse(cursor: Cursor) -> Outcome[O]:
        outcome = parser(cursor)
        match outcome:
            case Rejected(reason):
                return Rejected(f"Error parsing {name}: {reason}")
            case Fatal(reason):
                return Fatal(f"Halted at parsing {name}: {reason}")
            case _:
                return outcome

    return parse


def halt[O](name: str, parser: Parser[O]) -> Parser[O]:
    """Escalate Rejected to Fatal.

    Wrap the part of a grammar that runs after a commit point (the
    character after an escape introducer, the hex digits after '%'), where
    trying another alternative would silently accept malformed input.
    """

    def parse(cursor: Cursor) -> Outcome[O]:
        outcome = parser(cursor)
        if isinstance(outcome, Rejected):
            return Fatal(f"Halted {name} at position {cursor.pos}: {outcome.reason}")
        return outcome

    return parse


def accept_limit[O](parser: Parser[O]) -> Parser[O]:
    """Accept the best partial match as final.

    For callers that know no more input will arrive: Truncated with a
    partial becomes Matched; Truncated without one becomes Rejected.
    """

    def parse(cursor: Cursor) -> Outcome[O]:
        outcome = parser(cursor)
        match outcome:
            case Truncated(None, _):
                return Rejected(f"Input ended at position {cursor.pos} before a match")
            case Truncated(partial, remainder):
                return Matched(partial, remainder)  # type: ignore[arg-type]
            case _:
                return outcome

    return parse
