"""Repetition combinators.

repeat_any / repeat_some apply one parser until it stops matching;
separated_items alternates an item parser with a separator parser.

Termination:
    A parser that matches without consuming would make repetition loop
    forever. Such a match ends the repetition as if the parser had rejected.
"""

from .cursor import Cursor
from .outcome import Fatal, Matched, Outcome, Parser, Rejected, Truncated

__all__ = ["repeat_any", "repeat_some", "separated_items"]


def repeat_any[O](parser: Parser[O]) -> Parser[list[O]]:
    """Apply parser zero or more times.

    Outcomes:
        Matched(values, remainder before the first non-match) when parser
        rejects; zero matches is Matched([], input), never Rejected.
        Fatal from parser propagates.
        Truncated(values plus any partial, truncation remainder) when parser
        runs out of input.
    """

    def parse(cursor: Cursor) -> Outcome[list[O]]:
        values: list[O] = []
        rest = cursor
        while True:
            match parser(rest):
                case Matched(value, remainder):
                    if remainder.pos == rest.pos:
                        break
                    values.append(value)
                    rest = remainder
                case Rejected():
                    break
                case Fatal() as fatal:
                    return fatal
                case Truncated(partial, remainder):
                    if partial is not None:
                        values.append(partial)
                    return Truncated(values, remainder)
        return Matched(values, rest)

    return parse


def repeat_some[O](parser: Parser[O]) -> Parser[list[O]]:
    """Apply parser one or more times; zero matches is Rejected."""
    many = repeat_any(parser)

    def parse(cursor: Cursor) -> Outcome[list[O]]:
        outcome = many(cursor)
        if isinstance(outcome, Matched) and not outcome.value:
            return Rejected(f"Expected at least one repetition at position {cursor.pos}")
        return outcome

    return parse


def separated_items[S, O](separator: Parser[S], item: Parser[O]) -> Parser[list[O]]:
    """Items separated by separator, e.g. ``a,b,c``.

    A trailing separator is never required and never consumed: when no item
    follows a separator, the match ends just after the last item.

    Outcomes:
        Matched(items, after last item) when item or separator rejects
        Fatal from either parser propagates
        Truncated(items plus any partial item, remainder) on truncation
    """

    def parse(cursor: Cursor) -> Outcome[list[O]]:
        items: list[O] = []
        rest = cursor
        after_item = cursor
        while True:
            match item(rest):
                case Matched(value, remainder):
                    items.append(value)
                    rest = after_item = remainder
                case Rejected():
                    return Matched(items, after_item)
                case Fatal() as fatal:
                    return fatal
                case Truncated(partial, remainder):
                    if partial is not None:
                        items.append(partial)
                    return Truncated(items, remainder)
            match separator(rest):
                case Matched(_, remainder):
                    if remainder.pos == rest.pos:
                        return Matched(items, after_item)
                    rest = remainder
                case Rejected():
                    return Matched(items, after_item)
                case Fatal() as fatal:
                    return fatal
                case Truncated():
                    return Truncated(items, after_item)

    return parse
