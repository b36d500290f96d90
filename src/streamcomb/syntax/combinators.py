"""Combinators: functions that build parsers from parsers.

Value transformation, fallible transformation, optional, ordered
alternation, sequencing and wrapping. Repetition lives in
streamcomb.syntax.repeat.

Every combinator returns a plain closure capturing only immutable
construction-time state, so a grammar is built once and reused for every
parse (and may be shared between threads).

Truncated propagation rules (summary):
    map_value       partial transformed; absent partial re-anchored at input
    map_result      collapses to Truncated(None, input)
    optional        passes through
    either          see either() docstring
    serial          collapses to Truncated(None, input)
    peek            passes through
"""

from collections.abc import Callable

from .cursor import Cursor
from .outcome import Fatal, Matched, Outcome, Parser, Rejected, Truncated

__all__ = [
    "around",
    "between",
    "either",
    "either_of",
    "map_result",
    "map_result_halt",
    "map_value",
    "optional",
    "peek",
    "pipe",
    "preceded",
    "serial",
    "serial3",
    "serial4",
    "succeed",
    "terminated",
]


# ============================================================================
# TRANSFORMATION
# ============================================================================


def succeed[O](value: O) -> Parser[O]:
    """Parser that always matches value without consuming input."""

    def parse(cursor: Cursor) -> Outcome[O]:
        return Matched(value, cursor)

    return parse


def map_value[O, M](parser: Parser[O], func: Callable[[O], M]) -> Parser[M]:
    """Apply func to the parsed value.

    A Truncated partial is transformed too. Without a partial there is
    nothing to transform, and the outcome is re-anchored at the input.
    """

    def parse(cursor: Cursor) -> Outcome[M]:
        match parser(cursor):
            case Matched(value, remainder):
                return Matched(func(value), remainder)
            case Truncated(None, _):
                return Truncated(None, cursor)
            case Truncated(partial, remainder):
                return Truncated(func(partial), remainder)  # type: ignore[arg-type]
            case failure:
                return failure  # type: ignore[return-value]

    return parse


def _convert[O, M](
    parser: Parser[O],
    func: Callable[[O], M],
    label: str,
    failure: type[Rejected] | type[Fatal],
) -> Parser[M]:
    def parse(cursor: Cursor) -> Outcome[M]:
        match parser(cursor):
            case Matched(value, remainder):
                try:
                    return Matched(func(value), remainder)
                except ValueError as e:
                    return failure(f"Invalid {label} {value!r} at position {cursor.pos}: {e}")
            case Truncated():
                return Truncated(None, cursor)
            case other:
                return other  # type: ignore[return-value]

    return parse


def map_result[O, M](parser: Parser[O], func: Callable[[O], M], label: str) -> Parser[M]:
    """Apply a fallible conversion; ValueError from func becomes Rejected.

    Args:
        parser: Parser producing the raw value
        func: Conversion; signals failure by raising ValueError
        label: Name of the converted thing, used in the rejection reason
    """
    return _convert(parser, func, label, Rejected)


def map_result_halt[O, M](parser: Parser[O], func: Callable[[O], M], label: str) -> Parser[M]:
    """Apply a fallible conversion; ValueError from func becomes Fatal.

    For conversions that run after the grammar has committed, such as
    decoding the hex digits of a percent escape.
    """
    return _convert(parser, func, label, Fatal)


def optional[O](parser: Parser[O]) -> Parser[O | None]:
    """Match parser or nothing; Rejected becomes Matched(None, input)."""

    def parse(cursor: Cursor) -> Outcome[O | None]:
        outcome = parser(cursor)
        if isinstance(outcome, Rejected):
            return Matched(None, cursor)
        return outcome

    return parse


# ============================================================================
# ALTERNATION
# ============================================================================


def either[O](first: Parser[O], second: Parser[O]) -> Parser[O]:
    """Ordered, left-biased choice between two parsers.

    Rules:
        1. first Matched or Fatal: returned as-is
        2. first Rejected: second runs at the same input, its outcome wins
        3. first Truncated with a partial: returned as-is; first has started
           consuming and must be allowed to extend
        4. first Truncated without a partial: second runs at the same input.
           If second matches, the result is Truncated(second's value,
           second's remainder): first could not rule itself out, so
           second's match is only tentative. Anything else from second is
           returned as-is.

    Rule 4 is conservative: a grammar that wants the fallback's match to
    be final must order the alternatives so the decisive branch runs first.
    """

    def parse(cursor: Cursor) -> Outcome[O]:
        outcome = first(cursor)
        match outcome:
            case Rejected():
                return second(cursor)
            case Truncated(None, _):
                fallback = second(cursor)
                if isinstance(fallback, Matched):
                    return Truncated(fallback.value, fallback.remainder)
                return fallback
            case _:
                return outcome

    return parse


def either_of[O](*parsers: Parser[O]) -> Parser[O]:
    """Ordered choice over any number of parsers.

    Matched or Fatal short-circuits. Rejected and Truncated both move on to
    the next parser; if none matched, the last Truncated seen is returned,
    otherwise Rejected.
    """
    choices = tuple(parsers)

    def parse(cursor: Cursor) -> Outcome[O]:
        truncated: Truncated[O] | None = None
        for parser in choices:
            outcome = parser(cursor)
            match outcome:
                case Matched() | Fatal():
                    return outcome
                case Truncated():
                    truncated = outcome
        if truncated is not None:
            return truncated
        return Rejected(f"No alternative matched at position {cursor.pos}")

    return parse


# ============================================================================
# SEQUENCING
# ============================================================================


def serial[A, B](first: Parser[A], second: Parser[B]) -> Parser[tuple[A, B]]:
    """Run first, then second on its remainder; pair the values.

    Any Truncated, from either stage, collapses the whole sequence to
    Truncated(None, input): half a pair is not a usable partial value.
    """

    def parse(cursor: Cursor) -> Outcome[tuple[A, B]]:
        match first(cursor):
            case Matched(left, middle):
                match second(middle):
                    case Matched(right, remainder):
                        return Matched((left, right), remainder)
                    case Truncated():
                        return Truncated(None, cursor)
                    case failure:
                        return failure  # type: ignore[return-value]
            case Truncated():
                return Truncated(None, cursor)
            case failure:
                return failure  # type: ignore[return-value]

    return parse


def serial3[A, B, C](
    first: Parser[A], second: Parser[B], third: Parser[C]
) -> Parser[tuple[A, B, C]]:
    """Sequence of three parsers producing a flat 3-tuple."""
    return map_value(serial(serial(first, second), third), lambda v: (v[0][0], v[0][1], v[1]))


def serial4[A, B, C, D](
    first: Parser[A], second: Parser[B], third: Parser[C], fourth: Parser[D]
) -> Parser[tuple[A, B, C, D]]:
    """Sequence of four parsers producing a flat 4-tuple."""
    return map_value(
        serial(serial(first, second), serial(third, fourth)),
        lambda v: (v[0][0], v[0][1], v[1][0], v[1][1]),
    )


def terminated[A, B](parser: Parser[A], terminator: Parser[B]) -> Parser[A]:
    """Sequence keeping only the first value."""
    return map_value(serial(parser, terminator), lambda v: v[0])


def preceded[A, B](prefix: Parser[A], parser: Parser[B]) -> Parser[B]:
    """Sequence keeping only the second value."""
    return map_value(serial(prefix, parser), lambda v: v[1])


def between[A, B, C](before: Parser[A], subject: Parser[B], after: Parser[C]) -> Parser[B]:
    """Subject wrapped in delimiters; keeps the subject's value."""
    return map_value(serial3(before, subject, after), lambda v: v[1])


def around[A, B, C](
    before: Parser[A], separator: Parser[B], after: Parser[C]
) -> Parser[tuple[A, C]]:
    """Two values around a separator; keeps both values."""
    return map_value(serial3(before, separator, after), lambda v: (v[0], v[2]))


# ============================================================================
# LOOKAHEAD AND NESTING
# ============================================================================


def peek[O](parser: Parser[O]) -> Parser[O]:
    """Run parser without consuming: a match leaves the input where it was."""

    def parse(cursor: Cursor) -> Outcome[O]:
        outcome = parser(cursor)
        if isinstance(outcome, Matched):
            return Matched(outcome.value, cursor)
        return outcome

    return parse


def pipe[M](outer: Parser[str | bytes], inner: Parser[M]) -> Parser[M]:
    """Run inner over the text that outer matched.

    The matched text is complete input for inner, so inner decides at its
    end instead of asking for more. The remainder is outer's remainder.
    """

    def parse(cursor: Cursor) -> Outcome[M]:
        match outer(cursor):
            case Matched(text, remainder):
                match inner(Cursor.complete(text)):
                    case Matched(value, _):
                        return Matched(value, remainder)
                    case Truncated():
                        return Fatal(f"Incomplete {text!r} at position {cursor.pos}")
                    case failure:
                        return failure  # type: ignore[return-value]
            case Truncated():
                return Truncated(None, cursor)
            case failure:
                return failure  # type: ignore[return-value]

    return parse
