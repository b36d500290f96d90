"""Primitive matchers: the leaf parsers of every grammar.

Each function here either IS a parser (pop, peek_char, alpha_char,
end_of_input) or BUILDS one from immutable construction-time state
(literal, char, char_of, take, take_while, ...).

All primitives accept str or bytes cursors. Character sets, literals and
predicates are given in the same type as the input: a bytes grammar uses
b"abc", a str grammar uses "abc". Predicates receive a length-1 slice.

End of input:
    Primitives are the only parsers that look at Cursor.is_final. When the
    available input runs out before a primitive can decide, it answers
    Truncated on a streaming cursor and decides (Matched or Rejected) on a
    complete one. Combinators only propagate what primitives report.
"""

from collections.abc import Callable

from .cursor import Cursor
from .outcome import Matched, Outcome, Parser, Rejected, Truncated

__all__ = [
    "alpha_char",
    "char",
    "char_of",
    "end_of_input",
    "literal",
    "other_than",
    "peek_char",
    "pop",
    "satisfy",
    "some_chars_of",
    "take",
    "take_some_while",
    "take_while",
]

type Element = str | bytes
type Predicate = Callable[[Element], bool]


def _exhausted[O](cursor: Cursor, expected: str) -> Outcome[O]:
    """Outcome for a primitive that needs one more element than is available."""
    if cursor.is_final:
        return Rejected(f"Expected {expected} at position {cursor.pos}, found end of input")
    return Truncated(None, cursor)


def _scan(cursor: Cursor, predicate: Predicate) -> int:
    """Return the first position at or after cursor.pos failing predicate."""
    source = cursor.source
    end = len(source)
    pos = cursor.pos
    while pos < end and predicate(source[pos : pos + 1]):
        pos += 1
    return pos


def pop(cursor: Cursor) -> Outcome[Element]:
    """Consume exactly one element, whatever it is."""
    if cursor.is_eof:
        return _exhausted(cursor, "any element")
    return Matched(cursor.current, cursor.advance())


def peek_char(cursor: Cursor) -> Outcome[Element]:
    """Return the next element without consuming it."""
    if cursor.is_eof:
        return _exhausted(cursor, "any element")
    return Matched(cursor.current, cursor)


def literal[S: (str, bytes)](expected: S) -> Parser[S]:
    """Match an exact literal.

    On a streaming cursor, input that is a strict prefix of the literal is
    Truncated(None): the rest of the literal may still arrive.

    Example:
        >>> literal("GET")(Cursor.complete("GET /"))
        Matched(value='GET', remainder=Cursor(source='GET /', pos=3, final=True))
    """
    size = len(expected)

    def parse(cursor: Cursor) -> Outcome[S]:
        ahead = cursor.slice_ahead(size)
        if ahead == expected:
            return Matched(expected, cursor.advance(size))
        if len(ahead) < size and not cursor.is_final and expected.startswith(ahead):  # type: ignore[arg-type]
            return Truncated(None, cursor)
        return Rejected(f"Expected {expected!r} at position {cursor.pos}, found {ahead!r}")

    return parse


def satisfy(predicate: Predicate, expected: str) -> Parser[Element]:
    """Match one element for which predicate holds.

    Args:
        predicate: Test applied to the length-1 slice
        expected: Description used in the rejection reason
    """

    def parse(cursor: Cursor) -> Outcome[Element]:
        if cursor.is_eof:
            return _exhausted(cursor, expected)
        element = cursor.current
        if predicate(element):
            return Matched(element, cursor.advance())
        return Rejected(f"Expected {expected} at position {cursor.pos}, found {element!r}")

    return parse


def char[S: (str, bytes)](expected: S) -> Parser[S]:
    """Match one specific element."""
    return satisfy(lambda element: element == expected, repr(expected))  # type: ignore[return-value]


def char_of[S: (str, bytes)](chars: S) -> Parser[S]:
    """Match one element from a character set."""
    return satisfy(lambda element: element in chars, f"one of {chars!r}")  # type: ignore[operator, return-value]


# ASCII letters only: str.isalpha() alone accepts any Unicode letter.
alpha_char: Parser[Element] = satisfy(
    lambda element: element.isascii() and element.isalpha(), "ASCII letter"
)


def take(count: int) -> Parser[Element]:
    """Consume exactly count elements.

    Fewer available: Truncated(partial) on a streaming cursor, Rejected on a
    complete one.
    """

    def parse(cursor: Cursor) -> Outcome[Element]:
        chunk = cursor.slice_ahead(count)
        if len(chunk) == count:
            return Matched(chunk, cursor.advance(count))
        if cursor.is_final:
            return Rejected(
                f"Expected {count} elements at position {cursor.pos}, found {len(chunk)}"
            )
        return Truncated(chunk, cursor.advance(len(chunk)))

    return parse


def take_while(predicate: Predicate) -> Parser[Element]:
    """Consume zero or more elements while predicate holds.

    Reaching the end of streaming input yields Truncated(consumed): the run
    might continue in the next chunk.
    """

    def parse(cursor: Cursor) -> Outcome[Element]:
        stop = _scan(cursor, predicate)
        consumed = cursor.slice_to(stop)
        rest = cursor.advance(stop - cursor.pos)
        if rest.is_eof and not cursor.is_final:
            return Truncated(consumed, rest)
        return Matched(consumed, rest)

    return parse


def take_some_while(predicate: Predicate) -> Parser[Element]:
    """Consume one or more elements while predicate holds."""
    run = take_while(predicate)

    def parse(cursor: Cursor) -> Outcome[Element]:
        if cursor.is_eof:
            return _exhausted(cursor, "at least one matching element")
        if not predicate(cursor.current):
            return Rejected(
                f"Expected at least one matching element at position {cursor.pos}, "
                f"found {cursor.current!r}"
            )
        return run(cursor)

    return parse


def some_chars_of[S: (str, bytes)](chars: S) -> Parser[S]:
    """Consume one or more elements from a character set."""
    return take_some_while(lambda element: element in chars)  # type: ignore[operator, return-value]


def other_than[S: (str, bytes)](chars: S) -> Parser[S]:
    """Consume one or more elements up to (not including) one in chars.

    A zero-length run is Rejected. Reaching the end of streaming input is
    Truncated(consumed), or Truncated(None) when nothing was consumed.
    """

    def parse(cursor: Cursor) -> Outcome[S]:
        stop = _scan(cursor, lambda element: element not in chars)  # type: ignore[operator]
        consumed = cursor.slice_to(stop)
        rest = cursor.advance(stop - cursor.pos)
        if rest.is_eof and not cursor.is_final:
            return Truncated(consumed or None, rest)  # type: ignore[arg-type]
        if not consumed:
            return Rejected(
                f"Expected an element other than {chars!r} at position {cursor.pos}"
            )
        return Matched(consumed, rest)  # type: ignore[arg-type]

    return parse


def end_of_input(cursor: Cursor) -> Outcome[Element]:
    """Match the end of complete input, consuming nothing.

    On a streaming cursor the end of the available input is not the end of
    the input, so the answer there is Truncated(None).
    """
    if not cursor.is_eof:
        return Rejected(f"Expected end of input at position {cursor.pos}, found {cursor.current!r}")
    if cursor.is_final:
        return Matched(cursor.empty, cursor)
    return Truncated(None, cursor)
