"""JSON (RFC 8259) grammar.

The grammar is built from engine combinators and works over str or bytes.
Complete text goes through parse_json(); json_document is the streaming entry
used with the driver (a top-level object or array, over bytes).

Number kinds:
    42      UnsignedInt(42)     no sign, no fraction, no exponent
    -42     SignedInt(-42)      leading '-', no fraction, no exponent
    4.2e1   Float(42.0)         any fraction or exponent

Object members land in a dict; a repeated key overwrites the earlier value.

Nesting:
    Each nesting level is a separate set of parsers built on first use. The
    innermost permitted level recognises '[' and '{' only to fail fatally, so
    a document nested deeper than max_depth is an error instead of a
    RecursionError.

Python 3.13+.
"""

from __future__ import annotations

import functools
import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from streamcomb.constants import FRAMES_PER_JSON_LEVEL, MAX_JSON_DEPTH
from streamcomb.core import depth_clamp, resolve_limit
from streamcomb.diagnostics import ErrorTemplate
from streamcomb.syntax import (
    Fatal,
    Matched,
    Truncated,
    around,
    between,
    char,
    char_of,
    either,
    either_of,
    halt,
    literal,
    map_result_halt,
    map_value,
    optional,
    other_than,
    parse_all,
    preceded,
    repeat_any,
    separated_items,
    serial,
    serial3,
    serial4,
    take,
    take_some_while,
    take_while,
)

from .charsets import CONTROL, HEX_DIGITS, JSON_WHITESPACE, is_digit

if TYPE_CHECKING:
    from streamcomb.diagnostics import Diagnostic, SourceSpan
    from streamcomb.syntax import Cursor, Outcome, Parser

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Value kinds
    "Null",
    "Bool",
    "UnsignedInt",
    "SignedInt",
    "Float",
    "String",
    "Array",
    "Object",
    "JsonValue",
    # Parsers
    "json_value",
    "document_parser",
    "json_document",
    # Entry point
    "parse_json",
]


# ============================================================================
# VALUE KINDS
# ============================================================================


@dataclass(frozen=True, slots=True)
class Null:
    """JSON null."""


@dataclass(frozen=True, slots=True)
class Bool:
    value: bool


@dataclass(frozen=True, slots=True)
class UnsignedInt:
    value: int


@dataclass(frozen=True, slots=True)
class SignedInt:
    """Integer written with a leading '-' (value <= 0)."""

    value: int


@dataclass(frozen=True, slots=True)
class Float:
    value: float


@dataclass(frozen=True, slots=True)
class String:
    value: str


@dataclass(frozen=True, slots=True)
class Array:
    items: tuple[JsonValue, ...]


@dataclass(frozen=True, slots=True)
class Object:
    members: dict[str, JsonValue]


type JsonValue = Null | Bool | UnsignedInt | SignedInt | Float | String | Array | Object


# ============================================================================
# CONVERSIONS
# ============================================================================

_SIMPLE_ESCAPES: dict[str, str] = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


def _text(piece: str | bytes) -> str:
    return piece.decode("utf-8") if isinstance(piece, bytes) else piece


def _hex_value(digits: str | bytes) -> int:
    text = _text(digits)
    if not all(c in HEX_DIGITS for c in text):
        msg = "expected 4 hexadecimal digits"
        raise ValueError(msg)
    return int(text, 16)


def _number_value(
    parts: tuple[str | bytes | None, str | bytes, str | bytes | None, str | None],
) -> JsonValue:
    sign, integer, fraction, exponent = parts
    if fraction is None and exponent is None:
        magnitude = int(_text(integer))
        return SignedInt(-magnitude) if sign is not None else UnsignedInt(magnitude)
    text = "-" if sign is not None else ""
    text += _text(integer)
    if fraction is not None:
        text += "." + _text(fraction)
    if exponent is not None:
        text += exponent
    value = float(text)
    if not math.isfinite(value):
        msg = "number out of range"
        raise ValueError(msg)
    return Float(value)


def _join(pieces: list[str]) -> str:
    return "".join(pieces)


def _deferred[O](factory: Callable[[], Parser[O]]) -> Parser[O]:
    """Parser resolved on first call; ties the recursive knot between levels."""

    def parse(cursor: Cursor) -> Outcome[O]:
        return factory()(cursor)

    return parse


# ============================================================================
# SCALARS
# ============================================================================


@dataclass(frozen=True, slots=True)
class _Scalars:
    ws: Parser[str | bytes]
    string_text: Parser[str]
    string: Parser[JsonValue]
    number: Parser[JsonValue]
    true: Parser[JsonValue]
    false: Parser[JsonValue]
    null: Parser[JsonValue]
    comma: Parser[str | bytes]
    colon: Parser[str | bytes]
    open_array: Parser[str | bytes]
    close_array: Parser[str | bytes]
    open_object: Parser[str | bytes]
    close_object: Parser[str | bytes]
    opener: Parser[str | bytes]


def _unicode_escape_parser(binary: bool) -> Parser[str]:
    hex4 = map_result_halt(take(4), _hex_value, "unicode escape")
    low_half = preceded(literal(b"\\u" if binary else "\\u"), hex4)

    def parse(cursor: Cursor) -> Outcome[str]:
        match hex4(cursor):
            case Matched(code, rest) if 0xD800 <= code <= 0xDBFF:
                match low_half(rest):
                    case Matched(low, remainder) if 0xDC00 <= low <= 0xDFFF:
                        combined = 0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)
                        return Matched(chr(combined), remainder)
                    case Truncated():
                        return Truncated(None, cursor)
                    case Fatal() as fatal:
                        return fatal
                    case _:
                        return Fatal(
                            f"Unpaired high surrogate U+{code:04X} at position {cursor.pos}"
                        )
            case Matched(code, _) if 0xDC00 <= code <= 0xDFFF:
                return Fatal(f"Unpaired low surrogate U+{code:04X} at position {cursor.pos}")
            case Matched(code, rest):
                return Matched(chr(code), rest)
            case other:
                return other  # type: ignore[return-value]

    return parse


@functools.cache
def _scalars(binary: bool) -> _Scalars:
    def sym(text: str) -> str | bytes:
        return text.encode("ascii") if binary else text

    whitespace = sym(JSON_WHITESPACE)
    ws = take_while(lambda element: element in whitespace)  # type: ignore[operator]

    simple_escape = map_value(char_of(sym('"\\/bfnrt')), lambda c: _SIMPLE_ESCAPES[_text(c)])
    escape = preceded(
        char(sym("\\")),
        halt(
            "escape sequence",
            either(simple_escape, preceded(char(sym("u")), _unicode_escape_parser(binary))),
        ),
    )
    # Raw runs stop at '"', '\' and control characters; a control character
    # therefore ends the string body and the closing quote is rejected.
    raw = map_result_halt(other_than(sym('"\\' + CONTROL)), _text, "string characters")
    string_text = map_value(
        between(char(sym('"')), repeat_any(either_of(raw, escape)), char(sym('"'))), _join
    )

    integer = either(
        char(sym("0")),
        map_value(
            serial(char_of(sym("123456789")), take_while(is_digit)), lambda v: v[0] + v[1]
        ),
    )
    fraction = optional(preceded(char(sym(".")), take_some_while(is_digit)))
    exponent = optional(
        map_value(
            serial3(char_of(sym("eE")), optional(char_of(sym("+-"))), take_some_while(is_digit)),
            lambda v: "e" + _text(v[1] or sym("")) + _text(v[2]),
        )
    )
    number = map_result_halt(
        serial4(optional(char(sym("-"))), integer, fraction, exponent), _number_value, "number"
    )

    return _Scalars(
        ws=ws,
        string_text=string_text,
        string=map_value(string_text, String),
        number=number,
        true=map_value(literal(sym("true")), lambda _: Bool(True)),
        false=map_value(literal(sym("false")), lambda _: Bool(False)),
        null=map_value(literal(sym("null")), lambda _: Null()),
        comma=char(sym(",")),
        colon=char(sym(":")),
        open_array=char(sym("[")),
        close_array=char(sym("]")),
        open_object=char(sym("{")),
        close_object=char(sym("}")),
        opener=char_of(sym("[{")),
    )


# ============================================================================
# NESTING LEVELS
# ============================================================================


# Prefix of every depth-limit reason; parse_json() maps it to its own code.
_DEPTH_REASON = "JSON nesting exceeds maximum depth"


def _too_deep(scalars: _Scalars, max_depth: int) -> Parser[JsonValue]:
    def parse(cursor: Cursor) -> Outcome[JsonValue]:
        outcome = scalars.opener(cursor)
        if isinstance(outcome, Matched):
            return Fatal(f"{_DEPTH_REASON} of {max_depth} at position {cursor.pos}")
        return outcome  # type: ignore[return-value]

    return parse


@functools.cache
def _level(
    binary: bool, max_depth: int, level: int
) -> tuple[Parser[JsonValue], Parser[JsonValue]]:
    """(value, container) parsers for values inside `level` enclosing containers."""
    s = _scalars(binary)
    if level >= max_depth:
        container = _too_deep(s, max_depth)
    else:
        inner = _deferred(lambda: _level(binary, max_depth, level + 1)[0])
        element = between(s.ws, inner, s.ws)
        array = map_value(
            between(
                s.open_array,
                separated_items(s.comma, element),
                preceded(s.ws, s.close_array),
            ),
            lambda items: Array(tuple(items)),
        )
        member = around(between(s.ws, s.string_text, s.ws), s.colon, element)
        obj = map_value(
            between(
                s.open_object,
                separated_items(s.comma, member),
                preceded(s.ws, s.close_object),
            ),
            lambda members: Object(dict(members)),
        )
        container = either_of(obj, array)
    value = either_of(s.string, s.number, container, s.true, s.false, s.null)
    return value, container


def _resolve_depth(max_depth: int | None) -> int:
    depth = resolve_limit(max_depth, MAX_JSON_DEPTH)
    if depth < 1:
        msg = f"max_depth must be >= 1, got {depth}"
        raise ValueError(msg)
    return depth_clamp(depth, frames_per_level=FRAMES_PER_JSON_LEVEL)


# ============================================================================
# PARSERS
# ============================================================================


def json_value(*, max_depth: int | None = None, binary: bool = False) -> Parser[JsonValue]:
    """Parser for one JSON value without surrounding whitespace.

    Args:
        max_depth: Maximum container nesting (default: MAX_JSON_DEPTH)
        binary: Build the grammar over bytes instead of str

    Raises:
        ValueError: If max_depth is below 1
    """
    return _level(binary, _resolve_depth(max_depth), 0)[0]


def document_parser(*, max_depth: int | None = None, binary: bool = True) -> Parser[JsonValue]:
    """Streaming entry: optional leading whitespace, then an object or array.

    A document ends at its closing bracket, so the parser never needs to see
    past the end of the document to decide; anything after it is remainder.
    """
    s = _scalars(binary)
    return preceded(s.ws, _level(binary, _resolve_depth(max_depth), 0)[1])


json_document: Parser[JsonValue] = document_parser()


@functools.cache
def _complete_parser(binary: bool, max_depth: int) -> Parser[JsonValue]:
    s = _scalars(binary)
    return between(s.ws, _level(binary, max_depth, 0)[0], s.ws)


# ============================================================================
# ENTRY POINT
# ============================================================================


def parse_json(
    text: str | bytes,
    *,
    max_depth: int | None = None,
    max_source_size: int | None = None,
) -> JsonValue:
    """Parse a complete JSON text.

    Args:
        text: JSON text (str, or UTF-8 bytes)
        max_depth: Maximum container nesting (default: MAX_JSON_DEPTH)
        max_source_size: Input size limit (default: MAX_SOURCE_SIZE, 0 disables)

    Returns:
        Parsed value

    Raises:
        ParseFailure: Malformed JSON (fatal=True for illegal escapes, bad
            UTF-8, out-of-range numbers and excessive nesting)
        InputLimitExceededError: text is larger than max_source_size

    Example:
        >>> parse_json('{"a": [1, -2]}')
        Object(members={'a': Array(items=(UnsignedInt(value=1), SignedInt(value=-2)))})
    """
    depth = _resolve_depth(max_depth)

    def failure(reason: str, span: SourceSpan | None) -> Diagnostic:
        if _DEPTH_REASON in reason:
            return ErrorTemplate.json_depth_exceeded(depth, reason, span)
        return ErrorTemplate.json_invalid(reason, span)

    parser = _complete_parser(isinstance(text, bytes), depth)
    return parse_all(parser, text, max_source_size=max_source_size, template=failure)
