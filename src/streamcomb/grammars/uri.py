"""RFC 3986-style URI and HTTP request-target grammar.

Parses text (str) input. Components::

           userinfo       host  port
               |            |     |
         foo://user@example.com:8042/over/there?name=ferret#nose
         \\_/   \\____________________/\\_________/ \\_________/ \\__/
          |              |               |           |        |
       scheme        authority          path       query   fragment

Decoding:
    Path segments, query keys/values and fragments are percent-decoded:
    consecutive %XX escapes are collected into bytes and decoded as UTF-8,
    so multi-byte characters span several escapes. "+" decodes to a space.
    A malformed hex pair or invalid UTF-8 is Fatal once the "%" is seen.

Request targets (RFC 9112 Section 3.2):
    origin-form   /path?query
    absolute-form scheme://authority/path?query
    asterisk-form *
    authority-form (CONNECT host:port) is not supported: "host:80" reads as
    an absolute URI with scheme "host".

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from streamcomb.diagnostics import ErrorTemplate
from streamcomb.syntax import (
    alpha_char,
    char,
    char_of,
    either,
    either_of,
    end_of_input,
    halt,
    label,
    literal,
    map_result_halt,
    map_value,
    optional,
    other_than,
    parse_all,
    peek,
    preceded,
    repeat_any,
    repeat_some,
    satisfy,
    separated_items,
    serial,
    serial3,
    serial4,
    take,
    take_some_while,
    take_while,
    terminated,
)

from .charsets import (
    SCHEME_EXTRA,
    SUB_DELIMS,
    is_digit,
    is_hex_digit,
    is_unreserved,
    is_url_terminative,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from streamcomb.syntax import Parser

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Values
    "IPv4Address",
    "Authority",
    "URI",
    "OriginForm",
    "AbsoluteForm",
    "AsteriskForm",
    "RequestTarget",
    # Parsers
    "scheme",
    "dec_octet",
    "ipv4_address",
    "reg_name",
    "host",
    "port",
    "userinfo",
    "authority",
    "segment",
    "relative_path",
    "absolute_path",
    "query",
    "fragment",
    "absolute_uri",
    "request_target",
    "percent_encoded",
    # Entry points
    "decode_component",
    "parse_request_target",
    "parse_uri",
]

_MAX_PORT: int = 65535

# ============================================================================
# VALUES
# ============================================================================


@dataclass(frozen=True, slots=True)
class IPv4Address:
    """Dotted-decimal IPv4 literal."""

    a: int
    b: int
    c: int
    d: int

    def __str__(self) -> str:
        return f"{self.a}.{self.b}.{self.c}.{self.d}"


@dataclass(frozen=True, slots=True)
class Authority:
    """Authority component: [userinfo@]host[:port].

    Attributes:
        userinfo: Decoded userinfo, or None when absent
        host: IPv4 literal or lower-cased registered name
        port: Port number, or None when absent or empty ("host:")
    """

    userinfo: str | None
    host: IPv4Address | str
    port: int | None


@dataclass(frozen=True, slots=True)
class URI:
    """Absolute URI.

    Attributes:
        scheme: Lower-cased scheme
        authority: Authority, or None for URIs without "//"
        path: Decoded path segments (trailing slash dropped)
        query: Decoded query parameters, or None when there is no "?"
        fragment: Decoded fragment, or None when there is no "#"
    """

    scheme: str
    authority: Authority | None
    path: tuple[str, ...]
    query: dict[str, str] | None = None
    fragment: str | None = None


@dataclass(frozen=True, slots=True)
class OriginForm:
    """Request target "/path?query"."""

    path: tuple[str, ...]
    query: dict[str, str] | None = None


@dataclass(frozen=True, slots=True)
class AbsoluteForm:
    """Request target carrying an absolute URI (proxy requests)."""

    uri: URI


@dataclass(frozen=True, slots=True)
class AsteriskForm:
    """Request target "*" (server-wide OPTIONS)."""

    text: str = field(default="*", init=False)


type RequestTarget = OriginForm | AbsoluteForm | AsteriskForm

# ============================================================================
# PERCENT-DECODING
# ============================================================================


def _hex_byte(pair: str) -> int:
    # int(x, 16) also accepts signs, "0x" and underscores
    if not all(is_hex_digit(c) for c in pair):
        msg = "not a hex pair"
        raise ValueError(msg)
    return int(pair, 16)


def _utf8(values: list[int]) -> str:
    return bytes(values).decode("utf-8")


# "%" commits: whatever follows must be two hex digits.
_pct_byte: Parser[int] = preceded(
    char("%"),
    halt("percent escape", map_result_halt(take(2), _hex_byte, "percent escape")),
)

# One or more consecutive %XX escapes, decoded together as UTF-8.
percent_encoded: Parser[str] = map_result_halt(
    repeat_some(_pct_byte), _utf8, "percent-encoded UTF-8"
)

_plus_space: Parser[str] = map_value(char("+"), lambda _: " ")


def _component(is_plain: Callable[[str], bool]) -> Parser[str]:
    """Decoded run of plain characters, escapes and "+" (one or more parts)."""
    return map_value(
        repeat_some(either_of(percent_encoded, _plus_space, take_some_while(is_plain))),
        "".join,
    )


def _is_segment_char(c: str) -> bool:
    return is_unreserved(c) or (c in SUB_DELIMS and c != "+") or c in ":@"


def _is_query_char(c: str) -> bool:
    return (_is_segment_char(c) and c not in "&=") or c in "/?"


def _is_fragment_char(c: str) -> bool:
    return _is_segment_char(c) or c in "/?"


def _is_userinfo_char(c: str) -> bool:
    return is_unreserved(c) or (c in SUB_DELIMS and c != "+") or c == ":"


def _is_reg_name_char(c: str) -> bool:
    return is_unreserved(c) or (c in SUB_DELIMS and c != "+")


# ============================================================================
# SCHEME AND AUTHORITY
# ============================================================================


# Letter followed by letters, digits, "+", "-" or "."; lower-cased.
scheme: Parser[str] = map_value(
    serial(
        alpha_char,
        take_while(lambda c: c.isascii() and (c.isalnum() or c in SCHEME_EXTRA)),
    ),
    lambda parts: (parts[0] + parts[1]).lower(),
)

_digit: Parser[str] = satisfy(is_digit, "digit")


def _number(parts: tuple[str, ...]) -> int:
    return int("".join(parts))


# RFC 3986 dec-octet (0-255, no leading zeros), longest alternative first:
#   "25" %x30-35 / "2" %x30-34 DIGIT / "1" 2DIGIT / %x31-39 DIGIT / DIGIT
dec_octet: Parser[int] = either(
    map_value(serial3(char("2"), char("5"), char_of("012345")), _number),
    either(
        map_value(serial3(char("2"), char_of("01234"), _digit), _number),
        either(
            map_value(serial3(char("1"), _digit, _digit), _number),
            either(
                map_value(serial(char_of("123456789"), _digit), _number),
                map_value(_digit, int),
            ),
        ),
    ),
)

ipv4_address: Parser[IPv4Address] = map_value(
    serial4(
        terminated(dec_octet, char(".")),
        terminated(dec_octet, char(".")),
        terminated(dec_octet, char(".")),
        dec_octet,
    ),
    lambda octets: IPv4Address(*octets),
)

# A host ends where the port, path, query or fragment starts, or the input ends.
_host_end: Parser[object] = either_of(
    peek(satisfy(lambda c: c in ":/?#" or is_url_terminative(c), "end of host")),
    end_of_input,
)

# Possibly empty; lower-cased.
reg_name: Parser[str] = map_value(
    repeat_any(either_of(percent_encoded, take_some_while(_is_reg_name_char))),
    lambda parts: "".join(parts).lower(),
)

# IPv4 literal only when the whole host is one: "1.2.3.4.example" is a name.
host: Parser[IPv4Address | str] = either(terminated(ipv4_address, _host_end), reg_name)


def _port_number(digits: str) -> int | None:
    if not digits:
        return None
    number = int(digits)
    if number > _MAX_PORT:
        msg = f"port out of range 0-{_MAX_PORT}"
        raise ValueError(msg)
    return number


# "host:" (empty port) means no port.
port: Parser[int | None] = preceded(
    char(":"), map_result_halt(take_while(is_digit), _port_number, "port")
)

userinfo: Parser[str] = terminated(
    map_value(
        repeat_any(either_of(percent_encoded, take_some_while(_is_userinfo_char))),
        "".join,
    ),
    char("@"),
)

authority: Parser[Authority] = map_value(
    serial3(optional(userinfo), host, optional(port)),
    lambda parts: Authority(*parts),
)

# ============================================================================
# PATH, QUERY, FRAGMENT
# ============================================================================

segment: Parser[str] = _component(_is_segment_char)


def _path(segments: list[str | None]) -> tuple[str, ...]:
    path = [s or "" for s in segments]
    # A trailing slash leaves one empty segment behind.
    if path and path[-1] == "":
        path.pop()
    return tuple(path)


# "a/b/" gives ("a", "b"); "a//b" gives ("a", "", "b").
relative_path: Parser[tuple[str, ...]] = map_value(
    separated_items(char("/"), optional(segment)), _path
)

absolute_path: Parser[tuple[str, ...]] = preceded(char("/"), relative_path)

_query_token: Parser[str] = _component(_is_query_char)

_query_pair: Parser[tuple[str, str]] = map_value(
    serial(_query_token, optional(preceded(char("="), optional(_query_token)))),
    lambda pair: (pair[0], pair[1] or ""),
)

# "?a=1&b" gives {"a": "1", "b": ""}.
query: Parser[dict[str, str]] = preceded(
    char("?"), map_value(separated_items(char("&"), _query_pair), dict)
)

fragment: Parser[str] = preceded(
    char("#"), map_value(optional(_component(_is_fragment_char)), lambda f: f or "")
)

# ============================================================================
# URI AND REQUEST TARGET
# ============================================================================

_hier_part: Parser[tuple[Authority | None, tuple[str, ...]]] = either_of(
    map_value(
        serial(preceded(literal("//"), authority), optional(absolute_path)),
        lambda v: (v[0], v[1] or ()),
    ),
    map_value(absolute_path, lambda path: (None, path)),
    map_value(relative_path, lambda path: (None, path)),
)

absolute_uri: Parser[URI] = label(
    map_value(
        serial4(
            terminated(scheme, char(":")),
            _hier_part,
            optional(query),
            optional(fragment),
        ),
        lambda v: URI(v[0], v[1][0], v[1][1], v[2], v[3]),
    ),
    "absolute URI",
)

# A request target ends at SP (inside a request line) or at the end of input.
_target_end: Parser[object] = either_of(
    peek(satisfy(is_url_terminative, "end of request target")), end_of_input
)

request_target: Parser[RequestTarget] = either_of(
    terminated(map_value(char("*"), lambda _: AsteriskForm()), _target_end),
    terminated(
        map_value(serial(absolute_path, optional(query)), lambda v: OriginForm(v[0], v[1])),
        _target_end,
    ),
    terminated(map_value(absolute_uri, AbsoluteForm), _target_end),
)

# ============================================================================
# ENTRY POINTS
# ============================================================================

_any_component: Parser[str] = map_value(
    repeat_any(either_of(percent_encoded, _plus_space, other_than("%+"))), "".join
)


def decode_component(text: str, *, max_source_size: int | None = None) -> str:
    """Percent-decode a complete URI component ("+" becomes a space).

    Example:
        >>> decode_component("%C2%A8")
        '¨'

    Raises:
        ParseFailure: Malformed escape or invalid UTF-8
    """
    return parse_all(
        _any_component,
        text,
        max_source_size=max_source_size,
        template=lambda reason, _span: ErrorTemplate.percent_decoding_failed(reason),
    )


def parse_uri(text: str, *, max_source_size: int | None = None) -> URI:
    """Parse a complete absolute URI.

    Raises:
        ParseFailure: Invalid URI
    """
    return parse_all(
        absolute_uri, text, max_source_size=max_source_size, template=ErrorTemplate.uri_invalid
    )


def parse_request_target(text: str, *, max_source_size: int | None = None) -> RequestTarget:
    """Parse a complete HTTP request target (origin, absolute or asterisk form).

    Raises:
        ParseFailure: Invalid request target
    """
    return parse_all(
        request_target,
        text,
        max_source_size=max_source_size,
        template=ErrorTemplate.uri_invalid,
    )
