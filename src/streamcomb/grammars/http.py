"""HTTP/1.1 request head grammar and streaming reader.

Wire format (bytes)::

    <method> SP <target> SP "HTTP/" <version> CRLF
    (<header-name> ":" SP <header-value> CRLF)*
    CRLF

The method and header names are lower-cased. A header name may appear only
once. Everything after the final CRLF is the start of the body and is
returned untouched.

Reading from a stream happens in three driver phases: the request line,
then one header line per phase until the blank line, then the divider. Each
phase starts from the previous phase's leftover, so bytes already received
are never read twice and the source is never read past what the phase needs.

Python 3.13+.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from streamcomb.constants import MAX_HEADER_COUNT
from streamcomb.core import resolve_limit
from streamcomb.diagnostics import (
    DuplicateHeaderError,
    ErrorTemplate,
    InputLimitExceededError,
)
from streamcomb.enums import RequestPhase
from streamcomb.stream import StreamDriver
from streamcomb.syntax import (
    char,
    either,
    literal,
    map_result,
    map_result_halt,
    map_value,
    optional,
    other_than,
    peek,
    preceded,
    repeat_any,
    serial3,
    serial4,
    take_some_while,
    terminated,
)

if TYPE_CHECKING:
    from streamcomb.stream import ByteSource
    from streamcomb.syntax import Parser

    from .uri import RequestTarget

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    "RequestHead",
    # Parsers
    "request_line",
    "header_line",
    "header_entry",
    "divider",
    "request_head",
    # Entry points
    "parse_request_head",
    "read_request_head",
]

logger = logging.getLogger(__name__)

# ============================================================================
# VALUE
# ============================================================================


@dataclass(frozen=True, slots=True)
class RequestHead:
    """Parsed HTTP request head.

    Attributes:
        method: Lower-cased method ("get")
        target: Request target as sent ("/index.html?q=1")
        version: Protocol version after "HTTP/" ("1.1")
        headers: Lower-cased header name to value
        body: Bytes received after the head (start of the body)
    """

    method: str
    target: str
    version: str
    headers: dict[str, str]
    body: bytes = field(default=b"")

    def header(self, name: str, default: str | None = None) -> str | None:
        """Look up a header case-insensitively."""
        return self.headers.get(name.lower(), default)

    def parse_target(self) -> RequestTarget:
        """Interpret the target with the URI grammar.

        Raises:
            ParseFailure: Target is not a valid origin, absolute or asterisk form
        """
        from .uri import parse_request_target  # noqa: PLC0415 - grammar loaded on demand

        return parse_request_target(self.target)


# ============================================================================
# GRAMMAR
# ============================================================================


def _ascii(data: bytes) -> str:
    return data.decode("ascii")


def _utf8(data: bytes) -> str:
    return data.decode("utf-8")


_SP: Parser[bytes] = char(b" ")
_CRLF: Parser[bytes] = literal(b"\r\n")

_method: Parser[str] = map_value(
    map_result(take_some_while(lambda c: c.isascii() and c.isalpha()), _ascii, "method"),
    str.lower,
)
_target: Parser[str] = map_result(other_than(b" \r\n"), _utf8, "request target")
_version: Parser[str] = preceded(
    literal(b"HTTP/"), map_result(other_than(b" \r\n"), _ascii, "HTTP version")
)

# Title line: (method, target, version).
request_line: Parser[tuple[str, str, str]] = serial3(
    terminated(_method, _SP),
    terminated(_target, _SP),
    terminated(_version, _CRLF),
)

_header_name: Parser[str] = map_value(
    map_result(other_than(b":\r\n"), _ascii, "header name"), str.lower
)
# Empty values are allowed ("X-Empty: \r\n"); surrounding blanks are not part of the value.
_header_value: Parser[str] = map_value(
    optional(map_result(other_than(b"\r\n"), _utf8, "header value")),
    lambda value: (value or "").strip(" \t"),
)

# (lower-cased name, value)
header_line: Parser[tuple[str, str]] = map_value(
    serial4(_header_name, literal(b":"), _header_value, _CRLF),
    lambda parts: (parts[0], parts[2]),
)

# A header line, or None at the blank line ending the headers. The blank line
# is checked first: a line starting with CR is never a header.
header_entry: Parser[tuple[str, str] | None] = either(
    map_value(peek(char(b"\r")), lambda _: None),
    header_line,
)

divider: Parser[bytes] = _CRLF


def _unique_headers(pairs: list[tuple[str, str]]) -> dict[str, str]:
    headers: dict[str, str] = {}
    for name, value in pairs:
        if name in headers:
            msg = f"duplicate header {name!r}"
            raise ValueError(msg)
        headers[name] = value
    return headers


# The whole head as one parser; the body is the remainder.
request_head: Parser[RequestHead] = map_value(
    serial3(
        request_line,
        map_result_halt(repeat_any(header_line), _unique_headers, "headers"),
        divider,
    ),
    lambda parts: RequestHead(*parts[0], headers=parts[1]),
)

# ============================================================================
# ENTRY POINTS
# ============================================================================


def read_request_head(
    source: ByteSource,
    *,
    leftover: bytes = b"",
    read_size: int | None = None,
    max_buffer_size: int | None = None,
    max_headers: int | None = None,
) -> RequestHead:
    """Read one request head from a byte source.

    Args:
        source: Byte source (socket via SocketSource, file, io.BytesIO)
        leftover: Bytes already received for this request (pipelining)
        read_size: Bytes requested per read (default: DEFAULT_READ_SIZE)
        max_buffer_size: Per-phase accumulator limit (default: MAX_BUFFER_SIZE)
        max_headers: Maximum header count (default: MAX_HEADER_COUNT, 0 disables)

    Returns:
        RequestHead whose body holds the bytes received after the head

    Raises:
        ParseFailure: Malformed request line, header or divider
        DuplicateHeaderError: A header name appears twice
        IncompleteInputError: Source ran dry mid-head
        SourceReadError: Source raised OSError
        InputLimitExceededError: Too many headers or an oversized line
    """
    header_limit = resolve_limit(max_headers, MAX_HEADER_COUNT)
    driver = StreamDriver(source, read_size=read_size, max_buffer_size=max_buffer_size)

    logger.debug("Reading %s", RequestPhase.REQUEST_LINE)
    line = driver.run(
        request_line,
        leftover,
        template=lambda reason, _span: ErrorTemplate.malformed_request_line(reason),
    )
    method, target, version = line.value

    logger.debug("Reading %s", RequestPhase.HEADERS)
    headers: dict[str, str] = {}
    rest = line.leftover
    while True:
        entry = driver.run(
            header_entry,
            rest,
            template=lambda reason, _span: ErrorTemplate.malformed_header(reason),
        )
        rest = entry.leftover
        if entry.value is None:
            break
        name, value = entry.value
        if name in headers:
            raise DuplicateHeaderError(ErrorTemplate.duplicate_header(name), name=name)
        if header_limit and len(headers) >= header_limit:
            raise InputLimitExceededError(
                ErrorTemplate.header_limit_exceeded(header_limit), limit=header_limit
            )
        headers[name] = value

    logger.debug("Reading %s", RequestPhase.DIVIDER)
    end = driver.run(
        divider,
        rest,
        template=lambda reason, _span: ErrorTemplate.missing_divider(reason),
    )

    logger.debug("Request head complete: %s %s (%d headers)", method, target, len(headers))
    return RequestHead(method, target, version, headers, body=end.leftover)


def parse_request_head(
    data: bytes,
    *,
    max_buffer_size: int | None = None,
    max_headers: int | None = None,
) -> RequestHead:
    """Parse a fully buffered request head.

    Same phases and errors as read_request_head(), run over data alone.

    Example:
        >>> head = parse_request_head(b"GET / HTTP/1.1\\r\\nHost: x\\r\\n\\r\\n")
        >>> head.method, head.headers
        ('get', {'host': 'x'})
    """
    return read_request_head(
        io.BytesIO(b""),
        leftover=data,
        max_buffer_size=max_buffer_size,
        max_headers=max_headers,
    )
