"""streamcomb - Parser combinators over str and bytes with a streaming driver.

Parsers are plain functions from a Cursor to one of four outcomes: Matched,
Rejected, Fatal or Truncated. Truncated means "not wrong yet, need more
input", which lets the same grammar run over a fully buffered string or
over a socket that delivers bytes in arbitrary chunks.

Public API:
    Cursor - Immutable position in a str/bytes source
    Matched, Rejected, Fatal, Truncated - Parse outcomes
    parse_all - Run a parser over complete input, raising on failure
    StreamDriver - Feed a parser from a chunked byte source
    read_request_head / parse_request_head - HTTP/1.1 request head
    parse_json / serialize_json - JSON text
    parse_uri / parse_request_target / decode_component - URIs

Exceptions:
    StreamcombError - Base exception class
    ParseFailure - Input rejected (fatal flag set for committed failures)
    IncompleteInputError - Input ended while the parser needed more
    SourceReadError - Byte source raised OSError
    InputLimitExceededError - Buffer, source, header or depth limit exceeded

Submodules:
    streamcomb.syntax - Engine: cursor, outcomes, primitives, combinators
    streamcomb.stream - Streaming driver and byte sources
    streamcomb.grammars - HTTP, JSON and URI grammars
    streamcomb.diagnostics - Error types, codes and formatting
"""

from .diagnostics import (
    DuplicateHeaderError,
    IncompleteInputError,
    InputLimitExceededError,
    ParseFailure,
    SourceReadError,
    StreamcombError,
)
from .grammars import (
    decode_component,
    parse_json,
    parse_request_head,
    parse_request_target,
    parse_uri,
    read_request_head,
    serialize_json,
)
from .stream import SocketSource, StreamDriver
from .syntax import Cursor, Fatal, Matched, Rejected, Truncated, parse_all

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("streamcomb")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "Cursor",
    "DuplicateHeaderError",
    "Fatal",
    "IncompleteInputError",
    "InputLimitExceededError",
    "Matched",
    "ParseFailure",
    "Rejected",
    "SocketSource",
    "SourceReadError",
    "StreamDriver",
    "StreamcombError",
    "Truncated",
    "__version__",
    "decode_component",
    "parse_all",
    "parse_json",
    "parse_request_head",
    "parse_request_target",
    "parse_uri",
    "read_request_head",
    "serialize_json",
]
