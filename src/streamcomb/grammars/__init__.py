"""Format grammars built on the combinator engine.

Submodules:
    streamcomb.grammars.http - HTTP/1.1 request head (bytes, streaming)
    streamcomb.grammars.json - JSON values (str or bytes)
    streamcomb.grammars.json_serializer - JSON values back to text
    streamcomb.grammars.uri - URIs, request targets and percent-decoding (str)
    streamcomb.grammars.charsets - Character classes shared by the grammars

Python 3.13+.
"""

from .http import RequestHead, parse_request_head, read_request_head
from .json import JsonValue, json_document, parse_json
from .json_serializer import serialize_json
from .uri import URI, RequestTarget, decode_component, parse_request_target, parse_uri

__all__ = [
    "URI",
    "JsonValue",
    "RequestHead",
    "RequestTarget",
    "decode_component",
    "json_document",
    "parse_json",
    "parse_request_head",
    "parse_request_target",
    "parse_uri",
    "read_request_head",
    "serialize_json",
]
