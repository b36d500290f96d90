"""Hypothesis strategies for streamcomb property-based testing.

This package provides reusable strategies for generating test data
across multiple test modules. Strategies are organized by domain:

- http: Serialized HTTP request heads with their expected parse
- json: JSON value kinds and container values
- uri: Percent-encoded path segments and IPv4 octets

Usage:
    from tests.strategies import json_values, request_heads
    from tests.strategies.uri import encoded_segments
"""

from .http import GeneratedHead, header_names, header_values, request_heads
from .json import (
    json_containers,
    json_depth,
    json_documents,
    json_scalars,
    json_text,
    json_values,
    tagged_json_values,
)
from .uri import encode_segment, encoded_segments, octets, segment_text

__all__ = [
    "GeneratedHead",
    "encode_segment",
    "encoded_segments",
    "header_names",
    "header_values",
    "json_containers",
    "json_depth",
    "json_documents",
    "json_scalars",
    "json_text",
    "json_values",
    "octets",
    "request_heads",
    "segment_text",
    "tagged_json_values",
]
