"""Hypothesis strategies for JSON grammar testing.

Provides value-kind strategies (for serialize/parse round trips) and raw
document text (for streaming and chunking tests).

Event-Emitting Strategies (HypoFuzz-Optimized):
    - json_kind: Top-level kind of a generated value
"""

from __future__ import annotations

from hypothesis import event
from hypothesis import strategies as st

from streamcomb.grammars.json import (
    Array,
    Bool,
    Float,
    JsonValue,
    Null,
    Object,
    SignedInt,
    String,
    UnsignedInt,
)

# Any text without lone surrogates (those have no JSON representation).
json_text = st.text(
    alphabet=st.characters(blacklist_categories=["Cs"]),
    max_size=20,
)

json_scalars: st.SearchStrategy[JsonValue] = st.one_of(
    st.just(Null()),
    st.builds(Bool, st.booleans()),
    st.builds(UnsignedInt, st.integers(min_value=0, max_value=10**20)),
    st.builds(SignedInt, st.integers(min_value=-(10**20), max_value=0)),
    st.builds(Float, st.floats(allow_nan=False, allow_infinity=False)),
    st.builds(String, json_text),
)


def _arrays(children: st.SearchStrategy[JsonValue]) -> st.SearchStrategy[JsonValue]:
    return st.lists(children, max_size=4).map(lambda items: Array(tuple(items)))


def _objects(children: st.SearchStrategy[JsonValue]) -> st.SearchStrategy[JsonValue]:
    return st.dictionaries(json_text, children, max_size=4).map(Object)


json_values: st.SearchStrategy[JsonValue] = st.recursive(
    json_scalars,
    lambda children: st.one_of(_arrays(children), _objects(children)),
    max_leaves=20,
)

json_containers: st.SearchStrategy[JsonValue] = st.one_of(
    _arrays(json_values), _objects(json_values)
)

# Small top-level containers for chunked-driver tests. One-byte reads reparse
# the whole buffer per byte, so document size is kept low.
_small_values: st.SearchStrategy[JsonValue] = st.recursive(
    json_scalars,
    lambda children: st.one_of(_arrays(children), _objects(children)),
    max_leaves=6,
)

json_documents: st.SearchStrategy[JsonValue] = st.one_of(
    _arrays(_small_values), _objects(_small_values)
)


@st.composite
def tagged_json_values(draw: st.DrawFn) -> JsonValue:
    """Generate a JSON value and record its top-level kind.

    Events emitted:
    - json_kind={Null|Bool|UnsignedInt|SignedInt|Float|String|Array|Object}
    """
    value = draw(json_values)
    event(f"json_kind={type(value).__name__}")
    return value


def json_depth(value: JsonValue) -> int:
    """Container nesting depth of value (scalars are 0)."""
    match value:
        case Array(items):
            return 1 + max((json_depth(item) for item in items), default=0)
        case Object(members):
            return 1 + max((json_depth(member) for member in members.values()), default=0)
        case _:
            return 0
