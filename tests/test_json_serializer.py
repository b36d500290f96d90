"""Tests for the JSON serializer."""

from __future__ import annotations

import math

import pytest
from hypothesis import assume, given

from streamcomb.constants import MAX_JSON_DEPTH
from streamcomb.diagnostics import DiagnosticCode, InputLimitExceededError
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
    parse_json,
)
from streamcomb.grammars.json_serializer import (
    JsonSerializer,
    SerializationValidationError,
    serialize_json,
)
from tests.strategies import json_depth, json_values

_BS = "\\"

# ============================================================================
# OUTPUT FORMAT
# ============================================================================


class TestSerializeScalars:
    """Scalar kinds."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (Null(), "null"),
            (Bool(True), "true"),
            (Bool(False), "false"),
            (UnsignedInt(0), "0"),
            (UnsignedInt(42), "42"),
            (SignedInt(-7), "-7"),
            (SignedInt(0), "-0"),
            (Float(1.0), "1.0"),
            (Float(-2.5), "-2.5"),
            (Float(1e16), "1e+16"),
            (String(""), '""'),
        ],
    )
    def test_scalar_text(self, value: JsonValue, expected: str) -> None:
        """Each kind has one canonical spelling."""
        assert serialize_json(value) == expected

    def test_negative_zero_keeps_kind(self) -> None:
        """SignedInt(0) is written with its sign so it parses back as SignedInt."""
        assert parse_json(serialize_json(SignedInt(0))) == SignedInt(0)

    def test_whole_float_keeps_kind(self) -> None:
        """A whole-valued Float is never written as an integer."""
        assert parse_json(serialize_json(Float(3.0))) == Float(3.0)


class TestSerializeStrings:
    """String escaping."""

    def test_quote_and_backslash(self) -> None:
        """'"' and '\\' are escaped."""
        assert serialize_json(String('a"b' + _BS)) == '"a' + _BS + '"b' + _BS * 2 + '"'

    def test_named_control_escapes(self) -> None:
        """Controls with a short escape use it."""
        assert serialize_json(String("\n\t")) == '"' + _BS + "n" + _BS + 't"'

    def test_other_controls_use_hex(self) -> None:
        """Remaining controls become lower-case \\u escapes."""
        assert serialize_json(String(chr(1) + chr(0x1F))) == f'"{_BS}u0001{_BS}u001f"'

    def test_non_ascii_written_raw(self) -> None:
        """Non-ASCII text is output as-is."""
        text = chr(0xE9) + chr(0x1F600)

        assert serialize_json(String(text)) == f'"{text}"'

    def test_lone_surrogate_invalid(self) -> None:
        """Lone surrogates have no JSON text."""
        with pytest.raises(SerializationValidationError, match="Lone surrogate"):
            serialize_json(String("a" + chr(0xD800)))


class TestSerializeContainers:
    """Arrays and objects are compact."""

    def test_nested(self) -> None:
        """No insignificant whitespace."""
        value = Object({"a": Array((UnsignedInt(1), SignedInt(-2))), "b": Object({})})

        assert serialize_json(value) == '{"a":[1,-2],"b":{}}'

    def test_keys_escaped(self) -> None:
        """Object keys are escaped like strings."""
        assert serialize_json(Object({"\n": Null()})) == '{"' + _BS + 'n":null}'

    def test_empty_array(self) -> None:
        """An empty array."""
        assert serialize_json(Array(())) == "[]"


# ============================================================================
# VALIDATION
# ============================================================================


class TestSerializeValidation:
    """Values without faithful JSON text are refused."""

    @pytest.mark.parametrize("number", [math.inf, -math.inf, math.nan])
    def test_non_finite_float(self, number: float) -> None:
        """inf and nan have no JSON spelling."""
        with pytest.raises(SerializationValidationError, match="finite"):
            serialize_json(Float(number))

    def test_negative_unsigned(self) -> None:
        """UnsignedInt below zero is inconsistent."""
        with pytest.raises(SerializationValidationError, match="UnsignedInt"):
            serialize_json(UnsignedInt(-1))

    def test_positive_signed(self) -> None:
        """SignedInt above zero is inconsistent."""
        with pytest.raises(SerializationValidationError, match="SignedInt"):
            serialize_json(SignedInt(1))

    @pytest.mark.parametrize("value", [UnsignedInt(10**5000), SignedInt(-(10**5000))])
    def test_integer_beyond_decimal_limit(self, value: JsonValue) -> None:
        """Integers past the interpreter's int-to-str limit are refused."""
        with pytest.raises(SerializationValidationError, match="too large") as exc_info:
            serialize_json(value)

        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_not_a_value(self) -> None:
        """Foreign objects are refused."""
        with pytest.raises(SerializationValidationError, match="Not a JSON value"):
            serialize_json([1, 2])  # type: ignore[arg-type]

    def test_validation_error_is_value_error(self) -> None:
        """Callers may catch ValueError."""
        assert issubclass(SerializationValidationError, ValueError)

    def test_nested_invalid_value(self) -> None:
        """Validation reaches into containers."""
        with pytest.raises(SerializationValidationError):
            serialize_json(Array((Object({"k": Float(math.nan)}),)))


# ============================================================================
# DEPTH
# ============================================================================


def _nested_arrays(depth: int) -> JsonValue:
    value: JsonValue = Null()
    for _ in range(depth):
        value = Array((value,))
    return value


class TestSerializeDepth:
    """max_depth bounds container nesting."""

    def test_at_limit(self) -> None:
        """Exactly max_depth levels serialize."""
        assert serialize_json(_nested_arrays(3), max_depth=3) == "[[[null]]]"

    def test_beyond_limit(self) -> None:
        """One more level raises InputLimitExceededError."""
        with pytest.raises(InputLimitExceededError) as exc_info:
            serialize_json(_nested_arrays(4), max_depth=3)

        assert exc_info.value.limit == 3
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.JSON_DEPTH_EXCEEDED

    def test_serializer_reusable_after_error(self) -> None:
        """Depth state is per call."""
        serializer = JsonSerializer(max_depth=2)

        with pytest.raises(InputLimitExceededError):
            serializer.serialize(_nested_arrays(3))

        assert serializer.serialize(_nested_arrays(2)) == "[[null]]"

    def test_invalid_max_depth(self) -> None:
        """max_depth below 1 is a programming error."""
        with pytest.raises(ValueError, match="max_depth must be >= 1"):
            JsonSerializer(max_depth=0)


# ============================================================================
# PROPERTIES
# ============================================================================


class TestSerializerProperties:
    """Serializer and parser agree."""

    @given(value=json_values)
    def test_round_trip(self, value: JsonValue) -> None:
        """PROPERTY: parse_json(serialize_json(v)) == v."""
        assume(json_depth(value) <= MAX_JSON_DEPTH)

        assert parse_json(serialize_json(value)) == value

    @given(value=json_values)
    def test_output_is_stable(self, value: JsonValue) -> None:
        """PROPERTY: serializing the parsed output gives the same text."""
        assume(json_depth(value) <= MAX_JSON_DEPTH)
        text = serialize_json(value)

        assert serialize_json(parse_json(text)) == text
