"""Serialize JSON values back to JSON text.

Output is compact (no insignificant whitespace) and canonical for the value
kinds of streamcomb.grammars.json, so that for every serializable value:

    parse_json(serialize_json(value)) == value

Python 3.13+.
"""

import math

from streamcomb.constants import MAX_JSON_DEPTH
from streamcomb.core import DepthGuard, resolve_limit

from .json import Array, Bool, Float, JsonValue, Null, Object, SignedInt, String, UnsignedInt

__all__ = ["JsonSerializer", "SerializationValidationError", "serialize_json"]


class SerializationValidationError(ValueError):
    """Raised when a value has no JSON text that parses back to it.

    Common causes:
    - Non-finite Float (inf, nan)
    - UnsignedInt below zero or SignedInt above zero
    - Lone surrogate code points in a String
    - Integers longer than the interpreter allows in decimal text
    """


_ESCAPES: dict[str, str] = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


class JsonSerializer:
    """Converts JSON values to compact JSON text.

    Thread-safe serializer with no mutable instance state.
    All serialization state is local to the serialize() call.

    Usage:
        >>> serializer = JsonSerializer()
        >>> serializer.serialize(Array((UnsignedInt(1), Null())))
        '[1,null]'
    """

    __slots__ = ("_max_depth",)

    def __init__(self, *, max_depth: int | None = None) -> None:
        depth = resolve_limit(max_depth, MAX_JSON_DEPTH)
        if depth < 1:
            msg = f"max_depth must be >= 1, got {depth}"
            raise ValueError(msg)
        self._max_depth = depth

    def serialize(self, value: JsonValue) -> str:
        """Serialize value to JSON text.

        Raises:
            SerializationValidationError: value has no faithful JSON text
            InputLimitExceededError: Containers nested deeper than max_depth
        """
        output: list[str] = []
        self._serialize_value(value, output, DepthGuard(max_depth=self._max_depth))
        return "".join(output)

    def _serialize_value(self, value: JsonValue, output: list[str], guard: DepthGuard) -> None:
        match value:
            case Null():
                output.append("null")
            case Bool(flag):
                output.append("true" if flag else "false")
            case UnsignedInt(number):
                if number < 0:
                    msg = f"UnsignedInt cannot be negative, got {self._digits(number)}"
                    raise SerializationValidationError(msg)
                output.append(self._digits(number))
            case SignedInt(number):
                if number > 0:
                    msg = f"SignedInt must be <= 0, got {self._digits(number)}"
                    raise SerializationValidationError(msg)
                # -0 must keep its sign to parse back as SignedInt
                output.append("-" + self._digits(-number))
            case Float(number):
                self._serialize_float(number, output)
            case String(text):
                self._serialize_string(text, output)
            case Array(items):
                with guard:
                    output.append("[")
                    for i, item in enumerate(items):
                        if i > 0:
                            output.append(",")
                        self._serialize_value(item, output, guard)
                    output.append("]")
            case Object(members):
                with guard:
                    output.append("{")
                    for i, (key, member) in enumerate(members.items()):
                        if i > 0:
                            output.append(",")
                        self._serialize_string(key, output)
                        output.append(":")
                        self._serialize_value(member, output, guard)
                    output.append("}")
            case _:
                msg = f"Not a JSON value: {value!r}"
                raise SerializationValidationError(msg)

    @staticmethod
    def _digits(number: int) -> str:
        """Decimal text of number, within the interpreter's int-to-str limit."""
        try:
            return str(number)
        except ValueError as e:
            msg = f"Integer too large to write as JSON text: {e}"
            raise SerializationValidationError(msg) from e

    def _serialize_float(self, number: float, output: list[str]) -> None:
        """Serialize a float so that it parses back as Float."""
        if not math.isfinite(number):
            msg = f"Float must be finite, got {number!r}"
            raise SerializationValidationError(msg)
        # repr() always carries a fraction or an exponent ("1.0", "1e+16").
        output.append(repr(number))

    def _serialize_string(self, text: str, output: list[str]) -> None:
        """Serialize text as a quoted JSON string."""
        output.append('"')
        for char in text:
            code = ord(char)
            if char in _ESCAPES:
                output.append(_ESCAPES[char])
            elif code < 0x20:
                output.append(f"\\u{code:04x}")
            elif 0xD800 <= code <= 0xDFFF:
                msg = f"Lone surrogate U+{code:04X} cannot be serialized"
                raise SerializationValidationError(msg)
            else:
                output.append(char)
        output.append('"')


def serialize_json(value: JsonValue, *, max_depth: int | None = None) -> str:
    """Serialize a JSON value to compact JSON text.

    Convenience function for JsonSerializer.serialize().

    Args:
        value: Value to serialize
        max_depth: Maximum container nesting (default: MAX_JSON_DEPTH)

    Returns:
        JSON text

    Raises:
        SerializationValidationError: value has no faithful JSON text
        InputLimitExceededError: Containers nested deeper than max_depth

    Example:
        >>> serialize_json(Object({"a": Array((UnsignedInt(1), SignedInt(-2)))}))
        '{"a":[1,-2]}'
    """
    return JsonSerializer(max_depth=max_depth).serialize(value)
