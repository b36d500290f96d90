"""Character classes shared by the grammars.

Constants are str; grammars over bytes encode them once at construction
(see the HTTP and JSON grammars). Predicates take the length-1 slice a
Cursor yields, so they accept both a 1-char str and a 1-byte bytes.

References:
    RFC 3986 Section 2 (URI characters)
    RFC 3987 Section 2.2 (ucschar ranges)
    RFC 8259 Section 2 (JSON whitespace)
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

__all__ = [
    # Sets
    "HEX_DIGITS",
    "CONTROL",
    "URL_UNRESERVED",
    "SUB_DELIMS",
    "SCHEME_EXTRA",
    "URL_ILLEGAL",
    "JSON_WHITESPACE",
    # Predicates
    "is_digit",
    "is_hex_digit",
    "is_ucschar",
    "is_unreserved",
    "is_url_terminative",
]

# ============================================================================
# CHARACTER SETS
# ============================================================================

HEX_DIGITS: str = "0123456789abcdefABCDEF"

# C0 controls U+0000..U+001F.
CONTROL: str = "".join(chr(code) for code in range(0x20))

URL_UNRESERVED: str = "-._~"

SUB_DELIMS: str = "!$&'()*+,;="

# Characters allowed in a scheme after the leading letter, besides alphanumerics.
SCHEME_EXTRA: str = "+-."

# Never valid in a URI; a request target ends at the first of these.
URL_ILLEGAL: str = ' "<>\\^`{|}'

JSON_WHITESPACE: str = " \t\n\r"

# RFC 3987 ucschar ranges (inclusive).
_UCSCHAR_RANGES: tuple[tuple[int, int], ...] = (
    (0xA0, 0xD7FF),
    (0xF900, 0xFDCF),
    (0xFDF0, 0xFFEF),
    (0x10000, 0x1FFFD),
    (0x20000, 0x2FFFD),
    (0x30000, 0x3FFFD),
    (0x40000, 0x4FFFD),
    (0x50000, 0x5FFFD),
    (0x60000, 0x6FFFD),
    (0x70000, 0x7FFFD),
    (0x80000, 0x8FFFD),
    (0x90000, 0x9FFFD),
    (0xA0000, 0xAFFFD),
    (0xB0000, 0xBFFFD),
    (0xC0000, 0xCFFFD),
    (0xD0000, 0xDFFFD),
    (0xE1000, 0xEFFFD),
)

# ============================================================================
# PREDICATES
# ============================================================================


def _code(element: str | bytes) -> int:
    return element[0] if isinstance(element, bytes) else ord(element)


def is_digit(element: str | bytes) -> bool:
    """ASCII digit 0-9 (str.isdigit() also accepts superscripts)."""
    return 0x30 <= _code(element) <= 0x39


def is_hex_digit(element: str | bytes) -> bool:
    """ASCII hexadecimal digit."""
    return _code(element) < 0x80 and chr(_code(element)) in HEX_DIGITS


def is_ucschar(element: str | bytes) -> bool:
    """Non-ASCII character allowed unencoded in an IRI."""
    code = _code(element)
    return any(low <= code <= high for low, high in _UCSCHAR_RANGES)


def is_unreserved(element: str | bytes) -> bool:
    """RFC 3986 unreserved character, extended with ucschar."""
    code = _code(element)
    if code < 0x80:
        char = chr(code)
        return char.isalnum() or char in URL_UNRESERVED
    return is_ucschar(element)


def is_url_terminative(element: str | bytes) -> bool:
    """Character that can never be part of a URI: illegal ASCII or a control."""
    code = _code(element)
    return code < 0x20 or code == 0x7F or (code < 0x80 and chr(code) in URL_ILLEGAL)
