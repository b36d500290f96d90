"""Tests for cursor infrastructure.

Validates the immutable cursor pattern over str and bytes input.
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from streamcomb.diagnostics import SourceSpan
from streamcomb.syntax import Cursor

# ============================================================================
# CURSOR BASIC TESTS
# ============================================================================


class TestCursorBasic:
    """Test basic cursor functionality."""

    def test_create_cursor(self) -> None:
        """Create cursor at position 0."""
        cursor = Cursor("hello", 0)

        assert cursor.source == "hello"
        assert cursor.pos == 0
        assert not cursor.is_eof
        assert not cursor.is_final

    def test_streaming_constructor(self) -> None:
        """Cursor.streaming() starts at 0 and may still grow."""
        cursor = Cursor.streaming(b"GET")

        assert cursor.pos == 0
        assert not cursor.is_final

    def test_complete_constructor(self) -> None:
        """Cursor.complete() starts at 0 and is final."""
        cursor = Cursor.complete("GET")

        assert cursor.pos == 0
        assert cursor.is_final

    def test_cursor_immutability(self) -> None:
        """Cursor is immutable (frozen dataclass)."""
        cursor = Cursor("hello", 0)

        with pytest.raises(AttributeError):
            cursor.pos = 5  # type: ignore[misc]


# ============================================================================
# ELEMENT ACCESS
# ============================================================================


class TestCursorCurrent:
    """Test current element access for str and bytes."""

    def test_current_str_is_one_char(self) -> None:
        """str input yields a one-character str."""
        assert Cursor("hello", 1).current == "e"

    def test_current_bytes_is_one_byte_slice(self) -> None:
        """bytes input yields a length-1 bytes, not an int."""
        current = Cursor(b"hello", 1).current

        assert current == b"e"
        assert isinstance(current, bytes)

    def test_current_raises_eof_error_at_end(self) -> None:
        """Accessing current at EOF raises EOFError."""
        with pytest.raises(EOFError, match="Unexpected EOF"):
            _ = Cursor("hello", 5).current

    def test_peek_with_offset(self) -> None:
        """peek() looks ahead without advancing."""
        cursor = Cursor("hello", 0)

        assert cursor.peek() == "h"
        assert cursor.peek(4) == "o"
        assert cursor.peek(5) is None
        assert cursor.pos == 0


# ============================================================================
# NAVIGATION
# ============================================================================


class TestCursorAdvance:
    """Test advance and slicing."""

    def test_advance_returns_new_cursor(self) -> None:
        """advance() leaves the original cursor untouched."""
        cursor = Cursor("hello", 0)
        advanced = cursor.advance(2)

        assert cursor.pos == 0
        assert advanced.pos == 2

    def test_advance_shares_source(self) -> None:
        """Remainders share the same source object (zero-copy)."""
        source = b"GET / HTTP/1.1"
        cursor = Cursor.streaming(source)

        assert cursor.advance(4).source is source

    def test_advance_keeps_final_flag(self) -> None:
        """Streaming and complete cursors keep their kind when advancing."""
        assert Cursor.complete("abc").advance().is_final
        assert not Cursor.streaming("abc").advance().is_final

    def test_advance_clamps_at_end(self) -> None:
        """advance() never moves past the end of the source."""
        assert Cursor("abc", 2).advance(10).pos == 3

    def test_slice_to_and_ahead(self) -> None:
        """slice_to() and slice_ahead() extract without advancing."""
        cursor = Cursor("hello world", 0)

        assert cursor.slice_to(5) == "hello"
        assert cursor.slice_ahead(3) == "hel"
        assert cursor.slice_ahead(50) == "hello world"

    def test_rest_and_remaining(self) -> None:
        """rest materializes the suffix; remaining counts it."""
        cursor = Cursor(b"abcdef", 4)

        assert cursor.rest == b"ef"
        assert cursor.remaining == 2

    def test_empty_matches_source_type(self) -> None:
        """empty is "" for str sources and b"" for bytes sources."""
        assert Cursor("x", 0).empty == ""
        assert Cursor(b"x", 0).empty == b""


# ============================================================================
# LOCATION
# ============================================================================


class TestCursorLocation:
    """Test line/column computation and spans."""

    def test_line_col_first_line(self) -> None:
        """Line and column are 1-indexed."""
        assert Cursor("hello", 0).compute_line_col() == (1, 1)
        assert Cursor("hello", 3).compute_line_col() == (1, 4)

    def test_line_col_after_crlf(self) -> None:
        """Lines are counted by LF, so CRLF input works too."""
        assert Cursor(b"GET /\r\nHost: x", 9).compute_line_col() == (2, 3)

    def test_to_span_is_zero_width(self) -> None:
        """to_span() is a zero-width span at the cursor."""
        span = Cursor("ab\ncd", 4).to_span()

        assert span == SourceSpan(start=4, end=4, line=2, column=2)


# ============================================================================
# PROPERTIES
# ============================================================================


class TestCursorProperties:
    """Property-based tests for cursor navigation."""

    @given(source=st.text(max_size=100), count=st.integers(min_value=0, max_value=120))
    def test_advance_then_rest_strips_prefix(self, source: str, count: int) -> None:
        """PROPERTY: advance(n).rest == source[n:]."""
        assert Cursor(source, 0).advance(count).rest == source[count:]

    @given(source=st.binary(min_size=1, max_size=100), data=st.data())
    def test_current_is_slice(self, source: bytes, data: st.DataObject) -> None:
        """PROPERTY: current equals the length-1 slice at pos."""
        pos = data.draw(st.integers(min_value=0, max_value=len(source) - 1), label="pos")

        assert Cursor(source, pos).current == source[pos : pos + 1]
