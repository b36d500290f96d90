"""Immutable cursor infrastructure for zero-copy parsing.

Implements the immutable cursor pattern over str or bytes input.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - A cursor is a view: the backing source is shared, never copied
    - Every remainder is a cursor over the SAME source at a later offset
    - EOF is a state (is_eof), not a return value
    - Every advance() returns NEW cursor (prevents infinite loops)
    - Line:column computed on-demand (O(n) only for errors)

Streaming vs Complete Input:
    A cursor records whether its source may still grow. A streaming cursor
    (final=False) is a snapshot of a buffer that a driver keeps appending to,
    so running out of data means "not decided yet". A complete cursor
    (final=True) is the whole input, so running out of data is a decision.
    Primitive matchers consult is_final at end of input; combinators never do.

Element Access:
    current and peek() return a length-1 slice, so for str input they return
    a one-character str and for bytes input a one-byte bytes. Character-set
    membership ("a" in "abc", b"a" in b"abc") then works identically for both.

Pattern Reference:
    - Rust nom parser combinator library (streaming vs complete)
    - Haskell Parsec
"""

from dataclasses import dataclass

from streamcomb.diagnostics import SourceSpan

__all__ = ["Cursor"]


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable input position tracker.

    Key Design Decisions:
        1. Frozen dataclass - Immutability enforced by Python
        2. Slots - Memory efficiency (one cursor per combinator step)
        3. Simple position - Just an integer offset into a shared source
        4. EOF is a property - Not a return value
        5. final flag - Distinguishes "no more data yet" from "no more data"

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> cursor.current
        'h'
        >>> new_cursor = cursor.advance()
        >>> new_cursor.current
        'e'
        >>> new_cursor.source is cursor.source  # Shared, not copied
        True
        >>> Cursor(b"GET", 0).current
        b'G'
    """

    source: str | bytes
    pos: int
    final: bool = False

    @classmethod
    def streaming(cls, source: str | bytes) -> "Cursor":
        """Cursor at the start of input that may still grow."""
        return cls(source, 0, final=False)

    @classmethod
    def complete(cls, source: str | bytes) -> "Cursor":
        """Cursor at the start of input known to be complete."""
        return cls(source, 0, final=True)

    @property
    def is_eof(self) -> bool:
        """Check if at end of the available input.

        Returns:
            True if position >= source length
        """
        return self.pos >= len(self.source)

    @property
    def is_final(self) -> bool:
        """Check if the available input is all the input there will be."""
        return self.final

    @property
    def current(self) -> str | bytes:
        """Get current element as a length-1 slice.

        Returns:
            One-character str or one-byte bytes at position

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            msg = f"Unexpected EOF at position {self.pos}"
            raise EOFError(msg)
        return self.source[self.pos : self.pos + 1]

    def peek(self, offset: int = 0) -> str | bytes | None:
        """Peek at element with offset without advancing.

        Args:
            offset: Offset from current position (0 = current, 1 = next)

        Returns:
            Length-1 slice at position + offset, or None if beyond EOF
        """
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos : target_pos + 1]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions.

        Args:
            count: Number of positions to advance (default: 1)

        Returns:
            New Cursor over the same source (original unchanged)

        Example:
            >>> cursor = Cursor("hello", 0)
            >>> cursor2 = cursor.advance(2)
            >>> cursor.pos, cursor2.pos
            (0, 2)
        """
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos, self.final)

    def slice_to(self, end_pos: int) -> str | bytes:
        """Extract source slice from current position to end_pos.

        Usage:
            Extract matched text after scanning ahead with a second cursor:

            >>> start = Cursor("hello world", 0)
            >>> cursor = start
            >>> while not cursor.is_eof and cursor.current != " ":
            ...     cursor = cursor.advance()
            >>> start.slice_to(cursor.pos)
            'hello'
        """
        return self.source[self.pos : end_pos]

    def slice_ahead(self, n: int) -> str | bytes:
        """Get next n elements without advancing cursor.

        May return fewer elements if near EOF.

        Example:
            >>> Cursor("hello", 0).slice_ahead(3)
            'hel'
            >>> Cursor("hello", 0).slice_ahead(10)
            'hello'
        """
        return self.source[self.pos : self.pos + n]

    @property
    def remaining(self) -> int:
        """Number of elements between position and end of input."""
        return max(0, len(self.source) - self.pos)

    @property
    def rest(self) -> str | bytes:
        """Materialize the unconsumed suffix.

        Note:
            This is a copy. Use it at API boundaries (driver phase
            boundaries, tests), never inside a parser.
        """
        return self.source[self.pos :]

    @property
    def empty(self) -> str | bytes:
        """Empty value of the source's type ("" or b"")."""
        return self.source[:0]

    def count_newlines_before(self) -> int:
        """Count newlines before current position without substring copy."""
        newline = "\n" if isinstance(self.source, str) else b"\n"
        return self.source.count(newline, 0, self.pos)  # type: ignore[arg-type]

    def compute_line_col(self) -> tuple[int, int]:
        """Compute line and column for current position.

        Returns:
            (line, column) tuple (1-indexed, like text editors)

        Performance:
            O(n) where n = current position
            Only call for error reporting, not during normal parsing!

        Example:
            >>> Cursor("GET /\\r\\nHost: x", 9).compute_line_col()
            (2, 3)
        """
        newline = "\n" if isinstance(self.source, str) else b"\n"
        line = self.count_newlines_before() + 1
        last_newline = self.source.rfind(newline, 0, self.pos)  # type: ignore[arg-type]
        col = self.pos - last_newline if last_newline >= 0 else self.pos + 1
        return (line, col)

    def to_span(self) -> SourceSpan:
        """Zero-width SourceSpan at the current position."""
        pos = min(self.pos, len(self.source))
        line, col = Cursor(self.source, pos).compute_line_col()
        return SourceSpan(start=pos, end=pos, line=line, column=col)
