"""Streaming driver: run a parser against a chunked byte source.

The driver owns one accumulator per phase. Each attempt parses the whole
accumulated buffer from the start through a streaming Cursor, so a parser
never needs resumable state: Truncated simply means "read more and try
again". Byte sources only append, so a Rejected or Fatal outcome can never
be fixed by more data and ends the phase immediately.

Phases:
    run() parses one phase and returns its value plus the unconsumed bytes.
    Passing those bytes as the next phase's leftover re-anchors the next
    accumulator. Copying the leftover is the only place data is copied
    between phases; within a phase every remainder is a view into the
    attempt's snapshot.

Thread Safety:
    A StreamDriver belongs to one session (one source). Parsers passed to
    run() are immutable and may be shared across drivers.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from streamcomb.constants import DEFAULT_READ_SIZE, MAX_BUFFER_SIZE
from streamcomb.core import resolve_limit
from streamcomb.diagnostics import (
    ErrorTemplate,
    IncompleteInputError,
    InputLimitExceededError,
    ParseFailure,
    SourceReadError,
)
from streamcomb.syntax import Cursor, Fatal, Matched, Rejected, Truncated

if TYPE_CHECKING:
    from streamcomb.syntax.core import FailureTemplate
    from streamcomb.syntax.outcome import Parser

    from .sources import ByteSource

__all__ = ["PhaseResult", "StreamDriver"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PhaseResult[O]:
    """Result of one driver phase.

    Attributes:
        value: Value produced by the phase's parser
        leftover: Bytes after the match; the start of the next phase
    """

    value: O
    leftover: bytes


class StreamDriver:
    """Feed a parser from a byte source delivering arbitrary-sized chunks.

    Algorithm (per run()):
        1. Start the accumulator from leftover; if it is non-empty, attempt
           a parse before reading so already-delivered data never waits on
           the source
        2. Read one chunk of at most read_size bytes and append it
        3. Parse the whole accumulator with a streaming Cursor
        4. Matched: return value and leftover
        5. Truncated: read again, unless the last read was short (the source
           had no more data), which raises IncompleteInputError
        6. Rejected/Fatal: raise ParseFailure without reading further
        7. OSError from the source: raise SourceReadError

    max_buffer_size applies to what a phase consumes as well as to what it
    reads, so a leftover handed in by the caller meets the same limit as
    data read from the source.

    Example:
        >>> import io
        >>> from streamcomb.syntax import literal
        >>> driver = StreamDriver(io.BytesIO(b"GET /"), read_size=1)
        >>> result = driver.run(literal(b"GET"))
        >>> result.value, result.leftover
        (b'GET', b'')
    """

    __slots__ = ("_max_buffer_size", "_read_size", "_source")

    def __init__(
        self,
        source: ByteSource,
        *,
        read_size: int | None = None,
        max_buffer_size: int | None = None,
    ) -> None:
        """Initialize driver.

        Args:
            source: Byte source, exclusively owned by this driver while it runs
            read_size: Bytes requested per read (default: DEFAULT_READ_SIZE)
            max_buffer_size: Accumulator limit per phase
                (default: MAX_BUFFER_SIZE, 0 disables the limit)

        Raises:
            ValueError: If read_size is not positive or max_buffer_size is negative
        """
        resolved_read_size = resolve_limit(read_size, DEFAULT_READ_SIZE)
        if resolved_read_size == 0:
            msg = "read_size must be positive"
            raise ValueError(msg)
        self._source = source
        self._read_size = resolved_read_size
        self._max_buffer_size = resolve_limit(max_buffer_size, MAX_BUFFER_SIZE)

    @property
    def read_size(self) -> int:
        """Bytes requested per read."""
        return self._read_size

    @property
    def max_buffer_size(self) -> int:
        """Accumulator limit per phase (0 when disabled)."""
        return self._max_buffer_size

    def run[O](
        self,
        parser: Parser[O],
        leftover: bytes = b"",
        *,
        template: FailureTemplate | None = None,
    ) -> PhaseResult[O]:
        """Run one phase.

        Args:
            parser: Parser over bytes
            leftover: Unconsumed bytes from the previous phase
            template: Diagnostic builder for Rejected/Fatal reasons

        Returns:
            PhaseResult with the parsed value and the unconsumed bytes

        Raises:
            ParseFailure: Parser rejected or failed fatally
            IncompleteInputError: Source ran dry while the parser was Truncated
            SourceReadError: Source raised OSError
            InputLimitExceededError: Accumulator exceeded max_buffer_size
        """
        buffer = bytearray(leftover)
        exhausted = False
        attempts = 0
        if not buffer:
            exhausted = self._fill(buffer)

        while True:
            attempts += 1
            snapshot = bytes(buffer)
            outcome = parser(Cursor.streaming(snapshot))
            logger.debug(
                "Attempt %d over %d buffered bytes: %s", attempts, len(snapshot), outcome.kind
            )

            match outcome:
                case Matched(value, remainder):
                    self._check_size(len(snapshot) - remainder.remaining)
                    return PhaseResult(value, remainder.rest)  # type: ignore[arg-type]
                case Truncated():
                    self._check_size(len(snapshot))
                    if exhausted:
                        logger.warning(
                            "Source exhausted after %d bytes with input incomplete",
                            len(snapshot),
                        )
                        raise IncompleteInputError(
                            ErrorTemplate.incomplete_input(len(snapshot)),
                            reason="input ended before it could be parsed",
                        )
                    exhausted = self._fill(buffer)
                case Rejected(reason):
                    logger.warning("Parse rejected: %s", reason)
                    build = template or ErrorTemplate.parse_rejected
                    raise ParseFailure(build(reason, None), reason=reason)
                case Fatal(reason):
                    logger.warning("Parse failed: %s", reason)
                    build = template or ErrorTemplate.parse_fatal
                    raise ParseFailure(build(reason, None), reason=reason, fatal=True)

    def _fill(self, buffer: bytearray) -> bool:
        """Append one chunk to buffer; return True if the read was short."""
        try:
            chunk = self._source.read(self._read_size)
        except OSError as e:
            logger.warning("Byte source read failed: %s", e)
            raise SourceReadError(ErrorTemplate.source_read_failed(e)) from e

        buffer += chunk
        logger.debug("Read %d bytes (buffer now %d)", len(chunk), len(buffer))

        self._check_size(len(buffer))
        return len(chunk) < self._read_size

    def _check_size(self, size: int) -> None:
        if self._max_buffer_size and size > self._max_buffer_size:
            raise InputLimitExceededError(
                ErrorTemplate.buffer_limit_exceeded(size, self._max_buffer_size),
                limit=self._max_buffer_size,
            )
