"""Complete-input runner.

parse_all() is the boundary between the outcome world of the engine and
the exception world of callers: it runs a parser over a fully buffered
str/bytes source and turns every non-Matched outcome into a typed error.
"""

import logging
from collections.abc import Callable

from streamcomb.constants import MAX_SOURCE_SIZE
from streamcomb.core import check_source_size, resolve_limit
from streamcomb.diagnostics import (
    Diagnostic,
    ErrorTemplate,
    IncompleteInputError,
    ParseFailure,
    SourceSpan,
)

from .cursor import Cursor
from .outcome import Fatal, Matched, Parser, Rejected, Truncated

__all__ = ["parse_all"]

logger = logging.getLogger(__name__)

type FailureTemplate = Callable[[str, SourceSpan | None], Diagnostic]


def parse_all[O](
    parser: Parser[O],
    source: str | bytes,
    *,
    require_end: bool = True,
    max_source_size: int | None = None,
    template: FailureTemplate | None = None,
) -> O:
    """Parse a complete source and return the matched value.

    Args:
        parser: Parser to run
        source: Complete input (no more will follow)
        require_end: Raise if the parser leaves input unconsumed
        max_source_size: Size guard (None: MAX_SOURCE_SIZE, 0: disabled)
        template: Diagnostic builder for Rejected/Fatal reasons
            (default: ErrorTemplate.parse_rejected / parse_fatal)

    Returns:
        The parsed value

    Raises:
        ParseFailure: Rejected or Fatal outcome, or trailing input
        IncompleteInputError: Parser still Truncated at the end of input
        InputLimitExceededError: Source larger than max_source_size
    """
    check_source_size(len(source), resolve_limit(max_source_size, MAX_SOURCE_SIZE))

    match parser(Cursor.complete(source)):
        case Matched(value, remainder):
            if require_end and not remainder.is_eof:
                diagnostic = ErrorTemplate.trailing_input(remainder.to_span())
                raise ParseFailure(diagnostic, reason=diagnostic.message)
            return value
        case Rejected(reason):
            logger.debug("Parse rejected: %s", reason)
            build = template or ErrorTemplate.parse_rejected
            raise ParseFailure(build(reason, None), reason=reason)
        case Fatal(reason):
            logger.debug("Parse failed: %s", reason)
            build = template or ErrorTemplate.parse_fatal
            raise ParseFailure(build(reason, None), reason=reason, fatal=True)
        case Truncated():
            end = Cursor(source, len(source)).to_span()
            raise IncompleteInputError(
                ErrorTemplate.incomplete_input(len(source), end), reason="incomplete input"
            )
    msg = "Parser returned a non-outcome value"  # pragma: no cover
    raise TypeError(msg)  # pragma: no cover
