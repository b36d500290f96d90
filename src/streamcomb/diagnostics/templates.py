"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This keeps messages testable, consistent, and documents every error case.
    """

    @staticmethod
    def parse_rejected(reason: str, span: SourceSpan | None = None) -> Diagnostic:
        """No alternative matched the input.

        Args:
            reason: Reason string of the Rejected outcome
            span: Location of the attempt, if known

        Returns:
            Diagnostic for PARSE_REJECTED
        """
        return Diagnostic(
            code=DiagnosticCode.PARSE_REJECTED,
            message="Input does not match the expected grammar",
            span=span,
            reason=reason,
        )

    @staticmethod
    def parse_fatal(reason: str, span: SourceSpan | None = None) -> Diagnostic:
        """Input is malformed past a committed point.

        Args:
            reason: Reason string of the Fatal outcome
            span: Location of the attempt, if known

        Returns:
            Diagnostic for PARSE_FATAL
        """
        return Diagnostic(
            code=DiagnosticCode.PARSE_FATAL,
            message="Input is malformed",
            span=span,
            reason=reason,
        )

    @staticmethod
    def incomplete_input(consumed: int, span: SourceSpan | None = None) -> Diagnostic:
        """Input ended before the parser could decide.

        Args:
            consumed: Number of elements available when input ended
            span: End of the input, if known

        Returns:
            Diagnostic for INCOMPLETE_INPUT
        """
        msg = f"Input ended after {consumed} element(s) before it could be parsed"
        return Diagnostic(
            code=DiagnosticCode.INCOMPLETE_INPUT,
            message=msg,
            span=span,
            hint="The sender closed or paused the stream mid-message",
        )

    @staticmethod
    def trailing_input(span: SourceSpan) -> Diagnostic:
        """Parser matched but left unconsumed input behind.

        Args:
            span: Location of the first unconsumed element

        Returns:
            Diagnostic for TRAILING_INPUT
        """
        msg = f"Unexpected trailing input at offset {span.start}"
        return Diagnostic(
            code=DiagnosticCode.TRAILING_INPUT,
            message=msg,
            span=span,
        )

    @staticmethod
    def source_read_failed(error: OSError) -> Diagnostic:
        """Byte source raised while reading.

        Args:
            error: The error raised by the source

        Returns:
            Diagnostic for SOURCE_READ_FAILED
        """
        msg = f"Reading from the byte source failed: {error}"
        return Diagnostic(
            code=DiagnosticCode.SOURCE_READ_FAILED,
            message=msg,
        )

    @staticmethod
    def buffer_limit_exceeded(size: int, limit: int) -> Diagnostic:
        """Accumulator grew past the configured limit.

        Args:
            size: Accumulated size in bytes
            limit: Configured maximum

        Returns:
            Diagnostic for BUFFER_LIMIT_EXCEEDED
        """
        msg = f"Accumulated input ({size:,} bytes) exceeds maximum ({limit:,} bytes)"
        return Diagnostic(
            code=DiagnosticCode.BUFFER_LIMIT_EXCEEDED,
            message=msg,
            hint="Configure max_buffer_size to increase the limit",
        )

    @staticmethod
    def source_size_exceeded(size: int, limit: int) -> Diagnostic:
        """Complete input is larger than the configured limit.

        Args:
            size: Input size in elements
            limit: Configured maximum

        Returns:
            Diagnostic for SOURCE_SIZE_EXCEEDED
        """
        msg = f"Source size ({size:,}) exceeds maximum ({limit:,})"
        return Diagnostic(
            code=DiagnosticCode.SOURCE_SIZE_EXCEEDED,
            message=msg,
            hint="Configure max_source_size to increase the limit",
        )

    @staticmethod
    def malformed_request_line(reason: str) -> Diagnostic:
        """HTTP title line could not be parsed.

        Args:
            reason: Reason string of the failing outcome

        Returns:
            Diagnostic for MALFORMED_REQUEST_LINE
        """
        return Diagnostic(
            code=DiagnosticCode.MALFORMED_REQUEST_LINE,
            message="The HTTP title line could not be parsed",
            reason=reason,
            hint="Expected 'METHOD SP TARGET SP HTTP/VERSION CRLF'",
        )

    @staticmethod
    def malformed_header(reason: str) -> Diagnostic:
        """A header line could not be parsed.

        Args:
            reason: Reason string of the failing outcome

        Returns:
            Diagnostic for MALFORMED_HEADER
        """
        return Diagnostic(
            code=DiagnosticCode.MALFORMED_HEADER,
            message="Could not parse a header line",
            reason=reason,
            hint="Headers must look like 'Name: value' followed by CRLF",
        )

    @staticmethod
    def duplicate_header(name: str) -> Diagnostic:
        """Header name appears twice.

        Args:
            name: The lower-cased header name

        Returns:
            Diagnostic for DUPLICATE_HEADER
        """
        msg = f"Header '{name}' appears more than once"
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_HEADER,
            message=msg,
            hint="Send each header name at most once",
        )

    @staticmethod
    def missing_divider(reason: str) -> Diagnostic:
        """The CRLF between head and body is missing.

        Args:
            reason: Reason string of the failing outcome

        Returns:
            Diagnostic for MISSING_DIVIDER
        """
        return Diagnostic(
            code=DiagnosticCode.MISSING_DIVIDER,
            message="Could not read the header/body divider (last CRLF)",
            reason=reason,
        )

    @staticmethod
    def header_limit_exceeded(limit: int) -> Diagnostic:
        """Request head carries too many headers.

        Args:
            limit: Configured maximum header count

        Returns:
            Diagnostic for HEADER_LIMIT_EXCEEDED
        """
        msg = f"Request head has more than {limit} headers"
        return Diagnostic(
            code=DiagnosticCode.HEADER_LIMIT_EXCEEDED,
            message=msg,
            hint="Configure max_headers to increase the limit",
        )

    @staticmethod
    def json_invalid(reason: str, span: SourceSpan | None = None) -> Diagnostic:
        """JSON text could not be parsed.

        Args:
            reason: Reason string of the failing outcome
            span: Location of the failure, if known

        Returns:
            Diagnostic for JSON_INVALID
        """
        return Diagnostic(
            code=DiagnosticCode.JSON_INVALID,
            message="Invalid JSON text",
            span=span,
            reason=reason,
        )

    @staticmethod
    def json_depth_exceeded(
        max_depth: int, reason: str | None = None, span: SourceSpan | None = None
    ) -> Diagnostic:
        """JSON text or a value tree nested deeper than allowed.

        Args:
            max_depth: Configured maximum nesting depth
            reason: Reason string of the Fatal outcome, when parsing
            span: Location of the failure, if known

        Returns:
            Diagnostic for JSON_DEPTH_EXCEEDED
        """
        return Diagnostic(
            code=DiagnosticCode.JSON_DEPTH_EXCEEDED,
            message=f"JSON nesting exceeds maximum depth of {max_depth}",
            span=span,
            reason=reason,
            hint="Flatten the value or raise max_depth",
        )

    @staticmethod
    def uri_invalid(reason: str, span: SourceSpan | None = None) -> Diagnostic:
        """URI or request target could not be parsed.

        Args:
            reason: Reason string of the failing outcome
            span: Location of the failure, if known

        Returns:
            Diagnostic for URI_INVALID
        """
        return Diagnostic(
            code=DiagnosticCode.URI_INVALID,
            message="Invalid URI",
            span=span,
            reason=reason,
        )

    @staticmethod
    def percent_decoding_failed(reason: str) -> Diagnostic:
        """Percent-encoded component is malformed.

        Args:
            reason: Reason string of the failing outcome

        Returns:
            Diagnostic for PERCENT_DECODING_FAILED
        """
        return Diagnostic(
            code=DiagnosticCode.PERCENT_DECODING_FAILED,
            message="Could not percent-decode component",
            reason=reason,
            hint="Use %XX hex pairs that form valid UTF-8",
        )
