# src/dynamodb_etl/contracts/errors.py
"""Error taxonomy for the recoding pipeline.

Every failure the pipeline can see is a RecodeError subclass. Each kind
carries a fixed fatal flag, except LineError which inherits the flag of the
error it wraps:

    Kind                 Fatal   Meaning
    QueryCompileError    yes     path expression is not a valid query
    Base64Error          no      binary field is not valid base64
    GzipError            no      decoded bytes are not valid gzip data
    QueryParseError      no      record or value is not valid JSON
    QueryRuntimeError    yes     query engine failed for another reason
    InvalidDataError     no      input line is not valid UTF-8
    StreamError          yes     reading or writing a stream failed
    LineError            inner   any of the above, tagged with a line number

Errors caused by bad input data are non-fatal: the line is reported and
skipped. Errors caused by misconfiguration or engine/stream failure are
fatal: the run aborts.

The underlying library exception is attached as ``__cause__`` so that
error_chain() can render the full chain for diagnostics.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import ClassVar

from dynamodb_etl.contracts.enums import ErrorKind


class RecodeError(Exception):
    """Base error for the recoding pipeline."""

    kind: ClassVar[ErrorKind]
    fatal: ClassVar[bool] = True

    @property
    def is_fatal(self) -> bool:
        """Whether this error must abort the run."""
        return self.fatal


class QueryCompileError(RecodeError):
    """Path expression does not compile."""

    kind = ErrorKind.QUERY_COMPILE
    fatal = True

    def __init__(self, when: str, detail: str = "") -> None:
        self.when = when
        self.detail = detail
        super().__init__(f"Invalid jq program {when}")


class Base64Error(RecodeError):
    """Binary field is not valid base64."""

    kind = ErrorKind.BASE64
    fatal = False

    def __init__(self) -> None:
        super().__init__("binary data is not valid base64 encoding")


class GzipError(RecodeError):
    """Decoded binary field is not valid gzip data."""

    kind = ErrorKind.GZIP
    fatal = False

    def __init__(self, message: str = "binary data is not valid gzip compression") -> None:
        super().__init__(message)


class QueryParseError(RecodeError):
    """Record or value handed to the query engine is not valid JSON."""

    kind = ErrorKind.QUERY_PARSE
    fatal = False

    def __init__(self, when: str, detail: str) -> None:
        self.when = when
        self.detail = detail
        super().__init__(f"Error {when}: data is not valid json; {detail}")


class QueryRuntimeError(RecodeError):
    """Query engine failed for a reason other than bad JSON."""

    kind = ErrorKind.QUERY_RUNTIME
    fatal = True

    def __init__(self, when: str, detail: str) -> None:
        self.when = when
        self.detail = detail
        super().__init__(f"jq error {when}: {detail}")


class InvalidDataError(RecodeError):
    """Input line holds a malformed byte sequence."""

    kind = ErrorKind.INVALID_DATA
    fatal = False

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding
        super().__init__(f"stream did not contain valid {encoding}")


class StreamError(RecodeError):
    """Unexpected failure reading or writing a stream."""

    kind = ErrorKind.STREAM
    fatal = True

    def __init__(self, message: str) -> None:
        super().__init__(message)


class LineError(RecodeError):
    """Wraps an error with the 1-based number of the line that caused it."""

    kind = ErrorKind.LINE

    def __init__(self, line_number: int, inner: BaseException) -> None:
        self.line_number = line_number
        self.inner = inner
        super().__init__(f"Error processing record number {line_number}")
        self.__cause__ = inner

    @property
    def is_fatal(self) -> bool:
        return is_fatal(self.inner)


def is_fatal(error: BaseException) -> bool:
    """Classify an error as fatal (abort the run) or non-fatal (skip the line).

    This is the single classification point. Taxonomy errors answer for
    themselves. A UnicodeDecodeError is malformed input and therefore not
    fatal; every other foreign exception is.
    """
    if isinstance(error, RecodeError):
        return error.is_fatal
    if isinstance(error, UnicodeDecodeError):
        return False
    return True


def error_chain(error: BaseException) -> Iterator[str]:
    """Yield the message of an error followed by each cause in its chain."""
    current: BaseException | None = error
    seen: set[int] = set()
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        message = str(current)
        yield message if message else type(current).__name__
        current = current.__cause__


def format_error(error: BaseException) -> str:
    """Render an error and its cause chain as a diagnostic block.

    The first line is the error's own message; each cause follows on its
    own line prefixed with "caused by: ".
    """
    messages = list(error_chain(error))
    lines = [messages[0], *(f"caused by: {message}" for message in messages[1:])]
    return "\n".join(lines)
