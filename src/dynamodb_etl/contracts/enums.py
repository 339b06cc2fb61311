"""Status codes and kinds used across subsystem boundaries."""

from enum import StrEnum


class ErrorKind(StrEnum):
    """Kind of a recoding error.

    Emitted as the ``kind`` field of structured log events.
    """

    QUERY_COMPILE = "query_compile"
    BASE64 = "base64"
    GZIP = "gzip"
    QUERY_PARSE = "query_parse"
    QUERY_RUNTIME = "query_runtime"
    INVALID_DATA = "invalid_data"
    STREAM = "stream"
    LINE = "line"


class RunStatus(StrEnum):
    """Final status of a recode run."""

    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"


class PipelineState(StrEnum):
    """States of the line pipeline.

    RUNNING is the only non-terminal state. COMPLETED is reached when the
    input is exhausted, ABORTED on the first fatal error.
    """

    READY = "ready"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"
