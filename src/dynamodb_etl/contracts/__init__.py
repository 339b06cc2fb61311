"""Shared contracts: enums, the error taxonomy and result types.

Import from here rather than the individual modules.
"""

from dynamodb_etl.contracts.enums import ErrorKind, PipelineState, RunStatus
from dynamodb_etl.contracts.errors import (
    Base64Error,
    GzipError,
    InvalidDataError,
    LineError,
    QueryCompileError,
    QueryParseError,
    QueryRuntimeError,
    RecodeError,
    StreamError,
    error_chain,
    format_error,
    is_fatal,
)
from dynamodb_etl.contracts.results import RecodeResult, RunSummary

__all__ = [
    "Base64Error",
    "ErrorKind",
    "GzipError",
    "InvalidDataError",
    "LineError",
    "PipelineState",
    "QueryCompileError",
    "QueryParseError",
    "QueryRuntimeError",
    "RecodeError",
    "RecodeResult",
    "RunStatus",
    "RunSummary",
    "StreamError",
    "error_chain",
    "format_error",
    "is_fatal",
]
