"""Core infrastructure: Configuration, Logging, Binary codec, Path queries."""

from dynamodb_etl.core.codec import decode_binary_data, encode_binary_data
from dynamodb_etl.core.config import (
    DEFAULT_BIN_PATH,
    DEFAULT_TEXT_PATH,
    RecodeSettings,
    load_settings,
)
from dynamodb_etl.core.queries import PathQueries, raw_output

__all__ = [
    "DEFAULT_BIN_PATH",
    "DEFAULT_TEXT_PATH",
    "PathQueries",
    "RecodeSettings",
    "decode_binary_data",
    "encode_binary_data",
    "load_settings",
    "raw_output",
]
