# tests/conftest.py
"""Shared test fixtures and helpers.

Records are JSON text throughout, so most helpers build compact JSON
strings the same way the query layer serializes them.
"""

import json
from typing import Any

import pytest

from dynamodb_etl.core.codec import encode_binary_data
from dynamodb_etl.core.config import RecodeSettings

# gzip of "{}\n", base64-encoded
EMPTY_OBJECT_B64 = "H4sIABWa/lwCA6uu5QIABrCh3QMAAAA="

# base64 of "not gzipped\n"
NOT_GZIPPED_B64 = "bm90IGd6aXBwZWQK"


def compact(value: Any) -> str:
    """Serialize value the way recoded records are written."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def binary_record(payload: Any, *, extra: dict[str, Any] | None = None) -> str:
    """Build a record whose default binary field holds payload, encoded."""
    record: dict[str, Any] = {"projectBinaryData": {"B": encode_binary_data(compact(payload))}}
    if extra:
        record.update(extra)
    return compact(record)


def text_record(payload: Any) -> str:
    """Build a record whose default text field holds payload as a JSON string."""
    return compact({"projectData": {"S": compact(payload)}})


@pytest.fixture
def default_settings() -> RecodeSettings:
    return RecodeSettings()
