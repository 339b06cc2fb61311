# src/dynamodb_etl/core/queries.py
"""Path queries over JSON documents, backed by jq.

A PathQueries instance compiles one path expression into three reusable
jq programs:

- get: the value at the path, or nothing if it is absent or null
- set: replace the value at the path, creating containers as needed
- update: if the path holds a string, replace it with that string parsed
  as JSON; otherwise leave the document alone

Documents are passed in and returned as JSON text. Records are never parsed
into Python structures outside of jq, and every call returns a new document
rather than modifying its input.

Every result is re-serialized from the values jq hands back, so output is
jq-normalized: compact separators, non-ASCII kept as is, and numbers as
jq holds them. jq stores numbers as IEEE doubles, so integers beyond 2**53
come back rounded (12345678901234567890 becomes 12345678901234567168).
This holds for every record, including ones where neither path is present.

Compiled programs are reused across calls and are not shared between
threads; each PathQueries is owned by one recoder.
"""

from __future__ import annotations

import json
from typing import Any

import jq

from dynamodb_etl.contracts.errors import (
    QueryCompileError,
    QueryParseError,
    QueryRuntimeError,
    RecodeError,
)
from dynamodb_etl.core.logging import get_logger

logger = get_logger(__name__)

# libjq reports malformed input with this prefix (via the jq binding's parser)
_INPUT_PARSE_PREFIX = "parse error"
# fromjson failures end with "(while parsing '<text>')"
_FROMJSON_PARSE_MARKER = "while parsing"


def get_query(path: str) -> str:
    return f'if {path} | type != "null" then {path} else empty end'


def set_query(path: str) -> str:
    return f".[0]{path} = .[1] | .[0]"


def update_query(path: str) -> str:
    return f'if {path} | type == "string" then {path} |= fromjson else . end'


def raw_output(text: str) -> str:
    """Trim whitespace and remove the surrounding quotes if text is a string."""
    trimmed = text.strip()
    if len(trimmed) > 1 and trimmed.startswith('"') and trimmed.endswith('"'):
        return trimmed[1:-1]
    return trimmed


def to_json(value: Any) -> str:
    """Serialize a query output value as compact JSON text."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def classify_engine_error(error: ValueError, when: str) -> RecodeError:
    """Map a jq failure to the error taxonomy.

    Parse failures (of the input document or of a string handed to
    fromjson) are bad data. Everything else is an engine or query defect.
    """
    message = str(error)
    if message.startswith(_INPUT_PARSE_PREFIX):
        return QueryParseError(when, message[len(_INPUT_PARSE_PREFIX) :].lstrip(": "))
    if _FROMJSON_PARSE_MARKER in message:
        return QueryParseError(when, message)
    return QueryRuntimeError(when, message)


def _compile(query: str, when: str) -> Any:
    try:
        return jq.compile(query)
    except ValueError as e:
        raise QueryCompileError(when, str(e)) from e


class PathQueries:
    """The get/set/update programs compiled from one path expression.

    Args:
        path: jq path expression, e.g. ".projectBinaryData.B"
        label: What the path addresses, used in error context
            (e.g. "binary data" gives "querying binary data")

    Raises:
        QueryCompileError: If the path does not compile into any of the
            three programs
    """

    def __init__(self, path: str, label: str = "data") -> None:
        self._path = path
        self._label = label
        self._get = _compile(get_query(path), "compiling get query")
        self._set = _compile(set_query(path), "compiling set query")
        self._update = _compile(update_query(path), "compiling update query")
        logger.debug("compiled path queries", path=path, label=label)

    @property
    def path(self) -> str:
        return self._path

    def __repr__(self) -> str:
        return f'PathQueries(path="{self._path}")'

    def get(self, document: str) -> str:
        """Return the raw value at the path, or "" if it is absent or null."""
        return raw_output(self._run(self._get, document, f"querying {self._label}"))

    def set(self, document: str, value: str) -> str:
        """Return document with the path set to value.

        value must already be JSON text; it is spliced in as structured JSON.
        """
        return raw_output(self._run(self._set, f"[{document},{value}]", f"updating {self._label}"))

    def update(self, document: str) -> str:
        """Return document with a string at the path replaced by its parsed JSON."""
        return raw_output(self._run(self._update, document, f"updating {self._label}"))

    def _run(self, program: Any, text: str, when: str) -> str:
        try:
            outputs = program.input_text(text).all()
        except ValueError as e:
            raise classify_engine_error(e, when) from e
        if len(outputs) > 1:
            raise QueryParseError(when, f"expected one JSON document, found {len(outputs)}")
        if not outputs:
            return ""
        return to_json(outputs[0])
