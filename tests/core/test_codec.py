"""Tests for the base64+gzip binary codec."""

import base64
import gzip

import pytest

from dynamodb_etl.contracts import Base64Error, GzipError
from dynamodb_etl.core.codec import decode_binary_data, encode_binary_data
from tests.conftest import EMPTY_OBJECT_B64, NOT_GZIPPED_B64


class TestDecodeBinaryData:
    def test_decode(self) -> None:
        assert decode_binary_data(EMPTY_OBJECT_B64) == "{}\n"

    def test_decode_ignores_surrounding_whitespace(self) -> None:
        assert decode_binary_data(f"  {EMPTY_OBJECT_B64}\n") == "{}\n"

    def test_decode_fail_base64(self) -> None:
        with pytest.raises(Base64Error) as exc_info:
            decode_binary_data("not base64-encoded")

        assert exc_info.value.is_fatal is False
        assert exc_info.value.__cause__ is not None

    def test_decode_fail_gzip(self) -> None:
        with pytest.raises(GzipError) as exc_info:
            decode_binary_data(NOT_GZIPPED_B64)

        assert exc_info.value.is_fatal is False

    def test_decode_fail_truncated_gzip(self) -> None:
        truncated = base64.b64encode(gzip.compress(b'{"a": 1}')[:12]).decode("ascii")

        with pytest.raises(GzipError):
            decode_binary_data(truncated)

    def test_decode_fail_non_utf8_payload(self) -> None:
        encoded = base64.b64encode(gzip.compress(b"\xff\xfe")).decode("ascii")

        with pytest.raises(GzipError, match="utf-8"):
            decode_binary_data(encoded)

    def test_decode_non_ascii_input_is_base64_error(self) -> None:
        with pytest.raises(Base64Error):
            decode_binary_data("H4sIé")


class TestEncodeBinaryData:
    def test_encode_then_decode(self) -> None:
        assert decode_binary_data(encode_binary_data('{"name":"Zoë"}')) == '{"name":"Zoë"}'

    def test_encode_is_deterministic(self) -> None:
        assert encode_binary_data("{}") == encode_binary_data("{}")
