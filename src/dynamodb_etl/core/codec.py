# src/dynamodb_etl/core/codec.py
"""Binary codec for compressed document fields.

DynamoDB exports store large documents as binary attributes: the JSON text
is gzip-compressed and the bytes are base64-encoded. decode_binary_data()
undoes both layers, encode_binary_data() applies them.
"""

import base64
import binascii
import gzip
import zlib

from dynamodb_etl.contracts.errors import Base64Error, GzipError


def decode_binary_data(encoded: str) -> str:
    """Decode a string created by gzipping and then base64-encoding a text.

    Args:
        encoded: Base64 text of a gzip stream

    Returns:
        The decompressed payload as text (expected to be JSON)

    Raises:
        Base64Error: If encoded is not valid base64
        GzipError: If the decoded bytes are not a valid gzip stream or the
            payload is not valid UTF-8
    """
    try:
        compressed = base64.b64decode(encoded.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise Base64Error() from e

    try:
        payload = gzip.decompress(compressed)
    except (OSError, EOFError, zlib.error) as e:
        raise GzipError() from e

    try:
        return payload.decode("utf-8")
    except UnicodeDecodeError as e:
        raise GzipError("decompressed binary data is not valid utf-8") from e


def encode_binary_data(text: str, *, mtime: float | None = 0) -> str:
    """Gzip a text and base64-encode the result.

    mtime defaults to 0 so that equal inputs produce equal output.
    """
    compressed = gzip.compress(text.encode("utf-8"), mtime=mtime)
    return base64.b64encode(compressed).decode("ascii")
