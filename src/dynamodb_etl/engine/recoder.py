# src/dynamodb_etl/engine/recoder.py
"""Field recoders.

BinaryRecoder replaces a base64+gzip encoded field with the JSON it
contains. TextRecoder replaces a JSON-encoded string field with the parsed
JSON. RecordRecoder applies both to a record, binary first.

Absence of either field is not an error; only a malformed field is.
Records stay JSON text throughout and are only touched through the
compiled path queries.
"""

from dynamodb_etl.core.codec import decode_binary_data
from dynamodb_etl.core.config import RecodeSettings
from dynamodb_etl.core.queries import PathQueries


class BinaryRecoder:
    """Decodes the base64+gzip field at one path."""

    def __init__(self, path: str) -> None:
        self._queries = PathQueries(path, label="binary data")

    @property
    def path(self) -> str:
        return self._queries.path

    def recode(self, record: str) -> str:
        """Return record with the binary field decoded, or record unchanged.

        Raises:
            Base64Error, GzipError: If the field is present but malformed
            QueryParseError: If the record or decoded payload is not JSON
        """
        binary_data = self._queries.get(record)
        if not binary_data:
            return record
        decoded = decode_binary_data(binary_data)
        return self._queries.set(record, decoded)


class TextRecoder:
    """Parses the JSON-encoded string field at one path."""

    def __init__(self, path: str) -> None:
        self._queries = PathQueries(path, label="text data")

    @property
    def path(self) -> str:
        return self._queries.path

    def recode(self, record: str) -> str:
        return self._queries.update(record)


class RecordRecoder:
    """Applies binary then text recoding to a record.

    Both query sets are compiled once here and reused for every record.

    Raises:
        QueryCompileError: If either configured path does not compile
    """

    def __init__(self, settings: RecodeSettings) -> None:
        self.binary = BinaryRecoder(settings.binpath)
        self.text = TextRecoder(settings.textpath)

    def recode(self, record: str) -> str:
        # A binary failure propagates before text recoding is attempted
        return self.text.recode(self.binary.recode(record))
