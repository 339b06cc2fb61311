# src/dynamodb_etl/engine/pipeline.py
"""Line pipeline: reads records, recodes them, writes or reports each one.

State machine:

    READY -> RUNNING -> (per line: emit | report-and-continue) -> COMPLETED
    RUNNING -> ABORTED (first fatal error)

Every line is read, recoded and written (or reported) before the next one
is read, so output order always matches input order. Errors are tagged
with the 1-based physical line number, which advances for every line read
regardless of earlier failures.

Non-fatal errors (bad data) go to the diagnostic sink as a block: the
message followed by "caused by:" lines. Fatal errors (misconfiguration,
engine or stream failure) abort the run and are re-raised to the caller.
"""

from __future__ import annotations

import io
import time
from collections.abc import Iterator
from typing import IO, Any, AnyStr

from dynamodb_etl.contracts.enums import PipelineState, RunStatus
from dynamodb_etl.contracts.errors import (
    InvalidDataError,
    LineError,
    RecodeError,
    StreamError,
    format_error,
)
from dynamodb_etl.contracts.results import RecodeResult, RunSummary
from dynamodb_etl.core.config import RecodeSettings
from dynamodb_etl.core.logging import get_logger
from dynamodb_etl.engine.recoder import RecordRecoder

logger = get_logger(__name__)


class LinePipeline:
    """Recodes a stream of newline-delimited JSON records.

    Both path expressions are compiled at construction, before any input
    is read.

    Args:
        settings: Paths of the binary and text fields
        encoding: Encoding of the input when it is read as bytes

    Raises:
        QueryCompileError: If either path expression is invalid
    """

    def __init__(self, settings: RecodeSettings, *, encoding: str = "utf-8") -> None:
        self._settings = settings
        self._encoding = encoding
        self._recoder = RecordRecoder(settings)
        self._state = PipelineState.READY
        self.summary = RunSummary()

    @property
    def settings(self) -> RecodeSettings:
        return self._settings

    @property
    def state(self) -> PipelineState:
        return self._state

    def process_line(self, line_number: int, line: bytes | str) -> RecodeResult:
        """Recode a single line.

        Returns a success holding the trimmed, rewritten record, or an error
        holding a LineError for line_number. Never raises for recoding
        failures; the caller decides what a fatal result means.
        """
        try:
            text = self._decode(line)
            record = self._recoder.recode(text)
        except RecodeError as e:
            return RecodeResult.failure(LineError(line_number, e))
        return RecodeResult.success(record.strip(), line_number=line_number)

    def run(self, source: IO[AnyStr], output: IO[str], diagnostics: IO[str]) -> RunSummary:
        """Process every line of source.

        A TextIOWrapper source is read through its binary buffer so that
        each line is decoded on its own; a line that is not valid in the
        pipeline's encoding is then reported and skipped like any other bad
        record.

        Args:
            source: Input stream, bytes or text, one JSON document per line
            output: Receives one rewritten record per successful line
            diagnostics: Receives one block per non-fatal error

        Returns:
            Summary of the completed run

        Raises:
            LineError: On the first fatal error; self.summary then holds the
                counts up to the failing line with status ABORTED
        """
        if self._state is not PipelineState.READY:
            raise RuntimeError(f"LinePipeline.run() called in state {self._state}; a pipeline runs once")

        self._state = PipelineState.RUNNING
        summary = self.summary
        started = time.perf_counter()
        log = logger.bind(binpath=self._settings.binpath, textpath=self._settings.textpath)
        log.debug("recode started")

        stream: IO[Any] = source.buffer if isinstance(source, io.TextIOWrapper) else source

        try:
            for line_number, line in self._read_lines(stream):
                summary.lines_read += 1
                if isinstance(line, LineError):
                    result = RecodeResult.failure(line)
                elif not line.strip():
                    summary.blank_lines += 1
                    continue
                else:
                    result = self.process_line(line_number, line)

                if result.is_success:
                    self._write(output, result)
                    summary.records_written += 1
                    continue

                error = result.error
                assert error is not None  # guaranteed by RecodeResult invariants
                if error.is_fatal:
                    raise error

                summary.records_skipped += 1
                log.warning(
                    "record skipped",
                    line_number=line_number,
                    kind=getattr(error.inner, "kind", None),
                    error=str(error.inner),
                )
                diagnostics.write(format_error(error) + "\n")
        except LineError as e:
            self._state = PipelineState.ABORTED
            summary.status = RunStatus.ABORTED
            summary.duration_seconds = time.perf_counter() - started
            log.error(
                "recode aborted",
                line_number=e.line_number,
                kind=getattr(e.inner, "kind", None),
                error=str(e.inner),
                **summary.to_dict(),
            )
            raise

        self._state = PipelineState.COMPLETED
        summary.status = RunStatus.COMPLETED
        summary.duration_seconds = time.perf_counter() - started
        log.info("recode completed", **summary.to_dict())
        return summary

    def _read_lines(self, source: IO[Any]) -> Iterator[tuple[int, Any]]:
        """Yield (line_number, line), or (line_number, LineError) for a failed read.

        A stream that cannot decode its own input yields a non-fatal
        InvalidDataError for that line; any other read failure is fatal.
        """
        line_number = 0
        while True:
            line_number += 1
            error: RecodeError
            try:
                line = source.readline()
            except UnicodeDecodeError as e:
                error = InvalidDataError(self._encoding)
                error.__cause__ = e
                yield line_number, LineError(line_number, error)
                continue
            except OSError as e:
                error = StreamError("unable to read line from input")
                error.__cause__ = e
                yield line_number, LineError(line_number, error)
                return
            if not line:
                return
            yield line_number, line

    def _decode(self, line: bytes | str) -> str:
        if isinstance(line, str):
            try:
                line.encode("utf-8")
            except UnicodeEncodeError as e:
                raise InvalidDataError(self._encoding) from e
            return line
        try:
            return line.decode(self._encoding)
        except UnicodeDecodeError as e:
            raise InvalidDataError(self._encoding) from e

    @staticmethod
    def _write(output: IO[str], result: RecodeResult) -> None:
        try:
            output.write(f"{result.record}\n")
        except OSError as e:
            error = StreamError("unable to write record to output")
            error.__cause__ = e
            raise LineError(result.line_number, error)  # noqa: B904
