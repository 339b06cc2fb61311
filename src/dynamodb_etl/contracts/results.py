# src/dynamodb_etl/contracts/results.py
"""Result types for line processing.

RecodeResult is the per-line outcome handed from the recoders to the
pipeline; RunSummary describes a whole run once it terminates.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from dynamodb_etl.contracts.enums import RunStatus
from dynamodb_etl.contracts.errors import LineError


@dataclass(frozen=True)
class RecodeResult:
    """Outcome of recoding one input line.

    Use the factory methods to create instances. A success carries the
    rewritten record, an error carries the LineError that wraps the cause
    with this line's number.
    """

    status: Literal["success", "error"]
    line_number: int
    record: str | None = None
    error: LineError | None = None

    def __post_init__(self) -> None:
        if self.line_number < 1:
            raise ValueError(f"line_number is 1-based, got {self.line_number}")
        if self.status == "success" and (self.record is None or self.error is not None):
            raise ValueError("RecodeResult with status='success' MUST carry a record and no error")
        if self.status == "error" and (self.error is None or self.record is not None):
            raise ValueError("RecodeResult with status='error' MUST carry an error and no record")

    @classmethod
    def success(cls, record: str, *, line_number: int) -> RecodeResult:
        """Create a successful result holding the rewritten record."""
        return cls(status="success", line_number=line_number, record=record)

    @classmethod
    def failure(cls, error: LineError) -> RecodeResult:
        """Create an error result from a line-tagged error."""
        return cls(status="error", line_number=error.line_number, error=error)

    @property
    def is_success(self) -> bool:
        return self.status == "success"

    @property
    def is_fatal(self) -> bool:
        """True if this result must abort the run."""
        return self.error is not None and self.error.is_fatal


@dataclass
class RunSummary:
    """Counters for a recode run.

    Attributes:
        lines_read: Physical lines consumed from the input, blank ones included
        records_written: Lines emitted to the output stream
        records_skipped: Lines reported as non-fatal errors
        blank_lines: Whitespace-only lines, neither emitted nor reported
        status: Final run status
        duration_seconds: Wall-clock time of the run
    """

    lines_read: int = 0
    records_written: int = 0
    records_skipped: int = 0
    blank_lines: int = 0
    status: RunStatus = RunStatus.RUNNING
    duration_seconds: float = 0.0

    def to_dict(self) -> dict[str, object]:
        return {
            "status": self.status.value,
            "lines_read": self.lines_read,
            "records_written": self.records_written,
            "records_skipped": self.records_skipped,
            "blank_lines": self.blank_lines,
            "duration_seconds": round(self.duration_seconds, 3),
        }
