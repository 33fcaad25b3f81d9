from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .mismatch_record import MismatchRecord

"""Check result models for the datasheet mismatch checker.

This module defines the models for the outcome of one check run: status,
collected mismatches, the serialized report (when one was produced) and the
row statistics used for the SUMMARY line.
"""

__all__ = [
    "CheckStatus",
    "CollectionStats",
    "ReportFile",
    "CheckResult",
]

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class CheckStatus(Enum):
    """Outcome of a check run.

    - MISMATCHES_FOUND: at least one mismatch, report produced
    - NO_MISMATCHES: every checked row matched (non-error, no report)
    - FAILED: the upload could not be checked; error message is set
    """
    MISMATCHES_FOUND = "mismatches_found"
    NO_MISMATCHES = "no_mismatches"
    FAILED = "failed"


@dataclass
class CollectionStats:
    """Per-verdict row counters filled while collecting mismatches."""

    scanned: int = 0
    ignored: int = 0
    matched: int = 0
    mismatched: int = 0


@dataclass(frozen=True)
class ReportFile:
    """Serialized mismatch report ready for download."""
    filename: str  # <original>-MismatchReport.xlsx
    content: bytes
    media_type: str = XLSX_MEDIA_TYPE


@dataclass(frozen=True)
class CheckResult:
    """Result of checking one uploaded datasheet."""
    file_name: str
    status: CheckStatus
    start_time: datetime
    end_time: datetime
    records: list[MismatchRecord] = field(default_factory=list)
    report: ReportFile | None = None
    error: str | None = None  # ユーザー表示用メッセージ
    error_type: str | None = None  # NO_FILE / UNSUPPORTED_FORMAT / ...
    rows_scanned: int = 0
    rows_ignored: int = 0
    rows_matched: int = 0

    @property
    def elapsed_seconds(self) -> float:
        return (self.end_time - self.start_time).total_seconds()

    @property
    def ok(self) -> bool:
        return self.status is not CheckStatus.FAILED

    @property
    def mismatch_count(self) -> int:
        return len(self.records)
