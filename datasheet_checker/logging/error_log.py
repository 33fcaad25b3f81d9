from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from datasheet_checker.models.error_record import ErrorRecord

"""Failed-check log (JSON Lines).

A run that cannot check its upload leaves one line per failure in
`logs/errors-YYYYMMDD-HHMMSS.log` (UTC stamp, fixed per run). Runs without
failures leave no file behind.
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """Collects ErrorRecords in memory until flush()."""

    def __init__(self, logs_dir: Path | None = None) -> None:
        self._logs_dir = logs_dir or LOGS_DIR
        self._records: list[ErrorRecord] = []
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        # 初回アクセス時にディレクトリ作成とファイル名確定
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            self._file_path = self._logs_dir / f"errors-{datetime.now(UTC):{TIMESTAMP_FMT}}.log"
        return self._file_path

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path | None:
        """Append buffered records; returns the log path, or None if nothing was buffered."""
        if not self._records:
            return None
        path = self.file_path
        with path.open("a", encoding="utf-8") as f:
            f.writelines(r.to_json_line() + "\n" for r in self._records)
        self._records.clear()
        return path
