from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord: one JSON Lines entry per upload that could not be checked."""

__all__ = [
    "ERROR_TYPES",
    "ErrorRecord",
]

ERROR_TYPES = frozenset({"NO_FILE", "UNSUPPORTED_FORMAT", "READ_FAILURE", "PROCESSING_FAILURE"})


@dataclass(frozen=True)
class ErrorRecord:
    """Failed-check entry.

    Attributes:
        timestamp: ISO8601 UTC with 'Z' suffix
        file: Uploaded file name ("" when no file was selected)
        error_type: One of ERROR_TYPES
        message: The message shown to the user
    """
    timestamp: str
    file: str
    error_type: str
    message: str

    def __post_init__(self) -> None:
        if self.error_type not in ERROR_TYPES:
            raise ValueError(f"unknown error_type: {self.error_type!r}")

    @classmethod
    def create(cls, file: str, error_type: str, message: str) -> ErrorRecord:
        """Stamp a record with the current UTC time."""
        stamp = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return cls(timestamp=stamp, file=file, error_type=error_type, message=message)

    def to_json_line(self) -> str:
        # 固定キーのみ (dataclass のフィールド順)
        return json.dumps(asdict(self), ensure_ascii=False)
