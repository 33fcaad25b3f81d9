from __future__ import annotations

from dataclasses import dataclass

from .worksheet_row import WorksheetRow

"""MismatchRecord model.

One MismatchRecord is produced for every row the classifier rejects. The
fields mirror the report columns (Row, Description, Technical Requirement,
Vendor Data, Error) so the report builder can write them in order.
"""

__all__ = [
    "MismatchRecord",
    "REPORT_FIELDS",
]

# 出力列順 (レポートのヘッダと同じ並び)
REPORT_FIELDS = ("row", "description", "technical", "vendor", "error")


@dataclass(frozen=True)
class MismatchRecord:
    """A row where vendor data is missing or disagrees with the requirement.

    Attributes:
        row: Originating 1-based sheet row (traceability back to the source)
        description: Column B text, verbatim after normalization
        technical: Column D text, verbatim after normalization
        vendor: Column E text, verbatim after normalization
        error: Human-readable reason, never empty
    """
    row: int
    description: str
    technical: str
    vendor: str
    error: str

    def __post_init__(self) -> None:
        if not self.error:
            raise ValueError(f"mismatch record for row {self.row} requires an error reason")

    @staticmethod
    def from_row(row: WorksheetRow, error: str) -> MismatchRecord:
        """Create a record from a classified WorksheetRow."""
        return MismatchRecord(
            row=row.row_number,
            description=row.description,
            technical=row.technical,
            vendor=row.vendor,
            error=error,
        )

    def as_report_row(self) -> list[object]:
        """Values in report column order (row stays an int)."""
        return [getattr(self, name) for name in REPORT_FIELDS]
