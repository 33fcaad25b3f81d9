from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the datasheet mismatch checker.

These are the typed domain models the loader in datasheet_checker/config/loader.py
produces. Every field has a default so a run without a config file behaves
like the stock datasheet layout:

    row 1-2 : title / header (never classified)
    column B: description
    column D: technical requirement
    column E: vendor data
"""

__all__ = [
    "IGNORE_VALUES",
    "FURNISH_MARKERS",
    "FIRST_DATA_ROW",
    "REPORT_SHEET_NAME",
    "ColumnLayout",
    "ReportConfig",
    "CheckerConfig",
]

# Technical values that mean "nothing to check" for the row.
IGNORE_VALUES: frozenset[str] = frozenset({"", "N/A", "0", "No"})

# Technical values saying another party supplies the value; only presence of
# vendor data is checked for these (case-sensitive).
FURNISH_MARKERS: frozenset[str] = frozenset({"Vendor to furnish", "Designer to Furnish"})

FIRST_DATA_ROW = 3
REPORT_SHEET_NAME = "Mismatch Report"


@dataclass(frozen=True)
class ColumnLayout:
    """Column letters of the cells read from each row."""
    description: str = "B"
    technical: str = "D"
    vendor: str = "E"


@dataclass(frozen=True)
class ReportConfig:
    sheet_name: str = REPORT_SHEET_NAME
    output_directory: str | None = None  # None -> カレントディレクトリ


@dataclass(frozen=True)
class CheckerConfig:
    """Root configuration object for a check run."""
    ignore_values: frozenset[str] = IGNORE_VALUES
    furnish_markers: frozenset[str] = FURNISH_MARKERS
    first_data_row: int = FIRST_DATA_ROW
    columns: ColumnLayout = field(default_factory=ColumnLayout)
    report: ReportConfig = field(default_factory=ReportConfig)
