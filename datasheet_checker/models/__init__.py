"""Domain models for the technical datasheet mismatch checker.

This package contains all domain model classes used throughout the application:
the normalized source row, the classification outcome, the mismatch record and
the result of a whole check run.
"""

from .check_result import CheckResult, CheckStatus, CollectionStats, ReportFile
from .config_models import CheckerConfig, ColumnLayout, ReportConfig
from .error_record import ErrorRecord
from .mismatch_record import MismatchRecord
from .verdict import RowOutcome, Verdict
from .worksheet_row import WorksheetRow

__all__ = [
    # Configuration models
    "CheckerConfig",
    "ColumnLayout",
    "ReportConfig",
    # Processing models
    "WorksheetRow",
    "RowOutcome",
    "Verdict",
    "MismatchRecord",
    # Result models
    "CheckResult",
    "CheckStatus",
    "CollectionStats",
    "ReportFile",
    "ErrorRecord",
]
