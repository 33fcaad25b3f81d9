from __future__ import annotations

from dataclasses import dataclass

"""WorksheetRow model for the datasheet mismatch checker.

A WorksheetRow is the normalized view of one source row: the three cells the
checker looks at, already passed through the cell text normalizer. Rows are
read once per upload and discarded after classification.
"""

__all__ = [
    "WorksheetRow",
]


@dataclass(frozen=True)
class WorksheetRow:
    """Logical representation of a single datasheet row after normalization.

    The row_number refers to the original sheet row (1-based). Rows 1 and 2
    hold the title/header and are never classified.
    """
    row_number: int  # 1-based position in the source sheet
    description: str  # column B (informational only)
    technical: str  # column D - required/specified value
    vendor: str  # column E - vendor-supplied value
