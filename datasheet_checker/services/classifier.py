from __future__ import annotations

from collections.abc import Collection

from ..models.config_models import FURNISH_MARKERS, IGNORE_VALUES
from ..models.verdict import RowOutcome

"""Row classification service.

Decides for one normalized row whether it is ignored, matched or a mismatch.
Evaluation order matters:

1. technical in the ignore set          -> ignore
2. technical is a furnish marker        -> mismatch only if vendor is empty
3. anything else                        -> mismatch if vendor empty or != technical

String comparison is exact and case-sensitive. Only one error fragment is
produced per row: an empty vendor value short-circuits the value comparison.
"""

__all__ = [
    "IGNORE_VALUES",
    "FURNISH_MARKERS",
    "EMPTY_FURNISHED_VALUE",
    "EMPTY_VENDOR_VALUE",
    "VALUES_DIFFER",
    "classify_row",
]

EMPTY_FURNISHED_VALUE = "Vendor data is empty"
EMPTY_VENDOR_VALUE = "Vendor data is empty."
VALUES_DIFFER = "Values do not match."


def classify_row(
    technical: str,
    vendor: str,
    *,
    ignore_values: Collection[str] = IGNORE_VALUES,
    furnish_markers: Collection[str] = FURNISH_MARKERS,
) -> RowOutcome:
    """Classify one row from its normalized technical and vendor text.

    Args:
        technical: Required/specified value (column D)
        vendor: Vendor-supplied value (column E)
        ignore_values: Technical values that exclude the row
        furnish_markers: Technical values where only vendor presence is checked

    Returns:
        RowOutcome tagged ignore / match / mismatch(reason)
    """
    if technical in ignore_values:
        return RowOutcome.ignore()

    if technical in furnish_markers:
        # 内容は比較しない (値が入っていれば OK)
        if not vendor:
            return RowOutcome.mismatch(EMPTY_FURNISHED_VALUE)
        return RowOutcome.match()

    if not vendor:
        return RowOutcome.mismatch(EMPTY_VENDOR_VALUE)
    if technical != vendor:
        return RowOutcome.mismatch(VALUES_DIFFER)
    return RowOutcome.match()
