from __future__ import annotations

import logging
from collections.abc import Iterable
from operator import attrgetter

import pandas as pd

from ..excel.reader import iter_worksheet_rows
from ..models.check_result import CollectionStats
from ..models.config_models import CheckerConfig
from ..models.mismatch_record import MismatchRecord
from ..models.verdict import RowOutcome, Verdict
from ..models.worksheet_row import WorksheetRow
from .classifier import classify_row
from .progress import RowProgressTracker

"""Mismatch collection service.

Walks the data rows of a sheet in ascending row order, classifies each row and
keeps a MismatchRecord for every mismatch. The result is the order-preserving
filter of the classified rows; the source rows are not modified, so running
the collector twice over the same rows gives equal lists.
"""

__all__ = [
    "classify_worksheet_row",
    "collect_mismatches",
    "collect_from_sheet",
]

logger = logging.getLogger(__name__)


def classify_worksheet_row(row: WorksheetRow, config: CheckerConfig | None = None) -> RowOutcome:
    """Classify a WorksheetRow using the configured ignore/furnish sets."""
    cfg = config or CheckerConfig()
    return classify_row(
        row.technical,
        row.vendor,
        ignore_values=cfg.ignore_values,
        furnish_markers=cfg.furnish_markers,
    )


def collect_mismatches(
    rows: Iterable[WorksheetRow],
    config: CheckerConfig | None = None,
    *,
    stats: CollectionStats | None = None,
    progress: RowProgressTracker | None = None,
) -> list[MismatchRecord]:
    """Classify rows and return the mismatch records in row order.

    Args:
        rows: Normalized rows (any order; processed by ascending row number)
        config: Checker configuration (defaults when None)
        stats: Optional counters filled per verdict
        progress: Optional progress tracker advanced once per classified row

    Returns:
        Possibly-empty list of MismatchRecord ordered by row number
    """
    cfg = config or CheckerConfig()
    records: list[MismatchRecord] = []
    # 安定ソート: 行番号順が出力契約
    for row in sorted(rows, key=attrgetter("row_number")):
        if row.row_number < cfg.first_data_row:
            continue
        outcome = classify_worksheet_row(row, cfg)
        if stats is not None:
            stats.scanned += 1
            if outcome.verdict is Verdict.IGNORE:
                stats.ignored += 1
            elif outcome.verdict is Verdict.MATCH:
                stats.matched += 1
            else:
                stats.mismatched += 1
        # reason は mismatch のときだけ設定される
        if outcome.reason is not None:
            logger.debug("row %d mismatch: %s", row.row_number, outcome.reason)
            records.append(MismatchRecord.from_row(row, outcome.reason))
        if progress is not None:
            progress.advance(mismatch=outcome.is_mismatch)
    return records


def collect_from_sheet(
    frame: pd.DataFrame,
    config: CheckerConfig | None = None,
    *,
    stats: CollectionStats | None = None,
) -> list[MismatchRecord]:
    """Collect mismatches from a parsed worksheet (see excel.reader.read_first_sheet)."""
    cfg = config or CheckerConfig()
    total_rows = max(frame.shape[0] - cfg.first_data_row + 1, 0)
    rows = iter_worksheet_rows(frame, cfg.columns, cfg.first_data_row)
    with RowProgressTracker(total_rows) as progress:
        return collect_mismatches(rows, cfg, stats=stats, progress=progress)
