from __future__ import annotations

from unittest.mock import patch

import pandas as pd

from datasheet_checker.models.check_result import CollectionStats
from datasheet_checker.models.config_models import CheckerConfig
from datasheet_checker.models.mismatch_record import MismatchRecord
from datasheet_checker.models.worksheet_row import WorksheetRow
from datasheet_checker.services.collector import collect_from_sheet, collect_mismatches


def _rows() -> list[WorksheetRow]:
    return [
        WorksheetRow(1, "Title", "Vendor to furnish", ""),  # header rows are never classified
        WorksheetRow(2, "Description", "Technical Requirement", "Vendor Data"),
        WorksheetRow(3, "Motor nameplate", "Vendor to furnish", ""),
        WorksheetRow(4, "Supply voltage", "12V DC", ""),
        WorksheetRow(5, "Control voltage", "12V DC", "24V DC"),
        WorksheetRow(6, "Hazardous area", "N/A", "Zone 2"),
        WorksheetRow(7, "", "", ""),
        WorksheetRow(8, "Enclosure", "IP65", "IP65"),
        WorksheetRow(9, "Weight", "Designer to Furnish", "120 kg"),
    ]


def test_collect_scenarios():
    records = collect_mismatches(_rows())
    assert records == [
        MismatchRecord(3, "Motor nameplate", "Vendor to furnish", "", "Vendor data is empty"),
        MismatchRecord(4, "Supply voltage", "12V DC", "", "Vendor data is empty."),
        MismatchRecord(5, "Control voltage", "12V DC", "24V DC", "Values do not match."),
    ]


def test_header_rows_are_skipped():
    records = collect_mismatches(_rows()[:2])
    assert records == []


def test_all_rows_match_returns_empty_list():
    rows = [WorksheetRow(3, "a", "12V DC", "12V DC"), WorksheetRow(4, "b", "No", "")]
    assert collect_mismatches(rows) == []


def test_collect_is_idempotent():
    rows = _rows()
    first = collect_mismatches(rows)
    second = collect_mismatches(rows)
    assert first == second
    assert rows == _rows()  # 入力は変更されない


def test_output_is_ordered_by_row_number():
    shuffled = list(reversed(_rows()))
    records = collect_mismatches(shuffled)
    assert [r.row for r in records] == [3, 4, 5]


def test_stats_are_counted_per_verdict():
    stats = CollectionStats()
    collect_mismatches(_rows(), stats=stats)
    assert stats.scanned == 7
    assert stats.ignored == 2  # row 6 (N/A) and the blank row 7
    assert stats.matched == 2
    assert stats.mismatched == 3


def test_config_changes_first_data_row_and_sets():
    cfg = CheckerConfig(
        first_data_row=5,
        ignore_values=frozenset({"", "N/A", "12V DC"}),
    )
    records = collect_mismatches(_rows(), cfg)
    # rows 3-4 skipped, row 5 ignored by the custom set, rows 6-9 ignored or matched
    assert records == []


def test_collect_from_sheet_uses_sheet_positions():
    frame = pd.DataFrame(
        [
            ["Title", None, None, None, None],
            ["Item", "Description", "Unit", "Technical Requirement", "Vendor Data"],
            [1, "Voltage", "V", "12V DC", "12V DC"],
            [None, None, None, None, None],
            [3, "Frequency", "Hz", "50 Hz", "60 Hz"],
        ],
        dtype=object,
    )
    stats = CollectionStats()
    with patch("datasheet_checker.services.progress.is_tty_enabled", return_value=False):
        records = collect_from_sheet(frame, stats=stats)
    assert records == [MismatchRecord(5, "Frequency", "50 Hz", "60 Hz", "Values do not match.")]
    assert stats.scanned == 3


def test_collect_from_sheet_with_narrow_frame():
    # 列 E が存在しないシート -> vendor は空扱い
    frame = pd.DataFrame([["t"], ["h"], ["x"]], dtype=object)
    with patch("datasheet_checker.services.progress.is_tty_enabled", return_value=False):
        assert collect_from_sheet(frame) == []
