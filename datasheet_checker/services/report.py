from __future__ import annotations

import io
from collections.abc import Sequence
from pathlib import Path, PurePath

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from ..models.check_result import XLSX_MEDIA_TYPE, ReportFile
from ..models.config_models import REPORT_SHEET_NAME
from ..models.mismatch_record import MismatchRecord

"""Mismatch report builder.

Layout of the generated workbook (single sheet):

    row 1   : Row | Description | Technical Requirement | Vendor Data | Error
              bold, solid light-blue fill
    row 2.. : one MismatchRecord per row, same column order

Column widths are fixed (8, 25, 35, 25, 40) so description, requirement and
error text stay readable without manual resizing.
"""

__all__ = [
    "REPORT_HEADERS",
    "COLUMN_WIDTHS",
    "HEADER_FILL_COLOR",
    "build_report_workbook",
    "report_filename",
    "render_report",
    "save_report",
]

REPORT_HEADERS = ["Row", "Description", "Technical Requirement", "Vendor Data", "Error"]
COLUMN_WIDTHS = [8, 25, 35, 25, 40]
HEADER_FILL_COLOR = "FFADD8E6"  # light blue (ARGB)
REPORT_SUFFIX = "-MismatchReport.xlsx"


def build_report_workbook(
    records: Sequence[MismatchRecord], *, sheet_name: str = REPORT_SHEET_NAME
) -> Workbook:
    """Render mismatch records into a new workbook.

    Args:
        records: Ordered, non-empty mismatch records
        sheet_name: Title of the single report sheet

    Returns:
        openpyxl Workbook (not yet serialized)

    Raises:
        ValueError: records is empty (an empty report has nothing to act on)
    """
    if not records:
        raise ValueError("cannot build a mismatch report without mismatches")

    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name

    ws.append(REPORT_HEADERS)
    header_font = Font(bold=True)
    header_fill = PatternFill(start_color=HEADER_FILL_COLOR, end_color=HEADER_FILL_COLOR, fill_type="solid")
    for cell in ws[1]:
        cell.font = header_font
        cell.fill = header_fill

    for record in records:
        ws.append(record.as_report_row())
        # "=" で始まる文字列も数式にせずリテラルとして保存
        for cell in ws[ws.max_row]:
            if isinstance(cell.value, str):
                cell.data_type = "s"

    for col_idx, width in enumerate(COLUMN_WIDTHS, start=1):
        ws.column_dimensions[get_column_letter(col_idx)].width = width
    return wb


def report_filename(original_name: str) -> str:
    """Suggested download name: <original-file-name>-MismatchReport.xlsx."""
    # ディレクトリ部分は落とす (ブラウザのダウンロード名と同じ扱い)
    return f"{PurePath(original_name).name}{REPORT_SUFFIX}"


def render_report(
    records: Sequence[MismatchRecord],
    original_name: str,
    *,
    sheet_name: str = REPORT_SHEET_NAME,
) -> ReportFile:
    """Build and serialize the report to bytes suitable for a file download."""
    wb = build_report_workbook(records, sheet_name=sheet_name)
    bio = io.BytesIO()
    try:
        wb.save(bio)
        content = bio.getvalue()
    finally:
        bio.close()
        wb.close()
    return ReportFile(filename=report_filename(original_name), content=content, media_type=XLSX_MEDIA_TYPE)


def save_report(report: ReportFile, directory: Path) -> Path:
    """Write a rendered report into directory (created if needed)."""
    directory.mkdir(parents=True, exist_ok=True)
    target = directory / report.filename
    target.write_bytes(report.content)
    return target
