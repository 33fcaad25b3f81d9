from __future__ import annotations

from collections.abc import Iterator
from io import BytesIO
from pathlib import PurePath
from typing import Any

import pandas as pd
from openpyxl.utils import column_index_from_string

from ..models.config_models import FIRST_DATA_ROW, ColumnLayout
from ..models.worksheet_row import WorksheetRow
from .normalize import cell_text

"""Datasheet reader.

Only the first worksheet of an uploaded workbook is read. Rows 1-2 are the
title/header; data rows start at row 3. Cells are addressed by column letter
(B/D/E by default) and every value is passed through cell_text().

The sheet is parsed with pandas (header=None, dtype=object) so the DataFrame
position maps 1:1 to the sheet row number, blank rows included. NA string
conversion is disabled entirely: "N/A" and "" are meaningful datasheet values.
"""

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "WorkbookReadError",
    "is_supported_upload",
    "read_first_sheet",
    "iter_worksheet_rows",
]

SUPPORTED_EXTENSIONS = (".xlsx", ".xls")
_SPREADSHEET_MIME_MARKERS = ("excel", "spreadsheetml")


class WorkbookReadError(Exception):
    """Raised when the spreadsheet library cannot interpret the bytes."""


def is_supported_upload(filename: str, mime_type: str | None = None) -> bool:
    """Check file name / MIME type for an Excel workbook.

    Either indicator is enough: browsers often report an empty or generic
    MIME type for .xlsx files.
    """
    if mime_type and any(marker in mime_type.lower() for marker in _SPREADSHEET_MIME_MARKERS):
        return True
    return PurePath(filename).suffix.lower() in SUPPORTED_EXTENSIONS


def read_first_sheet(data: bytes, filename: str = "") -> pd.DataFrame:
    """Parse the first worksheet of a workbook held in memory.

    Parameters
    ----------
    data: ファイルの生バイト列
    filename: エラーメッセージ用のファイル名

    Raises
    ------
    WorkbookReadError: bytes are not a readable workbook or it has no sheets
    """
    try:
        # engine=None -> pandas が中身 (zip/OLE) から openpyxl / xlrd を判定
        with pd.ExcelFile(BytesIO(data)) as xls:
            if not xls.sheet_names:
                raise WorkbookReadError(f"workbook '{filename}' has no worksheets")
            first = xls.sheet_names[0]
            return xls.parse(first, header=None, dtype=object, keep_default_na=False, na_values=None)
    except WorkbookReadError:
        raise
    except Exception as e:
        raise WorkbookReadError(str(e) or type(e).__name__) from e


def _column_position(letter: str) -> int:
    return column_index_from_string(letter.strip().upper()) - 1


def _cell(frame: pd.DataFrame, position: int, column: int) -> Any:
    if column >= frame.shape[1]:
        return None
    return frame.iat[position, column]


def iter_worksheet_rows(
    frame: pd.DataFrame,
    columns: ColumnLayout | None = None,
    first_data_row: int = FIRST_DATA_ROW,
) -> Iterator[WorksheetRow]:
    """Yield normalized rows from first_data_row to the last sheet row.

    Blank rows are yielded as well so row numbers stay faithful to the sheet.
    """
    layout = columns or ColumnLayout()
    desc_col = _column_position(layout.description)
    tech_col = _column_position(layout.technical)
    vendor_col = _column_position(layout.vendor)
    for position in range(max(first_data_row, 1) - 1, frame.shape[0]):
        yield WorksheetRow(
            row_number=position + 1,
            description=cell_text(_cell(frame, position, desc_col)),
            technical=cell_text(_cell(frame, position, tech_col)),
            vendor=cell_text(_cell(frame, position, vendor_col)),
        )
