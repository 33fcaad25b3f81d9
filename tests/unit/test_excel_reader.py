from __future__ import annotations

import re
import zipfile
from pathlib import Path

import pytest

from datasheet_checker.excel.reader import (
    WorkbookReadError,
    is_supported_upload,
    iter_worksheet_rows,
    read_first_sheet,
)
from datasheet_checker.models.config_models import ColumnLayout
from datasheet_checker.models.worksheet_row import WorksheetRow


@pytest.mark.parametrize(
    "filename, mime_type, expected",
    [
        ("datasheet.xlsx", None, True),
        ("datasheet.xls", None, True),
        ("DATASHEET.XLSX", None, True),
        ("datasheet.csv", None, False),
        ("datasheet.pdf", "application/pdf", False),
        ("upload", "application/vnd.ms-excel", True),
        ("upload", "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet", True),
        ("datasheet.xlsx", "", True),
        ("notes.txt", "text/plain", False),
    ],
)
def test_is_supported_upload(filename, mime_type, expected):
    assert is_supported_upload(filename, mime_type) is expected


def test_read_first_sheet_and_iterate_rows(datasheet):
    path = datasheet(
        "pump.xlsx",
        {
            3: ("Supply voltage", "12V DC", "12V DC"),
            5: ("Enclosure", "IP65", "IP54"),
        },
    )
    frame = read_first_sheet(path.read_bytes(), path.name)
    rows = list(iter_worksheet_rows(frame))
    assert rows[0] == WorksheetRow(3, "Supply voltage", "12V DC", "12V DC")
    # blank row 4 is kept (only column A item number present)
    assert rows[1].row_number == 4
    assert (rows[1].description, rows[1].technical, rows[1].vendor) == ("", "", "")
    assert rows[2] == WorksheetRow(5, "Enclosure", "IP65", "IP54")


def test_na_strings_are_preserved(datasheet):
    path = datasheet("na.xlsx", [("Hazardous area", "N/A", "NA"), ("Option", "No", "")])
    frame = read_first_sheet(path.read_bytes())
    rows = list(iter_worksheet_rows(frame))
    assert rows[0].technical == "N/A"
    assert rows[0].vendor == "NA"
    assert rows[1].technical == "No"
    assert rows[1].vendor == ""


def test_numeric_cells_are_normalized(datasheet):
    path = datasheet("numbers.xlsx", [("Spare count", 0, 0), ("Voltage", 24, 24.0), ("Ratio", 1.5, "1.5")])
    rows = list(iter_worksheet_rows(read_first_sheet(path.read_bytes())))
    assert rows[0].technical == "0"
    assert rows[1].technical == "24"
    assert rows[1].vendor == "24"
    assert rows[2].technical == rows[2].vendor == "1.5"


def test_only_first_sheet_is_read(datasheet):
    path = datasheet(
        "multi.xlsx",
        [("Voltage", "12V DC", "12V DC")],
        extra_sheets={"Notes": [["x"], ["y"], ["", "ignored", "", "should not", "be read"]]},
    )
    rows = list(iter_worksheet_rows(read_first_sheet(path.read_bytes())))
    assert [r.technical for r in rows] == ["12V DC"]


def test_custom_column_layout(datasheet):
    path = datasheet("layout.xlsx", [("Voltage", "12V DC", "24V DC")])
    frame = read_first_sheet(path.read_bytes())
    layout = ColumnLayout(description="D", technical="E", vendor="B")
    row = next(iter_worksheet_rows(frame, layout))
    assert (row.description, row.technical, row.vendor) == ("12V DC", "24V DC", "Voltage")


def test_first_data_row_offset(datasheet):
    path = datasheet("offset.xlsx", [("a", "1", "1"), ("b", "2", "2")])
    frame = read_first_sheet(path.read_bytes())
    rows = list(iter_worksheet_rows(frame, first_data_row=4))
    assert [r.row_number for r in rows] == [4]


def test_read_first_sheet_rejects_garbage(temp_workdir: Path):
    with pytest.raises(WorkbookReadError):
        read_first_sheet(b"this is not a workbook", "fake.xlsx")


def _inject_cached_value(path: Path, ref: str, formula: str, cached: str) -> None:
    """Replace a formula cell with one carrying a cached string result (as Excel saves it)."""
    sheet_xml = "xl/worksheets/sheet1.xml"
    with zipfile.ZipFile(path) as src:
        entries = {name: src.read(name) for name in src.namelist()}
    xml = entries[sheet_xml].decode("utf-8")
    cell = f'<c r="{ref}" t="str"><f>{formula}</f><v>{cached}</v></c>'
    xml, count = re.subn(rf'<c r="{ref}"[^>]*?(?:/>|>.*?</c>)', cell, xml, count=1, flags=re.DOTALL)
    assert count == 1
    entries[sheet_xml] = xml.encode("utf-8")
    with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as dst:
        for name, data in entries.items():
            dst.writestr(name, data)


def test_formula_cell_reads_cached_value(datasheet):
    path = datasheet("formula.xlsx", [("Supply voltage", '=CONCAT("12V"," DC")', "12V DC")])
    _inject_cached_value(path, "D3", 'CONCAT("12V"," DC")', "12V DC")
    row = next(iter_worksheet_rows(read_first_sheet(path.read_bytes(), path.name)))
    # 数式ではなくキャッシュ値が比較対象
    assert row.technical == "12V DC"
    assert row.technical == row.vendor


def test_boolean_cells_read_lower_case(datasheet):
    path = datasheet("flags.xlsx", [("Space heater", True, "true"), ("Lifting lugs", False, "FALSE")])
    rows = list(iter_worksheet_rows(read_first_sheet(path.read_bytes())))
    assert (rows[0].technical, rows[0].vendor) == ("true", "true")
    assert rows[1].technical == "false"
