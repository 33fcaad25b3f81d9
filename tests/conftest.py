# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path

import pytest
from openpyxl import Workbook

from datasheet_checker.logging.init import reset_logging

DataRows = Mapping[int, tuple[object, object, object]] | Iterable[tuple[object, object, object]]


def build_datasheet(
    path: Path,
    rows: DataRows,
    *,
    extra_sheets: Mapping[str, list[list[object]]] | None = None,
) -> Path:
    """Write a datasheet workbook: title row, header row, then (B, D, E) values.

    rows may be a mapping row_number -> (description, technical, vendor) to
    leave gaps, or a sequence written from row 3 onward.
    """
    wb = Workbook()
    ws = wb.active
    ws.title = "Datasheet"
    ws["A1"] = "Technical Datasheet - Pump P-101"
    for col, label in enumerate(["Item", "Description", "Unit", "Technical Requirement", "Vendor Data"], start=1):
        ws.cell(row=2, column=col, value=label)

    items = rows.items() if isinstance(rows, Mapping) else enumerate(rows, start=3)
    for row_number, (description, technical, vendor) in items:
        ws.cell(row=row_number, column=1, value=row_number - 2)
        ws.cell(row=row_number, column=2, value=description)
        ws.cell(row=row_number, column=4, value=technical)
        ws.cell(row=row_number, column=5, value=vendor)

    for name, sheet_rows in (extra_sheets or {}).items():
        extra = wb.create_sheet(name)
        for r in sheet_rows:
            extra.append(r)

    wb.save(path)
    return path


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        # .env / 設定ファイルの環境変数が漏れないように
        monkeypatch.delenv("DATASHEET_CHECKER_CONFIG", raising=False)
        monkeypatch.delenv("DATASHEET_CHECKER_OUTPUT_DIR", raising=False)
        yield p


@pytest.fixture()
def datasheet(temp_workdir: Path) -> Callable[..., Path]:
    """Factory writing a datasheet into ./data of the temp working directory."""
    def _make(name: str, rows: DataRows, **kwargs) -> Path:
        return build_datasheet(temp_workdir / "data" / name, rows, **kwargs)
    return _make


@pytest.fixture()
def sample_config_yaml() -> str:
    return """ignore_values: ["", "N/A", "0", "No", "TBD"]
furnish_markers: ["Vendor to furnish", "Designer to Furnish", "By others"]
first_data_row: 3
columns:
  description: B
  technical: D
  vendor: E
report:
  sheet_name: Mismatches
  output_directory: ./reports
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "checker.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def fresh_logging():
    reset_logging()
    yield
    reset_logging()
