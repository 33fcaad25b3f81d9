from __future__ import annotations

from io import BytesIO

import pandas as pd

from datasheet_checker.models.mismatch_record import MismatchRecord
from datasheet_checker.services.report import render_report

"""Mismatch report layout contract.

Downstream users open the report in Excel or read it back with pandas; the
header labels, column order and the five record fields must survive.
"""

RECORDS = [
    MismatchRecord(3, "Motor nameplate", "Vendor to furnish", "", "Vendor data is empty"),
    MismatchRecord(11, "Control voltage", "12V DC", "24V DC", "Values do not match."),
]


def test_report_reads_back_with_pandas():
    report = render_report(RECORDS, "pump.xlsx")
    df = pd.read_excel(BytesIO(report.content), sheet_name=0, dtype=object, keep_default_na=False)
    assert list(df.columns) == ["Row", "Description", "Technical Requirement", "Vendor Data", "Error"]
    assert df["Row"].tolist() == [3, 11]
    assert df["Vendor Data"].tolist() == ["", "24V DC"]
    assert df["Error"].tolist() == ["Vendor data is empty", "Values do not match."]


def test_report_is_xlsx_zip():
    report = render_report(RECORDS, "pump.xlsx")
    assert report.content[:2] == b"PK"
    assert report.filename.endswith("-MismatchReport.xlsx")


def test_report_keeps_equals_prefixed_text():
    records = [MismatchRecord(7, "= 10 mm flange", ">= 50 bar", "=> 50 bar", "Values do not match.")]
    df = pd.read_excel(BytesIO(render_report(records, "pump.xlsx").content), sheet_name=0, dtype=object, keep_default_na=False)
    assert df.iloc[0].tolist() == [7, "= 10 mm flange", ">= 50 bar", "=> 50 bar", "Values do not match."]
