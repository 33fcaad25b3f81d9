#!/usr/bin/env python3
"""Sample datasheet generation script.

Generates a synthetic vendor-completed technical datasheet for manual runs and
performance testing. The generated workbook follows the layout the checker
expects:
- Row 1: Title row
- Row 2: Header row (Item | Description | Unit | Technical Requirement | Vendor Data)
- Row 3+: Data rows

A configurable share of rows gets vendor data that differs from the requirement
or is left empty, and some rows use ignored / furnish-marker requirements.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

HEADER = ["Item", "Description", "Unit", "Technical Requirement", "Vendor Data"]
REQUIREMENTS = ["12V DC", "24V DC", "IP65", "316 SS", "ATEX Zone 1", "4-20 mA", "PN16", "50 Hz"]
ALTERNATIVES = ["24V DC", "12V DC", "IP54", "304 SS", "ATEX Zone 2", "0-10 V", "PN10", "60 Hz"]
IGNORED = ["N/A", "0", "No", ""]
MARKERS = ["Vendor to furnish", "Designer to Furnish"]


def generate_rows(rows: int, mismatch_ratio: float, seed: int = 42) -> list[list[Any]]:
    """Generate datasheet data rows.

    Args:
        rows: Number of data rows to generate
        mismatch_ratio: Share (0..1) of ordinary rows with wrong/empty vendor data
        seed: Random seed for reproducible data

    Returns:
        List of rows matching HEADER
    """
    rng = np.random.default_rng(seed)
    data: list[list[Any]] = []
    for i in range(rows):
        description = f"Parameter {i + 1}"
        kind = rng.choice(["ordinary", "ignored", "marker"], p=[0.8, 0.1, 0.1])
        if kind == "ignored":
            technical = str(rng.choice(IGNORED))
            vendor = str(rng.choice(["", "anything", "N/A"]))
        elif kind == "marker":
            technical = str(rng.choice(MARKERS))
            vendor = "" if rng.random() < mismatch_ratio else f"Model X-{rng.integers(100, 999)}"
        else:
            idx = int(rng.integers(0, len(REQUIREMENTS)))
            technical = REQUIREMENTS[idx]
            if rng.random() < mismatch_ratio:
                vendor = "" if rng.random() < 0.5 else ALTERNATIVES[idx]
            else:
                vendor = technical
        data.append([i + 1, description, "-", technical, vendor])
    return data


def create_datasheet(
    output_path: Path,
    rows: int,
    mismatch_ratio: float = 0.1,
    title: str = "Technical Datasheet",
    seed: int = 42,
) -> None:
    """Create the datasheet workbook (title row, header row, data rows)."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    sheet_data: list[list[Any]] = [[title] + [""] * (len(HEADER) - 1), HEADER]
    sheet_data.extend(generate_rows(rows, mismatch_ratio, seed))

    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        pd.DataFrame(sheet_data).to_excel(writer, sheet_name="Datasheet", header=False, index=False)

    print(f"Created datasheet: {output_path}")
    print(f"  Data rows: {rows} (+ 2 header rows)")
    print(f"  Mismatch ratio: {mismatch_ratio:.0%}")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic vendor datasheet",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s sample.xlsx
  %(prog)s large.xlsx --rows 20000 --mismatch-ratio 0.05 --seed 7
        """,
    )
    parser.add_argument("output", type=Path, help="Output .xlsx path")
    parser.add_argument("--rows", type=int, default=200, help="Number of data rows (default: 200)")
    parser.add_argument(
        "--mismatch-ratio", type=float, default=0.1, help="Share of mismatching rows (default: 0.1)"
    )
    parser.add_argument("--title", default="Technical Datasheet", help="Title for first row")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    if not 0.0 <= args.mismatch_ratio <= 1.0:
        print("Error: --mismatch-ratio must be between 0 and 1", file=sys.stderr)
        return 1

    try:
        create_datasheet(args.output, args.rows, args.mismatch_ratio, args.title, args.seed)
    except OSError as e:
        print(f"Error generating datasheet: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
