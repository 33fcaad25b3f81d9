from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pandas as pd

"""Cell text normalization.

Every cell the checker reads goes through cell_text() so that formula-derived
and literal cells compare equally. Priority order:

    computed result > display text > stringified scalar > ""

A "computed" cell is any mapping with result/text keys or any object exposing
result/text attributes (formula wrappers handed over by a spreadsheet
library or a caller). Plain scalars are stringified directly.
"""

__all__ = [
    "cell_text",
]

_SHAPE_KEYS = ("result", "text")


def _is_missing(value: Any) -> bool:
    # pd.isna は配列だと配列を返すのでスカラー限定
    return pd.api.types.is_scalar(value) and bool(pd.isna(value))


def _scalar_text(value: Any) -> str:
    if isinstance(value, bool):
        # TRUE/FALSE セルは小文字で比較
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        # 12.0 -> "12" (Excel 上の表示に合わせる)
        return str(int(value))
    return str(value).strip()


def _shape_text(result: Any, text: Any) -> str:
    if result is not None and not _is_missing(result):
        return _scalar_text(result)
    if text:
        return str(text).strip()
    return ""


def cell_text(value: Any) -> str:
    """Return the trimmed comparable text of a raw cell value.

    Args:
        value: None, a plain scalar, or a computed-cell shape

    Returns:
        Trimmed string; "" for absent cells or shapes without result/text
    """
    if value is None or _is_missing(value):
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, Mapping):
        return _shape_text(value.get("result"), value.get("text"))
    if any(hasattr(value, key) for key in _SHAPE_KEYS):
        return _shape_text(getattr(value, "result", None), getattr(value, "text", None))
    return _scalar_text(value)
