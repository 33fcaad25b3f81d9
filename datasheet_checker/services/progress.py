from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Row progress bar for long datasheets (tqdm, TTY only).

Piped output and CI logs get no bar at all, so the labeled log lines stay
grep-friendly. Counting still happens without a bar.
"""

__all__ = [
    "RowProgressTracker",
    "is_tty_enabled",
]

# 1 行で収まる ASCII バー、完了後は消す
_BAR_OPTIONS: dict[str, Any] = {
    "unit": "row",
    "disable": False,
    "leave": False,
    "position": 0,
    "ncols": 80,
    "ascii": True,
}


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class RowProgressTracker:
    """Counts classified rows and mismatches; drives a tqdm bar on a TTY."""

    def __init__(self, total_rows: int, *, description: str = "Checking rows") -> None:
        self.total_rows = total_rows
        self.current_row = 0
        self.mismatches = 0
        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None = (
            tqdm(total=total_rows, desc=description, **_BAR_OPTIONS) if self.enabled else None
        )

    def advance(self, mismatch: bool = False) -> None:
        self.current_row += 1
        self.mismatches += int(mismatch)
        if self.pbar is None:
            return
        self.pbar.update(1)
        if mismatch:
            self.pbar.set_postfix(mismatches=self.mismatches)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> RowProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
