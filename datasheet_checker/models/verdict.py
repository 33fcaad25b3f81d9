from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""Row classification outcome.

The classifier returns a tagged RowOutcome instead of appending to a list, so
the decision can be unit tested without any workbook.

    IGNORE   -> row excluded entirely (not even counted as a match)
    MATCH    -> vendor data accepted
    MISMATCH -> vendor data missing or different; reason is always set
"""

__all__ = [
    "Verdict",
    "RowOutcome",
]


class Verdict(Enum):
    IGNORE = "ignore"
    MATCH = "match"
    MISMATCH = "mismatch"


@dataclass(frozen=True)
class RowOutcome:
    verdict: Verdict
    reason: str | None = None

    def __post_init__(self) -> None:
        if self.verdict is Verdict.MISMATCH and not self.reason:
            raise ValueError("mismatch outcome requires a reason")
        if self.verdict is not Verdict.MISMATCH and self.reason is not None:
            raise ValueError(f"{self.verdict.value} outcome cannot carry a reason")

    @classmethod
    def ignore(cls) -> RowOutcome:
        return cls(Verdict.IGNORE)

    @classmethod
    def match(cls) -> RowOutcome:
        return cls(Verdict.MATCH)

    @classmethod
    def mismatch(cls, reason: str) -> RowOutcome:
        return cls(Verdict.MISMATCH, reason)

    @property
    def is_mismatch(self) -> bool:
        return self.verdict is Verdict.MISMATCH
