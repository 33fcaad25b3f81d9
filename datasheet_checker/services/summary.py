from __future__ import annotations

from ..models.check_result import CheckResult

"""Summary line rendering service.

Format:
SUMMARY file={name} status={status} rows={scanned} ignored={ignored}
matched={matched} mismatches={count} elapsed_sec={elapsed}[ report={filename}]
"""


def _format_seconds(seconds: float) -> str:
    if seconds == int(seconds):
        return str(int(seconds))
    # 小さい値は指数表記を避ける
    digits = 6 if seconds < 0.01 else 3
    return f"{seconds:.{digits}f}".rstrip("0").rstrip(".")


def render_summary_fields(result: CheckResult) -> str:
    """key=value part of the SUMMARY line (without the label)."""
    fields = (
        f"file={result.file_name or '-'} "
        f"status={result.status.value} "
        f"rows={result.rows_scanned} "
        f"ignored={result.rows_ignored} "
        f"matched={result.rows_matched} "
        f"mismatches={result.mismatch_count} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
    if result.report is not None:
        fields += f" report={result.report.filename}"
    return fields


def render_summary_line(result: CheckResult) -> str:
    """Render a SUMMARY line from a CheckResult.

    Args:
        result: CheckResult of one check run

    Returns:
        Formatted SUMMARY line string

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> from datasheet_checker.models.check_result import CheckStatus
        >>> result = CheckResult(
        ...     file_name="pump.xlsx", status=CheckStatus.NO_MISMATCHES,
        ...     start_time=start, end_time=end, rows_scanned=10, rows_matched=10,
        ... )
        >>> render_summary_line(result)
        'SUMMARY file=pump.xlsx status=no_mismatches rows=10 ignored=0 matched=10 mismatches=0 elapsed_sec=2'
    """
    return f"SUMMARY {render_summary_fields(result)}"
