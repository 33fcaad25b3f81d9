from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from ..excel.reader import WorkbookReadError, is_supported_upload, read_first_sheet
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.check_result import CheckResult, CheckStatus, CollectionStats, ReportFile
from ..models.config_models import CheckerConfig
from ..models.mismatch_record import MismatchRecord
from .collector import collect_from_sheet
from .report import render_report

logger = logging.getLogger(__name__)

"""Check orchestration for the datasheet mismatch checker.

This is the boundary between the core and the shell that obtains the upload:

1. Validate that a file was provided and that it is an Excel workbook
2. Parse the first worksheet from the raw bytes
3. Collect mismatches (rows 3..N)
4. Render the report when at least one mismatch exists

Every failure is converted into a FAILED CheckResult carrying one of the
user-displayable messages below; nothing escapes check_upload(). There is no
partial success: a report only exists once every row has been classified.
"""

NO_FILE_MESSAGE = "No file selected."
UNSUPPORTED_FORMAT_MESSAGE = "Unsupported file format. Please upload an Excel file."
READ_FAILURE_MESSAGE = "Failed to read file data."
PROCESSING_FAILURE_PREFIX = "Error processing Excel file: "


class CheckError(Exception):
    """Base exception for check errors (message is user-displayable)."""
    error_type = "PROCESSING_FAILURE"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NoFileError(CheckError):
    error_type = "NO_FILE"

    def __init__(self) -> None:
        super().__init__(NO_FILE_MESSAGE)


class UnsupportedFormatError(CheckError):
    error_type = "UNSUPPORTED_FORMAT"

    def __init__(self) -> None:
        super().__init__(UNSUPPORTED_FORMAT_MESSAGE)


class FileReadError(CheckError):
    error_type = "READ_FAILURE"

    def __init__(self) -> None:
        super().__init__(READ_FAILURE_MESSAGE)


class ProcessingError(CheckError):
    error_type = "PROCESSING_FAILURE"

    def __init__(self, detail: str) -> None:
        super().__init__(f"{PROCESSING_FAILURE_PREFIX}{detail}")
        self.detail = detail


def _failed_result(
    file_name: str,
    error: CheckError,
    start_time: datetime,
    error_log: ErrorLogBuffer | None,
) -> CheckResult:
    logger.error("%s: %s", file_name or "<no file>", error.message)
    if error_log is not None:
        error_log.append(ErrorRecord.create(file=file_name, error_type=error.error_type, message=error.message))
    return CheckResult(
        file_name=file_name,
        status=CheckStatus.FAILED,
        start_time=start_time,
        end_time=datetime.now(UTC),
        error=error.message,
        error_type=error.error_type,
    )


def _run_check(
    data: bytes | None,
    filename: str,
    mime_type: str | None,
    config: CheckerConfig,
    stats: CollectionStats,
) -> tuple[list[MismatchRecord], ReportFile | None]:
    if data is None:
        raise NoFileError()
    if not is_supported_upload(filename, mime_type):
        raise UnsupportedFormatError()
    if not data:
        raise FileReadError()

    try:
        frame = read_first_sheet(data, filename)
    except WorkbookReadError as e:
        raise ProcessingError(str(e)) from e
    logger.debug("%s: first sheet parsed (%d rows x %d cols)", filename, frame.shape[0], frame.shape[1])

    records = collect_from_sheet(frame, config, stats=stats)
    if not records:
        logger.info("%s: No mismatches found.", filename)
        return records, None

    report = render_report(records, filename, sheet_name=config.report.sheet_name)
    logger.info("%s: %d mismatches -> %s", filename, len(records), report.filename)
    return records, report


def check_upload(
    data: bytes | None,
    filename: str,
    *,
    mime_type: str | None = None,
    config: CheckerConfig | None = None,
    error_log: ErrorLogBuffer | None = None,
) -> CheckResult:
    """Check one uploaded datasheet held in memory.

    Args:
        data: Raw file bytes (None = no file provided)
        filename: Original file name (used for format check and report name)
        mime_type: MIME type reported by the uploader, if any
        config: Checker configuration (defaults when None)
        error_log: Optional buffer receiving an ErrorRecord on failure

    Returns:
        CheckResult; status FAILED carries the user-displayable error
    """
    start_time = datetime.now(UTC)
    cfg = config or CheckerConfig()
    stats = CollectionStats()
    try:
        records, report = _run_check(data, filename, mime_type, cfg, stats)
    except CheckError as e:
        return _failed_result(filename, e, start_time, error_log)
    except Exception as e:
        # 分類/レポート生成中の想定外例外もここで回収 (部分成功なし)
        logger.debug("unexpected failure while checking %s", filename, exc_info=True)
        return _failed_result(filename, ProcessingError(str(e) or type(e).__name__), start_time, error_log)

    return CheckResult(
        file_name=filename,
        status=CheckStatus.MISMATCHES_FOUND if records else CheckStatus.NO_MISMATCHES,
        start_time=start_time,
        end_time=datetime.now(UTC),
        records=records,
        report=report,
        rows_scanned=stats.scanned,
        rows_ignored=stats.ignored,
        rows_matched=stats.matched,
    )


def check_file(
    path: Path | None,
    *,
    mime_type: str | None = None,
    config: CheckerConfig | None = None,
    error_log: ErrorLogBuffer | None = None,
) -> CheckResult:
    """Read a datasheet from disk (open -> read fully -> close) and check it."""
    if path is None:
        return check_upload(None, "", mime_type=mime_type, config=config, error_log=error_log)

    start_time = datetime.now(UTC)
    if not is_supported_upload(path.name, mime_type):
        return _failed_result(path.name, UnsupportedFormatError(), start_time, error_log)
    try:
        with path.open("rb") as f:
            data = f.read()
    except OSError as e:
        logger.warning("%s: Error reading file: %s", path.name, e)
        return _failed_result(path.name, FileReadError(), start_time, error_log)
    return check_upload(data, path.name, mime_type=mime_type, config=config, error_log=error_log)
