from __future__ import annotations

import argparse
import os
import sys
from itertools import islice
from pathlib import Path

from dotenv import load_dotenv

from datasheet_checker.config.loader import ConfigError, resolve_config
from datasheet_checker.logging.error_log import ErrorLogBuffer
from datasheet_checker.logging.init import log_summary, set_debug, setup_logging
from datasheet_checker.models.check_result import CheckStatus
from datasheet_checker.models.config_models import CheckerConfig
from datasheet_checker.services.orchestrator import check_file
from datasheet_checker.services.report import save_report
from datasheet_checker.services.summary import render_summary_fields

"""CLI entrypoint.

Thin shell around the check core:
- Load .env and config
- Read the selected datasheet and run the check
- Write the mismatch report (if any) into the output directory
- Print the SUMMARY line and map the outcome to an exit code
"""

EXIT_NO_MISMATCHES = 0
EXIT_FATAL = 1
EXIT_MISMATCHES = 2

OUTPUT_DIR_ENV_VAR = "DATASHEET_CHECKER_OUTPUT_DIR"
INSPECT_ROWS = 5


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env using python-dotenv.

    失敗時は警告を出すのみで続行。
    """
    try:
        if path.exists():
            load_dotenv(dotenv_path=path, override=override)
    except OSError as e:  # pragma: no cover
        print(f"WARNING: failed to load .env via python-dotenv: {e}")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="datasheet-checker",
        description="Check vendor datasheet values against technical requirements",
    )
    p.add_argument("file", nargs="?", help="Vendor-completed datasheet (.xlsx / .xls)")
    p.add_argument("--output-dir", type=Path, help="Directory for the mismatch report")
    p.add_argument("--config", type=Path, help="YAML config file (default: config/checker.yml)")
    p.add_argument("--mime-type", help="MIME type reported by the uploader")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print the first data rows then exit")
    return p.parse_args(argv)


def _inspect_data(path: Path | None, cfg: CheckerConfig) -> int:
    from datasheet_checker.excel.reader import WorkbookReadError, iter_worksheet_rows, read_first_sheet

    if path is None:
        print("inspect: no file given")
        return EXIT_FATAL
    try:
        frame = read_first_sheet(path.read_bytes(), path.name)
    except (OSError, WorkbookReadError) as e:
        print(f"inspect: read_error: {e}")
        return EXIT_FATAL
    print(f"FILE: {path.name} rows={frame.shape[0]} cols={frame.shape[1]}")
    for row in islice(iter_worksheet_rows(frame, cfg.columns, cfg.first_data_row), INSPECT_ROWS):
        print(f"  row={row.row_number} description={row.description!r} "
              f"technical={row.technical!r} vendor={row.vendor!r}")
    return EXIT_NO_MISMATCHES


def _output_directory(args: argparse.Namespace, cfg: CheckerConfig) -> Path:
    # 優先順位: --output-dir > 環境変数 > config > カレント
    if args.output_dir is not None:
        return args.output_dir
    env_dir = os.getenv(OUTPUT_DIR_ENV_VAR)
    if env_dir:
        return Path(env_dir)
    if cfg.report.output_directory:
        return Path(cfg.report.output_directory)
    return Path(".")


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む (テストで main([]) を渡すケース)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    try:
        cfg = resolve_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    path = Path(args.file) if args.file else None
    if args.inspect_data:
        return _inspect_data(path, cfg)

    if path is not None:
        logger.info(f"Checking datasheet: {path}")
    error_log = ErrorLogBuffer()
    result = check_file(path, mime_type=args.mime_type, config=cfg, error_log=error_log)

    try:
        error_log.flush()
    except OSError as e:
        # Don't fail the run if error log flush fails
        logger.debug(f"error log flush failed: {e}")

    if result.report is not None:
        try:
            target = save_report(result.report, _output_directory(args, cfg))
        except OSError as e:
            logger.error(f"failed to write report: {e}")
            return EXIT_FATAL
        logger.info(f"Mismatch report written: {target}")

    log_summary(render_summary_fields(result))

    if result.status is CheckStatus.FAILED:
        return EXIT_FATAL
    if result.status is CheckStatus.MISMATCHES_FOUND:
        return EXIT_MISMATCHES
    return EXIT_NO_MISMATCHES
