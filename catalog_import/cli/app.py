from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..excel.reader import EmptyGridError, GridReadError, read_grid, sheet_names
from ..inference.parser import catalog_for, parse_grid
from ..logging.init import log_summary, set_debug, setup_logging
from ..models.import_settings import ImportSettings
from ..models.run_result import FileStatus, ImportRunResult
from ..services.orchestrator import ProcessingError, process_files, scan_import_files
from ..services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load config (config/import.yml when present, or --config)
- Expand the given paths into spreadsheet files
- Run column inference per file and log the suggested mappings
- Print the SUMMARY line (or JSON reports with --json)
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="catalog-import",
        description="Detect header rows and suggest product field mappings for spreadsheets",
    )
    p.add_argument("paths", nargs="+", type=Path, help="Spreadsheet files or directories")
    p.add_argument("--config", type=Path, default=None, help=f"YAML config (default: {DEFAULT_CONFIG_PATH} if present)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--json", action="store_true", help="Print per-file reports as JSON")
    p.add_argument("--inspect", action="store_true", help="Print detected columns & samples then exit")
    return p.parse_args(argv)


def _load_settings(config_path: Path | None) -> ImportSettings:
    if config_path is not None:
        return load_config(config_path)
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return ImportSettings()


def _inspect(paths: list[Path], settings: ImportSettings) -> int:
    try:
        files = scan_import_files(paths, settings.file_extensions)
    except ProcessingError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    if not files:
        print("inspect: no spreadsheet files")
        return EXIT_SUCCESS_ALL

    catalog = catalog_for(settings)
    for f in files:
        print(f"FILE: {f.name}")
        try:
            names = sheet_names(f)
            grid = read_grid(f, settings.sheet)
        except (GridReadError, EmptyGridError) as e:
            print(f"  read_error: {e}")
            continue
        if names:
            print(f"  sheets={names}")
        result = parse_grid(grid, settings, catalog)
        print(f"  header_row={result.header_row_index} rows={result.total_rows}")
        for col in result.columns:
            print(f"  [{col.index}] {col.header!r} type={col.data_type.value} samples={col.sample_values}")
    return EXIT_SUCCESS_ALL


def _log_reports(logger, result: ImportRunResult) -> None:
    for report in result.file_reports:
        if report.status is FileStatus.FAILED:
            continue
        logger.info(
            f"{report.file_name}: header_row={report.header_row_index} rows={report.total_rows} "
            f"columns={report.total_columns} mapped={report.mapped_columns}"
        )
        for s in report.suggestions:
            mark = "*" if s["column"] in report.selection else " "
            logger.info(f"  {mark} [{s['column']}] {s['header']!r} -> {s['field']} confidence={s['confidence']:.2f}")


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None only: an explicit [] from tests must not pick up pytest's own argv
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    try:
        settings = _load_settings(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.inspect:
        return _inspect(args.paths, settings)

    try:
        result = process_files(args.paths, settings)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    if args.json:
        print(json.dumps([r.to_dict() for r in result.file_reports], ensure_ascii=False, indent=2))
    else:
        _log_reports(logger, result)

    # log_summary adds the "SUMMARY " prefix itself
    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL
