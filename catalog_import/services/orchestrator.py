from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from ..excel.reader import EmptyGridError, GridReadError, read_grid
from ..inference.parser import catalog_for, parse_grid
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.import_settings import ImportSettings
from ..models.parse_result import ParseResult
from ..models.product_field import ProductField
from ..models.run_result import FileReport, FileStatus, ImportRunResult
from .mapping_review import auto_select, missing_required_fields
from .progress import FileProgress

"""Run orchestration for the import CLI.

For every spreadsheet: read the grid, run the inference pipeline, pre-select
high-confidence suggestions and report what is still missing. A failing file
is logged, recorded in the error log and does not stop the run.
"""

__all__ = [
    "ProcessingError",
    "scan_import_files",
    "build_file_report",
    "process_files",
]

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Fatal error that prevents a run from starting."""


def scan_import_files(paths: Iterable[Path], extensions: Iterable[str]) -> list[Path]:
    """Expand directories (non-recursive) into spreadsheet files.

    Explicit file paths are kept whatever their suffix; directory entries are
    filtered by `extensions`. Duplicates are dropped, order is preserved.

    Raises:
        ProcessingError: a path does not exist or a directory cannot be listed
    """
    wanted = {e.lower() for e in extensions}
    found: list[Path] = []
    for path in paths:
        if not path.exists():
            raise ProcessingError(f"path not found: {path}")
        if path.is_dir():
            try:
                entries = sorted(p for p in path.iterdir() if p.is_file() and p.suffix.lower() in wanted)
            except OSError as e:
                raise ProcessingError(f"error reading directory {path}: {e}") from e
            found.extend(entries)
        else:
            found.append(path)
    return list(dict.fromkeys(found))


def build_file_report(
    file_name: str,
    result: ParseResult,
    settings: ImportSettings,
    catalog: tuple[ProductField, ...],
    elapsed_seconds: float,
) -> FileReport:
    headers = {c.index: c.header for c in result.columns}
    selection = auto_select(result, settings.auto_apply_confidence)
    return FileReport(
        file_name=file_name,
        status=FileStatus.SUCCESS,
        elapsed_seconds=elapsed_seconds,
        header_row_index=result.header_row_index,
        total_rows=result.total_rows,
        total_columns=len(result.columns),
        mapped_columns=len(result.suggested_mappings),
        selection=selection,
        missing_required=[f.key for f in missing_required_fields(selection, catalog)],
        suggestions=[
            {
                "column": m.excel_column_index,
                "header": headers.get(m.excel_column_index, ""),
                "field": m.product_field,
                "confidence": round(m.confidence, 4),
            }
            for m in result.suggested_mappings
        ],
    )


def _failed_report(path: Path, error: str, elapsed: float) -> FileReport:
    return FileReport(file_name=path.name, status=FileStatus.FAILED, elapsed_seconds=elapsed, error=error)


def process_files(
    paths: Iterable[Path],
    settings: ImportSettings | None = None,
    error_log: ErrorLogBuffer | None = None,
) -> ImportRunResult:
    """Run column inference over every file in `paths`.

    Raises:
        ProcessingError: a given path is missing
    """
    settings = settings or ImportSettings()
    error_log = error_log if error_log is not None else ErrorLogBuffer()
    catalog = catalog_for(settings)
    files = scan_import_files(paths, settings.file_extensions)

    start_time = datetime.now(UTC)
    reports: list[FileReport] = []
    sheet_label = settings.sheet or ""

    with FileProgress(len(files)) as progress:
        for path in files:
            progress.start_file(path)
            t0 = time.perf_counter()
            try:
                grid = read_grid(path, settings.sheet)
                result = parse_grid(grid, settings, catalog)
            except EmptyGridError as e:
                logger.warning(f"{path.name}: {e}")
                error_log.append(ErrorRecord.create(path.name, sheet_label, -1, "EMPTY_FILE", str(e)))
                reports.append(_failed_report(path, str(e), time.perf_counter() - t0))
            except GridReadError as e:
                logger.error(f"{path.name}: {e}")
                error_log.append(ErrorRecord.create(path.name, sheet_label, -1, "READ_ERROR", str(e)))
                reports.append(_failed_report(path, str(e), time.perf_counter() - t0))
            else:
                report = build_file_report(path.name, result, settings, catalog, time.perf_counter() - t0)
                reports.append(report)
                if report.missing_required:
                    logger.warning(
                        f"{path.name}: required field(s) not auto-mapped: {', '.join(report.missing_required)}"
                    )
            progress.finish_file(ok=sum(r.status is FileStatus.SUCCESS for r in reports))

    log_path = error_log.flush()
    if log_path is not None:
        logger.info(f"error log written: {log_path}")

    end_time = datetime.now(UTC)
    succeeded = [r for r in reports if r.status is FileStatus.SUCCESS]
    return ImportRunResult(
        success_files=len(succeeded),
        failed_files=len(reports) - len(succeeded),
        total_rows=sum(r.total_rows for r in succeeded),
        total_columns=sum(r.total_columns for r in succeeded),
        mapped_columns=sum(r.mapped_columns for r in succeeded),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_reports=reports,
    )
