from __future__ import annotations

from ..models.run_result import ImportRunResult

"""SUMMARY line rendering for the import CLI."""


def format_seconds(value: float) -> str:
    """Render seconds without scientific notation and without a trailing '.0'."""
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    return f"{value:.6f}".rstrip("0").rstrip(".")


def render_summary_line(result: ImportRunResult) -> str:
    """Render the SUMMARY line of a run.

    Format:
    SUMMARY files={total} success={success} failed={failed} rows={rows}
    columns={columns} mapped={mapped} elapsed_sec={elapsed}

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> result = ImportRunResult(
        ...     success_files=2, failed_files=1, total_rows=40, total_columns=9,
        ...     mapped_columns=7, start_time=t, end_time=t, elapsed_seconds=1.5,
        ... )
        >>> render_summary_line(result)
        'SUMMARY files=3 success=2 failed=1 rows=40 columns=9 mapped=7 elapsed_sec=1.5'
    """
    return (
        f"SUMMARY files={result.total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"rows={result.total_rows} "
        f"columns={result.total_columns} "
        f"mapped={result.mapped_columns} "
        f"elapsed_sec={format_seconds(result.elapsed_seconds)}"
    )
