from __future__ import annotations

from datetime import UTC, datetime

import pytest

from catalog_import.models.run_result import FileReport, FileStatus, ImportRunResult
from catalog_import.services.summary import format_seconds, render_summary_line


def _result(**overrides) -> ImportRunResult:
    t = datetime(2024, 1, 1, tzinfo=UTC)
    values = dict(
        success_files=1,
        failed_files=0,
        total_rows=3,
        total_columns=5,
        mapped_columns=5,
        start_time=t,
        end_time=t,
        elapsed_seconds=0.25,
    )
    values.update(overrides)
    return ImportRunResult(**values)


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, "0"),
        (0.0, "0"),
        (2.0, "2"),
        (1.5, "1.5"),
        (0.1234567, "0.123457"),
    ],
)
def test_format_seconds(value, expected):
    assert format_seconds(value) == expected


def test_render_summary_line():
    line = render_summary_line(_result())
    assert line == "SUMMARY files=1 success=1 failed=0 rows=3 columns=5 mapped=5 elapsed_sec=0.25"


def test_total_files_counts_failures():
    result = _result(success_files=2, failed_files=3)
    assert result.total_files == 5
    assert "files=5 success=2 failed=3" in render_summary_line(result)


def test_file_report_to_dict_is_json_ready():
    report = FileReport(
        file_name="products.xlsx",
        status=FileStatus.SUCCESS,
        elapsed_seconds=0.1,
        selection={0: "name", 2: "price"},
        missing_required=[],
    )
    data = report.to_dict()
    assert data["status"] == "success"
    assert data["selection"] == {"0": "name", "2": "price"}
    assert data["error"] is None
