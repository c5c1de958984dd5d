from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

"""Run result models for the bulk import CLI.

FileReport describes the inference outcome for one spreadsheet; ImportRunResult
aggregates a whole run and feeds the SUMMARY line.
"""

__all__ = [
    "FileStatus",
    "FileReport",
    "ImportRunResult",
]


class FileStatus(Enum):
    """Status of a file within a run.

    - SUCCESS: grid read and parsed
    - FAILED: file unreadable or empty
    """
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class FileReport:
    """Per-file inference summary."""
    file_name: str
    status: FileStatus
    elapsed_seconds: float
    header_row_index: int = 0
    total_rows: int = 0
    total_columns: int = 0
    mapped_columns: int = 0  # columns with any suggestion above the threshold
    selection: dict[int, str] = field(default_factory=dict)  # auto-applied column -> field
    missing_required: list[str] = field(default_factory=list)  # required field keys
    suggestions: list[dict[str, Any]] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        # JSON object keys must be strings
        data["selection"] = {str(k): v for k, v in self.selection.items()}
        return data


@dataclass(frozen=True)
class ImportRunResult:
    """Aggregated results of a CLI run."""
    success_files: int
    failed_files: int
    total_rows: int  # data rows across successful files
    total_columns: int
    mapped_columns: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_reports: list[FileReport] = field(default_factory=list)

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files
