from __future__ import annotations

from dataclasses import dataclass, field

"""Settings dataclass for the import engine and CLI.

Defaults reproduce the reference heuristics; a YAML config (see
catalog_import.config.loader) may override them.
"""

__all__ = [
    "ImportSettings",
    "DEFAULT_MIN_CONFIDENCE",
    "DEFAULT_AUTO_APPLY_CONFIDENCE",
    "DEFAULT_HEADER_SCAN_ROWS",
    "DEFAULT_SAMPLE_SIZE",
    "DEFAULT_FILE_EXTENSIONS",
]

DEFAULT_MIN_CONFIDENCE = 0.3
DEFAULT_AUTO_APPLY_CONFIDENCE = 0.6
DEFAULT_HEADER_SCAN_ROWS = 5
DEFAULT_SAMPLE_SIZE = 3
DEFAULT_FILE_EXTENSIONS = (".xlsx", ".xls", ".csv")


@dataclass(frozen=True)
class ImportSettings:
    """Tunables for header detection, scoring and file discovery."""
    min_confidence: float = DEFAULT_MIN_CONFIDENCE  # suggestions must score above this
    auto_apply_confidence: float = DEFAULT_AUTO_APPLY_CONFIDENCE  # pre-selected in review
    header_scan_rows: int = DEFAULT_HEADER_SCAN_ROWS
    sample_size: int = DEFAULT_SAMPLE_SIZE
    sheet: str | None = None  # None -> first worksheet
    file_extensions: tuple[str, ...] = DEFAULT_FILE_EXTENSIONS
    extra_headers: dict[str, list[str]] = field(default_factory=dict)  # field key -> synonyms
