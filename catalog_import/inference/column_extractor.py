from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from ..models.excel_column import ExcelColumn
from ..models.import_settings import DEFAULT_SAMPLE_SIZE
from .value_transformer import cell_text, classify

"""Column extraction from the detected header row."""

__all__ = [
    "extract_columns",
    "sample_column",
]

logger = logging.getLogger(__name__)


def sample_column(
    grid: Sequence[Sequence[Any]], header_row_index: int, column_index: int, sample_size: int = DEFAULT_SAMPLE_SIZE
) -> list[str]:
    """Collect up to `sample_size` values below the header, read positionally.

    Rows too short to reach `column_index` contribute nothing.
    """
    samples: list[str] = []
    for row in grid[header_row_index + 1 : header_row_index + 1 + sample_size]:
        if row is not None and column_index < len(row):
            samples.append(cell_text(row[column_index]))
    return samples


def extract_columns(
    grid: Sequence[Sequence[Any]], header_row_index: int, sample_size: int = DEFAULT_SAMPLE_SIZE
) -> list[ExcelColumn]:
    """Build one ExcelColumn per non-empty header cell.

    Empty headers are skipped and the remaining columns keep their grid index,
    so ["", "Name", "", "Price"] yields indices 1 and 3.
    """
    if header_row_index >= len(grid):
        return []

    columns: list[ExcelColumn] = []
    for index, cell in enumerate(grid[header_row_index]):
        header = cell_text(cell).strip()
        if not header:
            continue
        samples = sample_column(grid, header_row_index, index, sample_size)
        data_type = classify(samples)
        logger.debug("column index=%d header=%r type=%s samples=%r", index, header, data_type.value, samples)
        columns.append(
            ExcelColumn(index=index, header=header, sample_values=samples, data_type=data_type)
        )
    return columns
