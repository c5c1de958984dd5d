from __future__ import annotations

from dataclasses import dataclass

from .data_types import ColumnType

"""ExcelColumn domain model.

One ExcelColumn is created per non-empty header cell of the detected header row.
"""

__all__ = [
    "ExcelColumn",
]


@dataclass(frozen=True)
class ExcelColumn:
    """Descriptor of a single spreadsheet column.

    `index` is the 0-based position of the header cell in the grid row, not the
    position of this column in the extracted list. Columns with empty headers are
    skipped, so indices may be non-contiguous.
    """
    index: int  # back-reference into the grid
    header: str  # trimmed header text
    sample_values: list[str]  # up to 3 cells following the header row
    data_type: ColumnType
