from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .column_mapping import ColumnMapping
from .excel_column import ExcelColumn

"""ParseResult domain model, the terminal artifact of the inference pipeline."""

__all__ = [
    "ParseResult",
]


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing one grid.

    `data` is the grid exactly as received, header and pre-header rows included.
    `total_rows` counts the rows after the header row.
    """
    columns: list[ExcelColumn]
    data: list[list[Any]]
    header_row_index: int
    total_rows: int
    suggested_mappings: list[ColumnMapping]  # sorted by confidence, descending

    def data_rows(self) -> list[list[Any]]:
        """Rows following the header row."""
        return self.data[self.header_row_index + 1 :]

    def mapping_for(self, column_index: int) -> ColumnMapping | None:
        for mapping in self.suggested_mappings:
            if mapping.excel_column_index == column_index:
                return mapping
        return None
