from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

"""ColumnMapping domain model produced by the mapping scorer."""

__all__ = [
    "ColumnMapping",
]


@dataclass(frozen=True)
class ColumnMapping:
    """Suggested assignment of one spreadsheet column to one product field.

    At most one mapping exists per column. Several columns may point at the
    same product field; resolving that is left to the reviewer.
    """
    excel_column_index: int  # ExcelColumn.index of the mapped column
    product_field: str  # ProductField.key
    confidence: float  # heuristic score in (0.3, 1.0]
    transformation: Callable[[Any], Any]  # coercer for the field's data type
