from __future__ import annotations

from enum import Enum

"""Data type enums shared by columns and product fields.

A spreadsheet column is classified from its samples into one of ColumnType;
a catalog field declares the FieldType it expects. The two sets overlap on
text/number/date, which is what the compatibility check compares.
"""

__all__ = [
    "ColumnType",
    "FieldType",
]


class ColumnType(Enum):
    """Inferred data type of a spreadsheet column."""
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    MIXED = "mixed"  # some, but not all, samples numeric


class FieldType(Enum):
    """Expected data type of a canonical product field."""
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"
