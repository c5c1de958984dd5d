"""Spreadsheet column inference for bulk product import.

Typical use::

    from catalog_import import parse_grid
    result = parse_grid(rows)
    for mapping in result.suggested_mappings:
        ...
"""

from .inference import EmptyGridError, classify, coerce, get_product_fields, parse_grid
from .models import ColumnMapping, ColumnType, ExcelColumn, FieldType, ParseResult, ProductField

__version__ = "0.1.0"

__all__ = [
    "ColumnMapping",
    "ColumnType",
    "EmptyGridError",
    "ExcelColumn",
    "FieldType",
    "ParseResult",
    "ProductField",
    "classify",
    "coerce",
    "get_product_fields",
    "parse_grid",
]
