"""Domain models for the spreadsheet column-inference engine.

The inference pipeline produces ExcelColumn, ColumnMapping and ParseResult
instances; the CLI layer adds ImportSettings and the run result models.
"""

from .column_mapping import ColumnMapping
from .data_types import ColumnType, FieldType
from .error_record import ErrorRecord
from .excel_column import ExcelColumn
from .import_settings import ImportSettings
from .parse_result import ParseResult
from .product_field import ProductField
from .run_result import FileReport, FileStatus, ImportRunResult

__all__ = [
    # Inference models
    "ColumnType",
    "FieldType",
    "ExcelColumn",
    "ProductField",
    "ColumnMapping",
    "ParseResult",
    # Run models
    "ErrorRecord",
    "ImportSettings",
    "FileStatus",
    "FileReport",
    "ImportRunResult",
]
