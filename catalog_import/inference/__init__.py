"""Spreadsheet column inference: header detection, column typing and field mapping."""

from .column_extractor import extract_columns
from .field_catalog import PRODUCT_FIELDS, CatalogError, get_product_fields
from .header_detector import EmptyGridError, detect_header_row
from .mapping_scorer import score_all
from .parser import parse_grid
from .value_transformer import classify, coerce

__all__ = [
    "PRODUCT_FIELDS",
    "CatalogError",
    "EmptyGridError",
    "classify",
    "coerce",
    "detect_header_row",
    "extract_columns",
    "get_product_fields",
    "parse_grid",
    "score_all",
]
