from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence

from ..models.column_mapping import ColumnMapping
from ..models.data_types import ColumnType, FieldType
from ..models.excel_column import ExcelColumn
from ..models.import_settings import DEFAULT_MIN_CONFIDENCE
from ..models.product_field import ProductField
from .field_catalog import PRODUCT_FIELDS
from .value_transformer import coerce, is_numeric, parse_float_prefix

"""Column -> product field scoring.

For each (column, field) pair the score is additive and capped at 1.0:

    header     +1.0 exact synonym, else +0.8 substring either way
    data type  +0.2 compatible, -0.3 otherwise
    samples    field-specific heuristic (0..0.9) x 0.3

Every column keeps its best field when that field scores above the minimum
confidence; other columns are left out of the suggestions. Several columns may
point at the same field.
"""

__all__ = [
    "EXACT_HEADER_SCORE",
    "PARTIAL_HEADER_SCORE",
    "header_score",
    "is_type_compatible",
    "sample_score",
    "score_pair",
    "best_mapping",
    "score_all",
]

logger = logging.getLogger(__name__)

EXACT_HEADER_SCORE = 1.0
PARTIAL_HEADER_SCORE = 0.8
COMPATIBLE_TYPE_SCORE = 0.2
INCOMPATIBLE_TYPE_PENALTY = -0.3
SAMPLE_WEIGHT = 0.3
MAX_CONFIDENCE = 1.0

UNIT_PATTERN = re.compile(r"^(kg|g|pcs|pieces|box|pack|liter|l|ml|gram|kilogram)$", re.IGNORECASE)


def header_score(header: str, field: ProductField) -> float:
    if field.matches_exactly(header):
        return EXACT_HEADER_SCORE
    header_lower = header.lower()
    for synonym in field.possible_headers:
        if synonym in header_lower or header_lower in synonym:
            return PARTIAL_HEADER_SCORE
    return 0.0


def is_type_compatible(column_type: ColumnType, field_type: FieldType) -> bool:
    if column_type.value == field_type.value:
        return True
    # numbers and mixed content can always be stored as text (barcodes, codes)
    return field_type is FieldType.TEXT and column_type in (ColumnType.MIXED, ColumnType.NUMBER)


def _fraction(samples: Sequence[str], predicate) -> float:
    return sum(1 for s in samples if predicate(s)) / len(samples)


def _is_whole_number(sample: str) -> bool:
    if not is_numeric(sample):
        return False
    value = parse_float_prefix(sample)
    return value is not None and value.is_integer()


def sample_score(samples: Sequence[str], field: ProductField) -> float:
    """Field-specific evidence from sample values, before weighting."""
    if not samples:
        return 0.0

    key = field.key
    if key == "name":
        avg_length = sum(len(s) for s in samples) / len(samples)
        return 0.5 if 3 < avg_length < 100 else 0.0
    if key in ("price", "cost_price"):
        return _fraction(samples, is_numeric) * 0.8
    if key == "stock_quantity":
        return _fraction(samples, _is_whole_number) * 0.7
    if key == "category":
        return _fraction(samples, lambda s: 0 < len(s) < 50 and not is_numeric(s)) * 0.6
    if key == "unit":
        return _fraction(samples, lambda s: UNIT_PATTERN.match(s) is not None) * 0.9
    return 0.0


def score_pair(column: ExcelColumn, field: ProductField) -> float:
    """Confidence in [.., 1.0] that `column` holds `field`."""
    score = header_score(column.header, field)
    if is_type_compatible(column.data_type, field.data_type):
        score += COMPATIBLE_TYPE_SCORE
    else:
        score += INCOMPATIBLE_TYPE_PENALTY
    score += sample_score(column.sample_values, field) * SAMPLE_WEIGHT
    return min(score, MAX_CONFIDENCE)


def best_mapping(
    column: ExcelColumn,
    fields: Iterable[ProductField] = PRODUCT_FIELDS,
    min_confidence: float = DEFAULT_MIN_CONFIDENCE,
) -> ColumnMapping | None:
    """Best field for one column, or None when nothing clears `min_confidence`.

    `min_confidence` can raise the threshold but never lower it below
    DEFAULT_MIN_CONFIDENCE. Fields tied on confidence are ordered by header
    evidence (exact synonym before substring), then by catalog order.
    """
    min_confidence = max(min_confidence, DEFAULT_MIN_CONFIDENCE)
    best: ProductField | None = None
    best_key = (float("-inf"), float("-inf"))
    for field in fields:
        confidence = score_pair(column, field)
        if confidence <= min_confidence:
            continue
        key = (confidence, header_score(column.header, field))
        if key > best_key:
            best, best_key = field, key

    if best is None:
        logger.debug("column index=%d header=%r left unmapped", column.index, column.header)
        return None
    return ColumnMapping(
        excel_column_index=column.index,
        product_field=best.key,
        confidence=best_key[0],
        transformation=coerce(best.data_type),
    )


def score_all(
    columns: Iterable[ExcelColumn],
    fields: Iterable[ProductField] = PRODUCT_FIELDS,
    min_confidence: float = DEFAULT_MIN_CONFIDENCE,
) -> list[ColumnMapping]:
    """Suggest one mapping per column, sorted by confidence (descending, stable)."""
    catalog = tuple(fields)
    mappings = [m for m in (best_mapping(c, catalog, min_confidence) for c in columns) if m is not None]
    return sorted(mappings, key=lambda m: m.confidence, reverse=True)
