from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from ..models.import_settings import ImportSettings
from ..models.parse_result import ParseResult
from ..models.product_field import ProductField
from .column_extractor import extract_columns
from .field_catalog import PRODUCT_FIELDS, extend_catalog
from .header_detector import EmptyGridError, detect_header_row
from .mapping_scorer import score_all

"""Inference pipeline entrypoint: grid -> ParseResult.

Pure and synchronous; the same grid always yields an equal ParseResult.
"""

__all__ = [
    "parse_grid",
    "catalog_for",
]

logger = logging.getLogger(__name__)


def catalog_for(settings: ImportSettings) -> tuple[ProductField, ...]:
    """Field catalog for `settings`, including configured extra synonyms."""
    if not settings.extra_headers:
        return PRODUCT_FIELDS
    return extend_catalog(PRODUCT_FIELDS, settings.extra_headers)


def parse_grid(
    grid: Sequence[Sequence[Any]],
    settings: ImportSettings | None = None,
    fields: Iterable[ProductField] | None = None,
) -> ParseResult:
    """Detect the header row, extract columns and suggest field mappings.

    Raises:
        EmptyGridError: grid is None or has no rows
    """
    if not grid:
        raise EmptyGridError("grid is empty")
    settings = settings or ImportSettings()
    catalog = tuple(fields) if fields is not None else catalog_for(settings)

    header_row_index = detect_header_row(grid, settings.header_scan_rows)
    columns = extract_columns(grid, header_row_index, settings.sample_size)
    mappings = score_all(columns, catalog, settings.min_confidence)
    logger.debug(
        "parsed grid rows=%d header_row=%d columns=%d suggestions=%d",
        len(grid), header_row_index, len(columns), len(mappings),
    )
    return ParseResult(
        columns=columns,
        data=[list(row) for row in grid],
        header_row_index=header_row_index,
        total_rows=max(len(grid) - header_row_index - 1, 0),
        suggested_mappings=mappings,
    )
