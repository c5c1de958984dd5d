from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import Any

from ..models.import_settings import DEFAULT_HEADER_SCAN_ROWS
from .value_transformer import is_numeric

"""Header row detection.

Spreadsheets exported by hand often carry a title, a date line or blank rows
above the real header. Each of the first few rows is scored as a header
candidate:

    text ratio        x50  share of cells that are non-numeric text
    keyword ratio     x30  share of cells containing a product keyword
    consistent case   +20  all text cells UPPER, lower or Title Case

The highest score wins; ties keep the earliest row, and a scan where nothing
scores falls back to row 0.
"""

__all__ = [
    "EmptyGridError",
    "HEADER_KEYWORDS",
    "detect_header_row",
    "score_header_row",
    "case_style",
]

logger = logging.getLogger(__name__)

HEADER_KEYWORDS = (
    "name", "price", "quantity", "category", "sku", "barcode",
    "type", "unit", "description", "cost", "stock",
)

TEXT_WEIGHT = 50
KEYWORD_WEIGHT = 30
CONSISTENT_CASE_BONUS = 20

_WORD = re.compile(r"\w\S*")


class EmptyGridError(ValueError):
    """Raised when an empty (or missing) grid reaches the engine."""


def case_style(text: str) -> str:
    """Return 'upper', 'lower', 'title' or 'mixed' for a header cell."""
    if text == text.upper():
        return "upper"
    if text == text.lower():
        return "lower"
    titled = _WORD.sub(lambda m: m.group(0)[0].upper() + m.group(0)[1:].lower(), text)
    if text == titled:
        return "title"
    return "mixed"


def _has_consistent_case(row: Sequence[Any]) -> bool:
    text_cells = [c for c in row if isinstance(c, str) and c.strip()]
    if len(text_cells) < 2:
        return False
    first = case_style(text_cells[0])
    return all(case_style(c) == first for c in text_cells)


def score_header_row(row: Sequence[Any]) -> float:
    if not row:
        return 0.0
    width = len(row)

    text_count = sum(1 for c in row if isinstance(c, str) and c.strip() and not is_numeric(c))
    keyword_count = sum(
        1 for c in row
        if isinstance(c, str) and any(k in c.lower() for k in HEADER_KEYWORDS)
    )

    score = text_count / width * TEXT_WEIGHT
    score += keyword_count / width * KEYWORD_WEIGHT
    if _has_consistent_case(row):
        score += CONSISTENT_CASE_BONUS
    return score


def detect_header_row(grid: Sequence[Sequence[Any]], scan_rows: int = DEFAULT_HEADER_SCAN_ROWS) -> int:
    """Return the index of the most header-like row among the first `scan_rows`.

    Raises:
        EmptyGridError: grid is None or has no rows
    """
    if not grid:
        raise EmptyGridError("grid is empty")

    best_row = 0
    best_score = 0.0
    for i, row in enumerate(grid[:scan_rows]):
        score = score_header_row(row)
        logger.debug("header candidate row=%d score=%.2f", i, score)
        if score > best_score:
            best_score = score
            best_row = i
    return best_row
