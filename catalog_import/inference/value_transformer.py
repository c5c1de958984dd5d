from __future__ import annotations

import math
import re
from collections.abc import Callable, Sequence
from datetime import date, datetime
from typing import Any

import numpy as np
import pandas as pd

from ..models.data_types import ColumnType, FieldType

"""Value classification and coercion.

Two jobs live here:
- classify(): infer a ColumnType from a handful of sample strings
- coerce(): hand out the normalizer used by the import writer for a FieldType

Numbers are recognised the lenient way spreadsheets are filled in: everything
except digits, '.' and '-' is stripped ("$1,200.50" -> "1200.50") and the
leading float prefix is parsed ("1.2.3" -> 1.2).
"""

__all__ = [
    "cell_text",
    "parse_float_prefix",
    "is_numeric",
    "is_date_like",
    "has_scientific_notation",
    "classify",
    "coerce",
    "coerce_number",
    "coerce_boolean",
    "coerce_date",
    "coerce_text",
]

NON_NUMERIC_CHARS = re.compile(r"[^\d.-]")
FLOAT_PREFIX = re.compile(r"^\s*[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
SCIENTIFIC_MARKERS = ("E+", "e+", "E-", "e-")
TRUTHY_STRINGS = frozenset({"true", "yes", "1", "active"})

# A column is "number" / "date" only when more than this share of samples agree
MAJORITY_RATIO = 0.8


def cell_text(value: Any) -> str:
    """Render a grid cell as text; empty cells (None / NaN) become ""."""
    if value is None:
        return ""
    if isinstance(value, (float, np.floating)) and math.isnan(value):
        return ""
    if value is pd.NaT:
        return ""
    return str(value)


def parse_float_prefix(text: str) -> float | None:
    """Parse the leading float of `text` ("12kg" -> 12.0). None when absent."""
    m = FLOAT_PREFIX.match(text)
    if m is None:
        return None
    return float(m.group(0))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(value, bool)


def is_numeric(value: Any) -> bool:
    if _is_number(value):
        return math.isfinite(float(value))
    if not isinstance(value, str):
        return False
    parsed = parse_float_prefix(NON_NUMERIC_CHARS.sub("", value))
    return parsed is not None and math.isfinite(parsed)


def _to_timestamp(value: Any) -> pd.Timestamp | None:
    if isinstance(value, (datetime, date)):
        return pd.Timestamp(value)
    text = cell_text(value).strip()
    if not text:
        return None
    try:
        ts = pd.to_datetime(text, errors="coerce", format="mixed")
    except (ValueError, TypeError, OverflowError):
        return None
    if ts is pd.NaT or pd.isna(ts):
        return None
    return ts


def is_date_like(value: Any) -> bool:
    return _to_timestamp(value) is not None


def has_scientific_notation(value: Any) -> bool:
    text = cell_text(value)
    return any(marker in text for marker in SCIENTIFIC_MARKERS)


def classify(sample_values: Sequence[str]) -> ColumnType:
    """Infer the ColumnType of a column from its sample values.

    Any sample in exponential notation forces TEXT: spreadsheet tools turn long
    barcodes and IDs into "6.00617E+12" and those must not be read as numbers.
    """
    if not sample_values:
        return ColumnType.TEXT

    if any(has_scientific_notation(v) for v in sample_values):
        return ColumnType.TEXT

    total = len(sample_values)
    numeric_count = sum(1 for v in sample_values if is_numeric(v))
    date_count = sum(1 for v in sample_values if is_date_like(v))

    if numeric_count / total > MAJORITY_RATIO:
        return ColumnType.NUMBER
    if date_count / total > MAJORITY_RATIO:
        return ColumnType.DATE
    if 0 < numeric_count < total:
        return ColumnType.MIXED
    return ColumnType.TEXT


def coerce_number(value: Any) -> float:
    """Strip to [0-9.-] and parse; 0.0 when nothing parses."""
    if _is_number(value) and math.isfinite(float(value)):
        return float(value)
    parsed = parse_float_prefix(NON_NUMERIC_CHARS.sub("", cell_text(value)))
    if parsed is None or not math.isfinite(parsed):
        return 0.0
    return parsed


def coerce_boolean(value: Any) -> bool:
    return cell_text(value).lower() in TRUTHY_STRINGS


def coerce_date(value: Any) -> datetime:
    """Parse a date; unparseable input falls back to the current time."""
    ts = _to_timestamp(value)
    if ts is None:
        return datetime.now()
    return ts.to_pydatetime()


def coerce_text(value: Any) -> str:
    return cell_text(value).strip()


_COERCERS: dict[FieldType, Callable[[Any], Any]] = {
    FieldType.NUMBER: coerce_number,
    FieldType.BOOLEAN: coerce_boolean,
    FieldType.DATE: coerce_date,
    FieldType.TEXT: coerce_text,
}


def coerce(data_type: FieldType) -> Callable[[Any], Any]:
    """Return the normalizer for a field data type (text for anything unknown)."""
    return _COERCERS.get(data_type, coerce_text)
