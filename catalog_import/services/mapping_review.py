from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from ..inference.field_catalog import PRODUCT_FIELDS, get_field, required_fields
from ..inference.value_transformer import coerce, coerce_text, parse_float_prefix
from ..models.data_types import FieldType
from ..models.import_settings import DEFAULT_AUTO_APPLY_CONFIDENCE
from ..models.parse_result import ParseResult
from ..models.product_field import ProductField

"""Helpers between the suggestions and the import writer.

A *selection* is the reviewer's final choice: column index -> product field
key. It starts from the high-confidence suggestions (auto_select) and is then
edited by a human. apply_mappings turns data rows into product records using
the coercer of each selected field; it does not invent defaults.
"""

__all__ = [
    "auto_select",
    "missing_required_fields",
    "expand_scientific",
    "apply_mappings",
]


def auto_select(result: ParseResult, threshold: float = DEFAULT_AUTO_APPLY_CONFIDENCE) -> dict[int, str]:
    """Pre-select suggestions confident enough to apply without review."""
    return {
        m.excel_column_index: m.product_field
        for m in result.suggested_mappings
        if m.confidence > threshold
    }


def missing_required_fields(
    selection: Mapping[int, str], fields: Iterable[ProductField] = PRODUCT_FIELDS
) -> list[ProductField]:
    selected = set(selection.values())
    return [f for f in required_fields(fields) if f.key not in selected]


def expand_scientific(text: str) -> str:
    """Undo exponential formatting of long codes ("6.00617E+12" -> "6006170000000")."""
    if "E+" not in text and "e+" not in text:
        return text
    value = parse_float_prefix(text)
    if value is None:
        return text
    return f"{value:.0f}"


def _coerce_cell(value: Any, field: ProductField) -> Any:
    if field.data_type is FieldType.TEXT:
        return expand_scientific(coerce_text(value))
    return coerce(field.data_type)(value)


def apply_mappings(
    result: ParseResult,
    selection: Mapping[int, str],
    fields: Iterable[ProductField] = PRODUCT_FIELDS,
) -> list[dict[str, Any]]:
    """Build one record per data row from the selected columns.

    Cells missing from a short row (or None) are left out of the record.
    Unknown field keys in the selection are ignored.
    """
    catalog = tuple(fields)
    resolved: list[tuple[int, ProductField]] = []
    for column_index, key in sorted(selection.items()):
        field = get_field(key, catalog)
        if field is not None:
            resolved.append((column_index, field))

    records: list[dict[str, Any]] = []
    for row in result.data_rows():
        record: dict[str, Any] = {}
        for column_index, field in resolved:
            if column_index >= len(row) or row[column_index] is None:
                continue
            record[field.key] = _coerce_cell(row[column_index], field)
        records.append(record)
    return records
