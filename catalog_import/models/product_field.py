from __future__ import annotations

from dataclasses import dataclass

from .data_types import FieldType

"""ProductField domain model (one entry of the field catalog)."""

__all__ = [
    "ProductField",
]


@dataclass(frozen=True)
class ProductField:
    """Canonical product attribute a spreadsheet column can be mapped to."""
    key: str  # canonical id, e.g. "cost_price"
    label: str  # human readable label for review screens
    required: bool
    data_type: FieldType
    possible_headers: frozenset[str]  # lower-cased header synonyms

    def matches_exactly(self, header: str) -> bool:
        return header.lower() in self.possible_headers
