from __future__ import annotations

from collections.abc import Iterable, Mapping

from ..models.data_types import FieldType
from ..models.product_field import ProductField

"""Static catalog of canonical product fields.

Each field carries the lower-cased header synonyms it is recognised by. A
synonym belongs to exactly one field; overlap between fields only happens
through partial (substring) matches at scoring time.
"""

__all__ = [
    "CatalogError",
    "PRODUCT_FIELDS",
    "get_product_fields",
    "get_field",
    "required_fields",
    "extend_catalog",
]


class CatalogError(Exception):
    """Raised when a catalog definition is inconsistent."""


def _field(key: str, label: str, data_type: FieldType, headers: Iterable[str], *, required: bool = False) -> ProductField:
    return ProductField(
        key=key,
        label=label,
        required=required,
        data_type=data_type,
        possible_headers=frozenset(h.lower() for h in headers),
    )


def _check_unique_synonyms(fields: Iterable[ProductField]) -> None:
    owner: dict[str, str] = {}
    for f in fields:
        for header in f.possible_headers:
            if header in owner and owner[header] != f.key:
                raise CatalogError(
                    f"header synonym '{header}' claimed by both '{owner[header]}' and '{f.key}'"
                )
            owner[header] = f.key


PRODUCT_FIELDS: tuple[ProductField, ...] = (
    _field(
        "name", "Product Name", FieldType.TEXT,
        [
            "name", "product name", "product_name", "item name", "item_name",
            "product", "item", "title", "product title", "name of product",
            "item description",
        ],
        required=True,
    ),
    _field(
        "category", "Category", FieldType.TEXT,
        [
            "category", "type", "product type", "product_type", "classification",
            "group", "class", "department", "section",
        ],
    ),
    _field(
        "sku", "SKU", FieldType.TEXT,
        [
            "sku", "product code", "product_code", "code", "item code",
            "item_code", "product id", "product_id", "id", "reference",
        ],
    ),
    _field(
        "barcode", "Barcode", FieldType.TEXT,
        [
            "barcode", "barcode number", "barcode_number", "upc", "ean",
            "isbn", "product barcode", "product_barcode",
        ],
    ),
    _field(
        "price", "Price", FieldType.NUMBER,
        [
            "price", "prices", "selling price", "selling_price", "retail price",
            "retail_price", "unit price", "unit_price", "amount", "value",
            "price per unit", "price_per_unit",
        ],
        required=True,
    ),
    _field(
        "cost_price", "Cost Price", FieldType.NUMBER,
        [
            "cost price", "cost_price", "bought price", "bought_price",
            "purchase price", "purchase_price", "wholesale price", "wholesale_price",
            "cost", "buying price", "buying_price", "unit cost", "unit_cost",
        ],
    ),
    _field(
        "stock_quantity", "Stock Quantity", FieldType.NUMBER,
        [
            "stock", "quantity", "stock quantity", "stock_quantity", "inventory",
            "total quantity", "total_quantity", "available", "units left", "units_left",
            "unit left", "unit_left", "remaining", "on hand", "on_hand",
        ],
    ),
    _field(
        "min_stock_level", "Minimum Stock Level", FieldType.NUMBER,
        [
            "min stock", "min_stock", "minimum stock", "minimum_stock",
            "reorder level", "reorder_level", "low stock", "low_stock",
            "minimum quantity", "minimum_quantity", "min stock level", "min_stock_level",
        ],
    ),
    _field(
        "unit", "Unit", FieldType.TEXT,
        [
            "unit", "units", "measurement", "measure", "uom", "unit of measure",
            "unit_of_measure", "packaging", "package", "size",
        ],
    ),
    _field(
        "weight", "Weight", FieldType.NUMBER,
        [
            "weight", "mass", "kg", "kilogram", "grams", "g", "pounds", "lbs",
            "weight in kg", "weight_in_kg", "net weight", "net_weight",
        ],
    ),
    _field(
        "description", "Description", FieldType.TEXT,
        [
            "description", "details", "notes", "remarks", "info", "information",
            "product description", "product_description", "long description",
        ],
    ),
    _field(
        "is_active", "Active Status", FieldType.BOOLEAN,
        [
            "active", "status", "enabled", "in stock", "in_stock",
            "is active", "is_active", "active status", "active_status",
        ],
    ),
)

_check_unique_synonyms(PRODUCT_FIELDS)

_FIELDS_BY_KEY: dict[str, ProductField] = {f.key: f for f in PRODUCT_FIELDS}


def get_product_fields() -> tuple[ProductField, ...]:
    return PRODUCT_FIELDS


def get_field(key: str, fields: Iterable[ProductField] | None = None) -> ProductField | None:
    if fields is None:
        return _FIELDS_BY_KEY.get(key)
    for f in fields:
        if f.key == key:
            return f
    return None


def required_fields(fields: Iterable[ProductField] = PRODUCT_FIELDS) -> list[ProductField]:
    return [f for f in fields if f.required]


def extend_catalog(
    fields: Iterable[ProductField], extra_headers: Mapping[str, Iterable[str]]
) -> tuple[ProductField, ...]:
    """Return a new catalog with additional header synonyms per field key.

    Raises:
        CatalogError: unknown field key, or a synonym already owned by another field
    """
    base = tuple(fields)
    known = {f.key for f in base}
    unknown = set(extra_headers) - known
    if unknown:
        raise CatalogError(f"unknown product field(s): {sorted(unknown)}")

    extended = tuple(
        ProductField(
            key=f.key,
            label=f.label,
            required=f.required,
            data_type=f.data_type,
            possible_headers=f.possible_headers
            | frozenset(h.strip().lower() for h in extra_headers.get(f.key, ()) if h.strip()),
        )
        for f in base
    )
    _check_unique_synonyms(extended)
    return extended
