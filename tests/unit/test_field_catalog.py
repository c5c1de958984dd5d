from __future__ import annotations

import pytest

from catalog_import.inference.field_catalog import (
    PRODUCT_FIELDS,
    CatalogError,
    extend_catalog,
    get_field,
    get_product_fields,
    required_fields,
)
from catalog_import.models.data_types import FieldType


def test_catalog_order_and_keys():
    assert [f.key for f in get_product_fields()] == [
        "name", "category", "sku", "barcode", "price", "cost_price",
        "stock_quantity", "min_stock_level", "unit", "weight", "description", "is_active",
    ]


def test_synonyms_are_lower_case():
    for f in PRODUCT_FIELDS:
        assert all(h == h.lower() for h in f.possible_headers), f.key


def test_no_synonym_claimed_twice():
    seen: dict[str, str] = {}
    for f in PRODUCT_FIELDS:
        for h in f.possible_headers:
            assert h not in seen, f"'{h}' in both {seen.get(h)} and {f.key}"
            seen[h] = f.key


def test_required_fields():
    assert [f.key for f in required_fields()] == ["name", "price"]


def test_field_types():
    assert get_field("price").data_type is FieldType.NUMBER
    assert get_field("is_active").data_type is FieldType.BOOLEAN
    assert get_field("barcode").data_type is FieldType.TEXT
    assert get_field("unknown") is None


def test_shared_words_owned_by_one_field():
    assert "cost" in get_field("cost_price").possible_headers
    assert "cost" not in get_field("price").possible_headers
    assert "description" in get_field("description").possible_headers
    assert "description" not in get_field("name").possible_headers


class TestExtendCatalog:
    def test_adds_synonyms_without_touching_the_base(self):
        extended = extend_catalog(PRODUCT_FIELDS, {"stock_quantity": ["Qty", " On Shelf "]})
        qty = get_field("stock_quantity", extended)
        assert {"qty", "on shelf"} <= qty.possible_headers
        assert "qty" not in get_field("stock_quantity").possible_headers

    def test_unknown_field_rejected(self):
        with pytest.raises(CatalogError, match="unknown product field"):
            extend_catalog(PRODUCT_FIELDS, {"colour": ["color"]})

    def test_collision_rejected(self):
        with pytest.raises(CatalogError, match="claimed by both"):
            extend_catalog(PRODUCT_FIELDS, {"price": ["cost"]})

    def test_blank_synonyms_ignored(self):
        extended = extend_catalog(PRODUCT_FIELDS, {"unit": ["  "]})
        assert get_field("unit", extended).possible_headers == get_field("unit").possible_headers


def test_matches_exactly_is_case_insensitive():
    price = get_field("price")
    assert price.matches_exactly("Selling Price")
    assert price.matches_exactly("UNIT_PRICE")
    assert not price.matches_exactly("Price (USD)")
