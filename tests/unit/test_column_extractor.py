from __future__ import annotations

from catalog_import.inference.column_extractor import extract_columns, sample_column
from catalog_import.models.data_types import ColumnType


def test_skipped_headers_keep_grid_index():
    grid = [
        ["", "Name", "", "Price"],
        ["x", "Apple", "y", "3.50"],
    ]
    columns = extract_columns(grid, 0)
    assert [c.index for c in columns] == [1, 3]
    assert [c.header for c in columns] == ["Name", "Price"]


def test_headers_are_trimmed_and_whitespace_only_skipped():
    grid = [["  Name  ", "   ", None], ["Apple", "x", "y"]]
    columns = extract_columns(grid, 0)
    assert len(columns) == 1
    assert columns[0].header == "Name"
    assert columns[0].index == 0


def test_samples_limited_to_three_rows():
    grid = [["Qty"], ["1"], ["2"], ["3"], ["4"], ["5"]]
    (col,) = extract_columns(grid, 0)
    assert col.sample_values == ["1", "2", "3"]
    assert col.data_type is ColumnType.NUMBER


def test_short_rows_are_skipped_without_error():
    grid = [
        ["Name", "Price"],
        ["Apple"],
        [],
        ["Bread", "2.00"],
    ]
    columns = extract_columns(grid, 0)
    price = columns[1]
    assert price.index == 1
    assert price.sample_values == ["2.00"]


def test_samples_start_right_after_header_row(product_grid):
    columns = extract_columns(product_grid, 2)
    assert [c.header for c in columns] == ["Product Name", "Category", "Selling Price", "Stock", "Unit"]
    assert columns[2].sample_values == ["12.50", "8.99", "2.10"]
    assert columns[4].sample_values == ["kg", "l", "pcs"]


def test_empty_cells_sampled_as_empty_strings():
    grid = [["Notes"], [None], [""], ["ok"]]
    (col,) = extract_columns(grid, 0)
    assert col.sample_values == ["", "", "ok"]


def test_numeric_cells_sampled_as_text():
    grid = [["Price", "Stock"], [3.5, 10]]
    columns = extract_columns(grid, 0)
    assert columns[0].sample_values == ["3.5"]
    assert columns[1].sample_values == ["10"]


def test_header_only_grid_has_no_samples():
    (col,) = extract_columns([["Barcode"]], 0)
    assert col.sample_values == []
    assert col.data_type is ColumnType.TEXT


def test_header_index_beyond_grid():
    assert extract_columns([["Name"]], 3) == []


def test_grid_not_mutated():
    grid = [["  Name "], [" Apple "]]
    extract_columns(grid, 0)
    assert grid == [["  Name "], [" Apple "]]


def test_sample_column_custom_size():
    grid = [["A"], ["1"], ["2"], ["3"]]
    assert sample_column(grid, 0, 0, sample_size=2) == ["1", "2"]
