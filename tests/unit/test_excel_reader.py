from __future__ import annotations

from datetime import datetime
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from catalog_import.excel.reader import (
    EmptyGridError,
    GridReadError,
    frame_to_grid,
    read_grid,
    sheet_names,
)
from catalog_import.inference.value_transformer import classify
from catalog_import.models.data_types import ColumnType


def test_read_xlsx_as_text_grid(excel_factory):
    path = excel_factory(
        "products.xlsx",
        {
            "Products": [
                ["Price list 2024", None, None],
                ["Name", "Price", "Stock"],
                ["Apple", 3.5, 10],
                ["NA", 1.2, 25],
            ]
        },
    )
    grid = read_grid(path)
    assert grid[0] == ["Price list 2024", "", ""]
    assert grid[1] == ["Name", "Price", "Stock"]
    assert grid[2] == ["Apple", "3.5", "10"]
    # "NA" stays a string
    assert grid[3][0] == "NA"


def test_first_sheet_by_default_and_named_sheet(excel_factory):
    path = excel_factory(
        "multi.xlsx",
        {
            "A": [["Name"], ["first"]],
            "B": [["Name"], ["second"]],
        },
    )
    assert read_grid(path)[1] == ["first"]
    assert read_grid(path, sheet="B")[1] == ["second"]
    assert sheet_names(path) == ["A", "B"]


def test_unknown_sheet(excel_factory):
    path = excel_factory("one.xlsx", {"A": [["Name"], ["x"]]})
    with pytest.raises(GridReadError, match="sheet 'Missing' not found"):
        read_grid(path, sheet="Missing")


def test_csv_with_ragged_rows(temp_workdir: Path):
    path = temp_workdir / "data" / "export.csv"
    path.write_text("Stock export\nName,Price,Unit\nRice,12.50,kg\nTea,3\n", encoding="utf-8")
    grid = read_grid(path)
    assert grid[0] == ["Stock export", "", ""]
    assert grid[1] == ["Name", "Price", "Unit"]
    assert grid[3] == ["Tea", "3", ""]


def test_empty_csv(temp_workdir: Path):
    path = temp_workdir / "data" / "empty.csv"
    path.write_text("", encoding="utf-8")
    with pytest.raises(EmptyGridError):
        read_grid(path)


def test_blank_lines_only_csv_is_empty(temp_workdir: Path):
    path = temp_workdir / "data" / "blank.csv"
    path.write_text(",,\n,,\n", encoding="utf-8")
    with pytest.raises(EmptyGridError):
        read_grid(path)


def test_missing_file(temp_workdir: Path):
    with pytest.raises(GridReadError, match="file not found"):
        read_grid(temp_workdir / "data" / "nope.xlsx")


def test_corrupt_workbook(temp_workdir: Path):
    path = temp_workdir / "data" / "broken.xlsx"
    path.write_bytes(b"this is not a workbook")
    with pytest.raises(GridReadError):
        read_grid(path)


def test_frame_to_grid_blanks_nan_and_drops_trailing_rows():
    df = pd.DataFrame([["Name", np.nan], ["Apple", 3], [None, ""], [np.nan, np.nan]])
    grid = frame_to_grid(df)
    assert len(grid) == 2
    assert grid[0] == ["Name", ""]
    assert grid[1][0] == "Apple"


def test_csv_has_no_sheet_names(temp_workdir: Path):
    assert sheet_names(temp_workdir / "data" / "x.csv") == []


def test_corrupt_legacy_workbook(temp_workdir: Path):
    path = temp_workdir / "data" / "broken.xls"
    path.write_bytes(b"not an excel 97-2003 file")
    with pytest.raises(GridReadError, match="cannot read 'broken.xls'"):
        read_grid(path)


def test_xlsx_date_cells_arrive_as_text(excel_factory):
    path = excel_factory("dates.xlsx", {"Sheet1": [["Date", "Name"], [datetime(2024, 1, 5), "Tea"]]})
    grid = read_grid(path)
    assert grid[1][0] == "2024-01-05 00:00:00"
    # digits dominate, so the column is typed as a number rather than a date
    assert classify([grid[1][0]]) is ColumnType.NUMBER
