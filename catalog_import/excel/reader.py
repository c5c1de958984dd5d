from __future__ import annotations

import csv
import zipfile
from pathlib import Path
from typing import Any

import pandas as pd
import xlrd

from ..inference.header_detector import EmptyGridError
from ..inference.value_transformer import cell_text

"""Spreadsheet reader: file -> 2-D grid of cell values.

The sheet is read without a header and without NA conversion, so that the
inference engine sees the cells exactly as typed: header position is detected
later, and strings such as "NA" or "null" stay strings. Empty cells become "".
Every cell comes back as text, typed date cells included ("2024-01-05 00:00:00").
"""

__all__ = [
    "GridReadError",
    "EmptyGridError",
    "read_grid",
    "frame_to_grid",
    "sheet_names",
]


class GridReadError(Exception):
    """Raised when a file cannot be read into a grid."""


def frame_to_grid(df: pd.DataFrame) -> list[list[Any]]:
    """Convert a header-less DataFrame into a list of rows.

    NaN cells become "" and trailing all-empty rows are dropped.
    """
    grid: list[list[Any]] = []
    for raw in df.itertuples(index=False, name=None):
        grid.append(["" if cell_text(v) == "" else v for v in raw])
    while grid and all(cell_text(v).strip() == "" for v in grid[-1]):
        grid.pop()
    return grid


def sheet_names(path: Path) -> list[str]:
    if path.suffix.lower() == ".csv":
        return []
    try:
        with pd.ExcelFile(path) as xls:
            return [str(name) for name in xls.sheet_names]
    except (OSError, ValueError, zipfile.BadZipFile, xlrd.XLRDError) as e:
        raise GridReadError(f"cannot open '{path.name}': {e}") from e


def _read_csv_frame(path: Path) -> pd.DataFrame:
    # rows may differ in width (title lines above the header), which read_csv rejects
    with path.open(newline="", encoding="utf-8-sig") as f:
        rows = list(csv.reader(f))
    return pd.DataFrame(rows, dtype=object)


def _read_frame(path: Path, sheet: str | None) -> pd.DataFrame:
    if path.suffix.lower() == ".csv":
        return _read_csv_frame(path)

    with pd.ExcelFile(path) as xls:
        names = [str(n) for n in xls.sheet_names]
        if not names:
            return pd.DataFrame()
        target = sheet if sheet is not None else names[0]
        if target not in names:
            raise GridReadError(f"sheet '{target}' not found in '{path.name}' (available: {names})")
        return xls.parse(target, header=None, dtype=str, keep_default_na=False, na_values=[])


def read_grid(path: Path, sheet: str | None = None) -> list[list[Any]]:
    """Read the first (or named) worksheet of an .xlsx/.xls file, or a CSV file, into a grid.

    Raises:
        EmptyGridError: the sheet holds no rows
        GridReadError: the file is missing, unreadable or lacks the sheet
    """
    if not path.exists():
        raise GridReadError(f"file not found: {path}")
    try:
        df = _read_frame(path, sheet)
    except GridReadError:
        raise
    except (OSError, ValueError, csv.Error, zipfile.BadZipFile, xlrd.XLRDError) as e:
        raise GridReadError(f"cannot read '{path.name}': {e}") from e

    grid = frame_to_grid(df)
    if not grid:
        raise EmptyGridError(f"file is empty: {path.name}")
    return grid
