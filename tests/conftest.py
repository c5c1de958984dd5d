# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pandas as pd
import pytest

from catalog_import.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture(autouse=True)
def clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def product_grid() -> list[list[object]]:
    """A typical hand-made product sheet with a title and a blank line above the header."""
    return [
        ["Shop inventory export", "", "", "", ""],
        ["", "", "", "", ""],
        ["Product Name", "Category", "Selling Price", "Stock", "Unit"],
        ["Basmati Rice 5kg", "Grocery", "12.50", "40", "kg"],
        ["Olive Oil", "Grocery", "8.99", "15", "l"],
        ["Dish Soap", "Household", "2.10", "120", "pcs"],
    ]


@pytest.fixture()
def sample_config_yaml() -> str:
    return """min_confidence: 0.3
auto_apply_confidence: 0.6
header_scan_rows: 5
sample_size: 3
file_extensions: [".xlsx", ".csv"]
extra_headers:
  stock_quantity: ["qty", "qty on hand"]
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


def make_excel(directory: Path, name: str, sheets: dict[str, list[list[object]]]) -> Path:
    p = directory / name
    with pd.ExcelWriter(p) as writer:
        for sheet, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
    return p


@pytest.fixture()
def excel_factory(temp_workdir: Path):
    def _factory(name: str, sheets: dict[str, list[list[object]]]) -> Path:
        return make_excel(temp_workdir / "data", name, sheets)
    return _factory
