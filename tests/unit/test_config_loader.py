from __future__ import annotations

from pathlib import Path

import pytest

from catalog_import.config.loader import ConfigError, load_config
from catalog_import.models.import_settings import ImportSettings


def test_load_config_success(write_config: Path):
    settings = load_config(write_config)
    assert settings.min_confidence == 0.3
    assert settings.auto_apply_confidence == 0.6
    assert settings.header_scan_rows == 5
    assert settings.sample_size == 3
    assert settings.sheet is None
    assert settings.file_extensions == (".xlsx", ".csv")
    assert settings.extra_headers == {"stock_quantity": ["qty", "qty on hand"]}


def test_empty_config_gives_defaults(write_config: Path):
    write_config.write_text("", encoding="utf-8")
    assert load_config(write_config) == ImportSettings()


def test_extensions_lower_cased_and_deduplicated(write_config: Path):
    write_config.write_text('file_extensions: [".XLSX", ".xlsx", ".csv"]\n', encoding="utf-8")
    assert load_config(write_config).file_extensions == (".xlsx", ".csv")


def test_load_config_missing_file(temp_workdir: Path):
    with pytest.raises(ConfigError, match="config file not found"):
        load_config(temp_workdir / "config" / "not_exists.yml")


def test_invalid_yaml(write_config: Path):
    write_config.write_text("min_confidence: [0.3\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid yaml"):
        load_config(write_config)


def test_root_must_be_mapping(write_config: Path):
    write_config.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="must be a mapping"):
        load_config(write_config)


@pytest.mark.parametrize("value", ["0.1", "0", "0.29"])
def test_min_confidence_below_default_rejected(write_config: Path, value: str):
    write_config.write_text(f"min_confidence: {value}\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(write_config)


def test_out_of_range_threshold(write_config: Path):
    write_config.write_text("min_confidence: 1.5\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_extra_field_rejected(write_config: Path):
    text = write_config.read_text(encoding="utf-8") + "\nextra_field: not_allowed\n"
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_unknown_field_in_extra_headers(write_config: Path):
    write_config.write_text("extra_headers:\n  colour: [color]\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid extra_headers"):
        load_config(write_config)


def test_colliding_synonym_in_extra_headers(write_config: Path):
    write_config.write_text("extra_headers:\n  price: [cost]\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="claimed by both"):
        load_config(write_config)


def test_default_extensions_include_legacy_excel():
    assert ImportSettings().file_extensions == (".xlsx", ".xls", ".csv")
