from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..inference.field_catalog import PRODUCT_FIELDS, CatalogError, extend_catalog
from ..models.import_settings import (
    DEFAULT_AUTO_APPLY_CONFIDENCE,
    DEFAULT_FILE_EXTENSIONS,
    DEFAULT_HEADER_SCAN_ROWS,
    DEFAULT_MIN_CONFIDENCE,
    DEFAULT_SAMPLE_SIZE,
    ImportSettings,
)

"""Config loader.

Responsibilities:
- Load the YAML config (default location config/import.yml)
- Validate it against the JSON schema shipped with the package
- Apply defaults for every omitted key
- Reject extra synonyms that would be claimed by two product fields
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
]

DEFAULT_CONFIG_PATH = Path("config/import.yml")
SCHEMA_PATH = Path(__file__).with_name("import_schema.json")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing or malformed, or data violating it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _normalize_extensions(raw: list[str] | None) -> tuple[str, ...]:
    if not raw:
        return DEFAULT_FILE_EXTENSIONS
    return tuple(dict.fromkeys(ext.lower() for ext in raw))


def load_config(path: Path) -> ImportSettings:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    extra_headers = data.get("extra_headers") or {}
    try:
        # surfaces unknown field keys and synonym collisions at load time
        extend_catalog(PRODUCT_FIELDS, extra_headers)
    except CatalogError as e:
        raise ConfigError(f"invalid extra_headers: {e}") from e

    return ImportSettings(
        min_confidence=float(data.get("min_confidence", DEFAULT_MIN_CONFIDENCE)),
        auto_apply_confidence=float(data.get("auto_apply_confidence", DEFAULT_AUTO_APPLY_CONFIDENCE)),
        header_scan_rows=data.get("header_scan_rows", DEFAULT_HEADER_SCAN_ROWS),
        sample_size=data.get("sample_size", DEFAULT_SAMPLE_SIZE),
        sheet=data.get("sheet"),
        file_extensions=_normalize_extensions(data.get("file_extensions")),
        extra_headers={k: list(v) for k, v in extra_headers.items()},
    )
