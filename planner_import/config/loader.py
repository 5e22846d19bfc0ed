from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import (
    DEFAULT_MAX_FILE_SIZE_BYTES,
    DEFAULT_USERS_TABLE,
    DatabaseConfig,
    ImportConfig,
)

"""YAML configuration for import runs.

config/import.yml (or the --config path) is parsed with PyYAML, checked
against config_schema.json shipped beside this module and turned into an
ImportConfig with defaults filled in. Every problem surfaces as ConfigError.
"""

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ConfigError",
    "load_config",
]

DEFAULT_CONFIG_PATH = Path("config/import.yml")
SCHEMA_PATH = Path(__file__).with_name("config_schema.json")

DATABASE_KEYS = ("host", "port", "user", "password", "database", "dsn")


class ConfigError(Exception):
    pass


def _load_schema() -> dict[str, Any]:
    try:
        return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"config schema is not valid JSON: {e}") from e


def _read_yaml(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigError(f"config file not found: {path}") from e
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> ImportConfig:
    """Load and validate an import configuration.

    Raises:
        ConfigError: If the file is missing, not YAML, or violates the schema
            (missing source_directory, wrong types, unknown keys)
    """
    data = _read_yaml(path)
    if data is None:
        data = {}
    try:
        jsonschema.validate(data, _load_schema())
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e

    db_section = data.get("database") or {}
    return ImportConfig(
        source_directory=data["source_directory"],
        database=DatabaseConfig(**{key: db_section.get(key) for key in DATABASE_KEYS}),
        users_table=data.get("users_table", DEFAULT_USERS_TABLE),
        max_file_size_bytes=data.get("max_file_size_bytes", DEFAULT_MAX_FILE_SIZE_BYTES),
    )
