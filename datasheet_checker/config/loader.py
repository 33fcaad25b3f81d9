from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import (
    FIRST_DATA_ROW,
    FURNISH_MARKERS,
    IGNORE_VALUES,
    REPORT_SHEET_NAME,
    CheckerConfig,
    ColumnLayout,
    ReportConfig,
)

"""Config loader.

Responsibilities:
- Load the YAML config (config/checker.yml by default)
- Validate against config_schema.json (additional keys rejected)
- Apply defaults for every missing key (stock datasheet layout)
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/checker.yml")
CONFIG_ENV_VAR = "DATASHEET_CHECKER_CONFIG"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against JSON schema.

    Raises:
        ConfigError: schema file missing/invalid, or data violates the schema
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


def config_from_dict(data: dict[str, Any]) -> CheckerConfig:
    """Build a CheckerConfig from already-validated data."""
    cols_raw = data.get("columns") or {}
    defaults = ColumnLayout()
    columns = ColumnLayout(
        description=cols_raw.get("description", defaults.description).upper(),
        technical=cols_raw.get("technical", defaults.technical).upper(),
        vendor=cols_raw.get("vendor", defaults.vendor).upper(),
    )
    report_raw = data.get("report") or {}
    report = ReportConfig(
        sheet_name=report_raw.get("sheet_name", REPORT_SHEET_NAME),
        output_directory=report_raw.get("output_directory"),
    )
    ignore = data.get("ignore_values")
    markers = data.get("furnish_markers")
    return CheckerConfig(
        ignore_values=frozenset(ignore) if ignore is not None else IGNORE_VALUES,
        furnish_markers=frozenset(markers) if markers is not None else FURNISH_MARKERS,
        first_data_row=data.get("first_data_row", FIRST_DATA_ROW),
        columns=columns,
        report=report,
    )


def load_config(path: Path) -> CheckerConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)
    return config_from_dict(data)


def resolve_config(explicit: Path | None = None) -> CheckerConfig:
    """Load config from --config, the environment, or config/checker.yml.

    An explicitly requested file (argument or environment variable) must
    exist; the default location is optional and falls back to defaults.
    """
    if explicit is not None:
        return load_config(explicit)
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return load_config(Path(env_path))
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return CheckerConfig()
