from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Config loader.

Responsibilities:
- Load the YAML config (default config/ingest.yml)
- Validate it against the bundled JSON schema
- Apply defaults (output_directory=./staging, export_format=csv)
"""

__all__ = [
    "ConfigError",
    "SourceConfig",
    "IngestConfig",
    "SCHEMA_PATH",
    "DEFAULT_CONFIG_PATH",
    "load_config",
    "load_existing_keys",
]

SCHEMA_PATH = Path(__file__).with_name("ingest_schema.json")
DEFAULT_CONFIG_PATH = Path("config/ingest.yml")


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class SourceConfig:
    """One group of input listings, matched by filename glob."""
    pattern: str
    variant: str  # abt / vaccination
    vaccine_type: str | None = None
    status_selection: str | None = None


@dataclass(frozen=True)
class IngestConfig:
    source_directory: str
    sources: tuple[SourceConfig, ...]
    output_directory: str = "./staging"
    export_format: str = "csv"
    existing_keys_file: str | None = None


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or the
            config data fails validation (missing keys, wrong types, unknown
            keys, vaccination source without vaccine_type/status_selection).
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


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> IngestConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config validation failed: top level must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    sources = tuple(
        SourceConfig(
            pattern=s["pattern"],
            variant=s["variant"],
            vaccine_type=s.get("vaccine_type"),
            status_selection=s.get("status_selection"),
        )
        for s in data["sources"]
    )
    return IngestConfig(
        source_directory=data["source_directory"],
        sources=sources,
        output_directory=data.get("output_directory", "./staging"),
        export_format=data.get("export_format", "csv"),
        existing_keys_file=data.get("existing_keys_file"),
    )


def load_existing_keys(path: Path) -> set[str]:
    """Read committed duplicate keys, one per line; blank lines and ``#`` comments ignored."""
    if not path.exists():
        raise ConfigError(f"existing keys file not found: {path}")
    keys: set[str] = set()
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            keys.add(line.lower())
    return keys
