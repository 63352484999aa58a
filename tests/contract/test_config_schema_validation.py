from __future__ import annotations

import json
import pathlib

import jsonschema
import pytest
import yaml
from jsonschema.exceptions import ValidationError

from listing_import.config.loader import SCHEMA_PATH

"""Config schema contract test."""

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[2]


@pytest.fixture()
def schema() -> dict:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def test_shipped_example_config_is_valid(schema):
    config = yaml.safe_load((PROJECT_ROOT / "config" / "ingest.yml").read_text(encoding="utf-8"))
    jsonschema.validate(config, schema)


def test_minimal_config_is_valid(schema):
    jsonschema.validate({"source_directory": "./data", "sources": [{"pattern": "*.txt", "variant": "abt"}]}, schema)


@pytest.mark.parametrize(
    "config",
    [
        {"sources": [{"pattern": "*.txt", "variant": "abt"}]},
        {"source_directory": "./data", "sources": []},
        {"source_directory": "./data", "sources": [{"pattern": "*.txt", "variant": "labs"}]},
        {"source_directory": "./data", "sources": [{"pattern": "*.txt", "variant": "abt", "sheet": "x"}]},
        {"source_directory": "./data", "sources": [{"pattern": "*.txt", "variant": "vaccination"}]},
        {
            "source_directory": "./data",
            "sources": [{"pattern": "*.txt", "variant": "vaccination", "vaccine_type": "Influenza", "status_selection": "given"}],
        },
        {"source_directory": "./data", "export_format": "parquet", "sources": [{"pattern": "*.txt", "variant": "abt"}]},
    ],
    ids=[
        "missing-source-directory",
        "no-sources",
        "unknown-variant",
        "extra-source-key",
        "vaccination-without-type",
        "bad-status-selection",
        "bad-export-format",
    ],
)
def test_invalid_configs_rejected(schema, config):
    with pytest.raises(ValidationError):
        jsonschema.validate(config, schema)
