"""
Schema and theme file loading.

Schemas and themes can live on disk as YAML (``.yaml``/``.yml``) or JSON
(``.json``). In a schema file every token is a mapping with a ``type`` tag:

    colors:
      primary:
        type: color
        default: "#3b82f6"
        description: Brand color
      background:
        type: color

A theme file is a plain nested mapping of values shaped like the schema.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from .errors import SchemaError, ThemeFileError
from .schema import Schema, create_schema, get_schema_definition, is_token_definition
from .tokens import Token

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")
JSON_SUFFIXES = (".json",)
SUPPORTED_SUFFIXES = YAML_SUFFIXES + JSON_SUFFIXES


def _read_document(path: Path) -> dict[str, Any]:
    """Read a YAML/JSON file whose top level must be a mapping."""
    if not path.exists():
        raise ThemeFileError(f"File not found: {path}")
    if path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise ThemeFileError(
            f"Unsupported file type '{path.suffix}' for {path} "
            f"(expected one of: {', '.join(SUPPORTED_SUFFIXES)})"
        )

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ThemeFileError(f"Cannot read {path}: {e}") from e

    try:
        if path.suffix.lower() in JSON_SUFFIXES:
            data = json.loads(content) if content.strip() else None
        else:
            data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ThemeFileError(f"Invalid YAML in {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ThemeFileError(f"Invalid JSON in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ThemeFileError(f"Expected a mapping at the top of {path}, got {type(data).__name__}")

    logger.debug("Loaded %s", path)
    return data


def load_schema(path: Path | str) -> Schema:
    """
    Load a schema file.

    Raises:
        ThemeFileError: If the file is missing, unparsable or not a valid schema
    """
    path = Path(path)
    data = _read_document(path)
    try:
        return create_schema(data)
    except SchemaError as e:
        raise ThemeFileError(f"Invalid schema in {path}: {e.message}") from e


def load_theme(path: Path | str) -> dict[str, Any]:
    """
    Load a theme document (unvalidated).

    Raises:
        ThemeFileError: If the file is missing, unparsable or not a mapping
    """
    return _read_document(Path(path))


def schema_to_mapping(schema: Schema) -> dict[str, Any]:
    """Convert a schema back to its plain file form."""

    def convert(definition: Any) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for key, value in definition.items():
            if isinstance(value, Token):
                out[key] = value.to_mapping()
            elif is_token_definition(value):
                out[key] = dict(value)
            else:
                out[key] = convert(value)
        return out

    return convert(get_schema_definition(schema))


def save_schema(schema: Schema, path: Path | str) -> Path:
    """Write a schema as YAML or JSON, chosen by the file suffix."""
    path = Path(path)
    data = schema_to_mapping(schema)

    if path.suffix.lower() in JSON_SUFFIXES:
        path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    else:
        path.write_text(
            yaml.dump(
                data,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            ),
            encoding="utf-8",
        )

    logger.info("Saved schema to %s", path)
    return path
