"""Shared schema validation utilities.

Site configuration and entity documents are validated using JSON Schema.
Schemas are stored as YAML files (human-readable) under the bundled
``moderation_schedule.data/schemas/`` directory.
"""
from __future__ import annotations

from typing import Any, Dict, List

import jsonschema
from jsonschema import Draft202012Validator

from moderation_schedule.core.exceptions import ConfigurationError
from moderation_schedule.data import get_data_path, read_yaml as read_data_yaml


class SchemaValidationError(ConfigurationError):
    """Raised when schema validation fails."""

    def __init__(self, message: str, *, errors: List[str] | None = None, schema_name: str = "") -> None:
        super().__init__(message, context={"schema": schema_name, "errors": list(errors or [])})
        self.errors = list(errors or [])


def _normalize_name(schema_name: str) -> str:
    lowered = schema_name.lower()
    if lowered.endswith(".json"):
        raise ValueError(
            f"JSON schemas are not supported: {schema_name}. "
            "Use YAML schemas (e.g., *.schema.yaml)."
        )
    if not (lowered.endswith(".yaml") or lowered.endswith(".yml")):
        schema_name = f"{schema_name}.yaml"
    return schema_name


def load_schema(schema_name: str) -> Dict[str, Any]:
    """Load a bundled schema dict.

    Automatically appends ``.yaml`` if no extension is present.

    Args:
        schema_name: Schema file name under the schemas directory
            (e.g., "config.schema" or "entity.schema.yaml").

    Returns:
        Parsed schema dictionary.

    Raises:
        FileNotFoundError: If schema file doesn't exist.
        ValueError: If schema is not a YAML mapping.
    """
    schema_name = _normalize_name(schema_name)
    path = get_data_path("schemas", schema_name)
    if not path.exists():
        raise FileNotFoundError(f"Schema not found: {schema_name}\nSearched:\n- {path.parent}")

    schema = read_data_yaml("schemas", schema_name)
    if not isinstance(schema, dict):
        raise ValueError(f"Schema must be a YAML mapping, got {type(schema).__name__}")
    return schema


def validate_payload_safe(payload: Any, schema_name: str) -> List[str]:
    """Validate a payload and return list of error messages (empty if valid).

    Messages are prefixed with the dotted path of the offending element.
    """
    schema = load_schema(schema_name)
    validator = Draft202012Validator(schema)

    errors: List[str] = []
    for error in sorted(validator.iter_errors(payload), key=lambda e: [str(p) for p in e.path]):
        if error.path:
            path_str = ".".join(str(p) for p in error.path)
            errors.append(f"{path_str}: {error.message}")
        else:
            errors.append(error.message)
    return errors


def validate_payload(payload: Any, schema_name: str) -> None:
    """Validate a payload against a bundled schema.

    Raises:
        SchemaValidationError: If validation fails.
        FileNotFoundError: If schema doesn't exist.
    """
    errors = validate_payload_safe(payload, schema_name)
    if errors:
        summary = "; ".join(errors)
        raise SchemaValidationError(
            f"Validation failed against schema '{schema_name}': {summary}",
            errors=errors,
            schema_name=schema_name,
        )


def check_schema(schema_name: str) -> None:
    """Raise if a bundled schema is not itself a valid JSON Schema."""
    try:
        Draft202012Validator.check_schema(load_schema(schema_name))
    except jsonschema.SchemaError as exc:
        raise ConfigurationError(
            f"Schema '{schema_name}' is invalid: {exc.message}",
            context={"schema": schema_name},
        ) from exc


__all__ = [
    "load_schema",
    "validate_payload",
    "validate_payload_safe",
    "check_schema",
    "SchemaValidationError",
]
