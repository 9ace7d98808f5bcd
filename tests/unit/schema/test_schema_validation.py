from __future__ import annotations

import pytest

from helpers.factories import site_config_dict
from moderation_schedule.core.exceptions import ConfigurationError
from moderation_schedule.core.schema import (
    SchemaValidationError,
    check_schema,
    load_schema,
    validate_payload,
    validate_payload_safe,
)


@pytest.mark.parametrize("name", ["config.schema", "entity.schema.yaml"])
def test_bundled_schemas_are_valid(name):
    check_schema(name)
    assert load_schema(name)["type"] == "object"


def test_json_schema_names_are_rejected():
    with pytest.raises(ValueError):
        load_schema("config.schema.json")


def test_missing_schema():
    with pytest.raises(FileNotFoundError):
        load_schema("nope.schema")


def test_valid_config_passes():
    assert validate_payload_safe(site_config_dict(), "config.schema") == []


def test_errors_carry_paths():
    data = site_config_dict()
    data["workflows"]["editorial"]["states"]["draft"]["allowed_transitions"] = [{"from": "x"}]

    errors = validate_payload_safe(data, "config.schema")

    assert len(errors) == 1
    assert errors[0].startswith("workflows.editorial.states.draft.allowed_transitions.0:")
    assert "'to' is a required property" in errors[0]


def test_validate_payload_raises_configuration_error():
    with pytest.raises(SchemaValidationError) as exc_info:
        validate_payload({"unexpected": 1}, "config.schema")
    assert isinstance(exc_info.value, ConfigurationError)
    assert exc_info.value.errors
    assert exc_info.value.context["schema"] == "config.schema"
