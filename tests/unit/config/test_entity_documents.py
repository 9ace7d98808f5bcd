from __future__ import annotations

from typing import Any, Dict

import pytest

from helpers.factories import SCHEDULED_FIELD, STATE_SOURCE_FIELD, STATE_SUBTYPE
from helpers.io_utils import write_text
from moderation_schedule.core.config import SiteConfig, entity_from_dict, load_entity
from moderation_schedule.core.entity import ScheduledUpdate
from moderation_schedule.core.exceptions import EntityDocumentError


def _update(state: str, when: Any) -> Dict[str, Any]:
    return {"type": STATE_SUBTYPE, "updateTimestamp": when, "fields": {STATE_SOURCE_FIELD: state}}


def _document(bundle: str = "article") -> Dict[str, Any]:
    return {
        "id": 1,
        "entityType": "node",
        "bundle": bundle,
        "fields": {
            "moderation_state": "draft",
            SCHEDULED_FIELD: [_update("review", 10), None],
            "field_unlisted": [_update("published", 20)],
        },
    }


def test_field_metadata_decides_reference_fields(config_path):
    entity = entity_from_dict(_document(), SiteConfig.load(config_path))

    assert entity.referenced_entities(SCHEDULED_FIELD) == [
        ScheduledUpdate(STATE_SUBTYPE, 10, {STATE_SOURCE_FIELD: "review"}),
        None,
    ]
    assert entity.referenced_entities("field_unlisted") == [None]


def test_without_config_reference_fields_are_detected():
    entity = entity_from_dict(_document())
    assert entity.referenced_entities("field_unlisted")[0].update_timestamp == 20


def test_bundle_without_field_metadata_falls_back_to_detection(config_path):
    entity = entity_from_dict(_document("page"), SiteConfig.load(config_path))
    assert entity.bundle == "page"
    assert entity.referenced_entities("field_unlisted")[0].subtype == STATE_SUBTYPE


def test_schema_errors_are_reported():
    document = _document()
    del document["bundle"]
    document["fields"][SCHEDULED_FIELD].append({"updateTimestamp": 5})

    with pytest.raises(EntityDocumentError) as exc_info:
        entity_from_dict(document)

    errors = exc_info.value.context["errors"]
    assert "'bundle' is a required property" in errors
    assert any(e.startswith(f"fields.{SCHEDULED_FIELD}") for e in errors)


def test_load_entity_accepts_yaml_datetimes(tmp_path):
    path = tmp_path / "article.yaml"
    write_text(
        path,
        "id: 3\n"
        "entityType: node\n"
        "bundle: article\n"
        "fields:\n"
        "  moderation_state: draft\n"
        f"  {SCHEDULED_FIELD}:\n"
        f"    - type: {STATE_SUBTYPE}\n"
        "      updateTimestamp: 2023-11-14T22:13:20Z\n"
        "      fields:\n"
        f"        {STATE_SOURCE_FIELD}: published\n",
    )

    entity = load_entity(path)

    assert entity.id == "3"
    assert entity.referenced_entities(SCHEDULED_FIELD)[0].update_timestamp == 1700000000


def test_load_entity_missing_file(tmp_path):
    with pytest.raises(EntityDocumentError, match="File not found"):
        load_entity(tmp_path / "absent.yaml")


def test_load_entity_requires_a_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    write_text(path, "- 1\n- 2\n")
    with pytest.raises(EntityDocumentError, match="must be a mapping"):
        load_entity(path)


@pytest.mark.parametrize("when", [1700000000000, float("inf"), float("nan")])
def test_unrepresentable_timestamps_are_document_errors(when):
    document = _document()
    document["fields"][SCHEDULED_FIELD] = [_update("review", when)]

    with pytest.raises(EntityDocumentError):
        entity_from_dict(document)
