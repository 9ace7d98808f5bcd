from __future__ import annotations

from datetime import datetime, timezone

import pytest

from moderation_schedule.core.entity import (
    ContentEntity,
    ContentRecord,
    FieldAccessor,
    ScheduledUpdate,
    ScheduledUpdateRecord,
)
from moderation_schedule.core.exceptions import EntityDocumentError


def _document() -> dict:
    return {
        "id": 42,
        "entityType": "node",
        "bundle": "article",
        "fields": {
            "title": "Hello",
            "moderation_state": ["draft"],
            "scheduled_publish": [
                {"id": 1, "type": "publish", "updateTimestamp": 100, "fields": {"field_state": "published"}},
                None,
                {"type": "publish", "update_timestamp": "2024-01-01T00:00:00Z"},
            ],
            "tags": ["a", "b"],
        },
    }


def test_records_satisfy_protocols():
    record = ScheduledUpdate("publish", 10)
    entity = ContentRecord("1", "node", "article")
    assert isinstance(record, ScheduledUpdateRecord)
    assert isinstance(record, FieldAccessor)
    assert isinstance(entity, ContentEntity)


def test_from_dict_detects_reference_fields():
    entity = ContentRecord.from_dict(_document())

    assert entity.id == "42"
    assert entity.get("moderation_state") == "draft"
    assert entity.get("tags") == "a"

    refs = entity.referenced_entities("scheduled_publish")
    assert refs[1] is None
    assert refs[0] == ScheduledUpdate("publish", 100, {"field_state": "published"}, id="1")
    assert refs[2].update_timestamp == int(datetime(2024, 1, 1, tzinfo=timezone.utc).timestamp())


def test_from_dict_with_explicit_reference_fields():
    entity = ContentRecord.from_dict(_document(), reference_fields=[])
    assert entity.referenced_entities("scheduled_publish") == [None, None, None]


def test_referenced_entities_of_missing_or_plain_fields():
    entity = ContentRecord.from_dict(_document())
    assert entity.referenced_entities("nope") == []
    assert entity.referenced_entities("title") == [None]


def test_record_get_exposes_update_timestamp():
    record = ScheduledUpdate("publish", 100, {"field_state": ["published"]})
    assert record.get("update_timestamp") == 100
    assert record.get("field_state") == "published"
    assert record.get("missing") is None


def test_round_trip_dict_shape():
    entity = ContentRecord.from_dict(_document())
    data = entity.to_dict()
    assert data["entityType"] == "node"
    assert data["fields"]["scheduled_publish"][0]["type"] == "publish"
    assert data["fields"]["scheduled_publish"][1] is None


def test_single_item_lists_are_unwrapped():
    entity = ContentRecord("1", "node", "article", {"moderation_state": [], "title": ["Hello"]})
    assert entity.get("moderation_state") is None
    assert entity.get("title") == "Hello"


@pytest.mark.parametrize(
    "document",
    [
        {"bundle": "article"},
        {"entityType": "node"},
        ["not", "a", "mapping"],
    ],
)
def test_invalid_documents(document):
    with pytest.raises(EntityDocumentError):
        ContentRecord.from_dict(document)


def test_scheduled_update_requires_type():
    with pytest.raises(EntityDocumentError):
        ScheduledUpdate.from_dict({"updateTimestamp": 10})


def test_scheduled_update_rejects_bad_timestamp():
    with pytest.raises(EntityDocumentError):
        ScheduledUpdate.from_dict({"type": "publish", "updateTimestamp": "next tuesday"})
