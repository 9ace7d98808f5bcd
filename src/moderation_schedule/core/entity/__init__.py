"""Entity model for moderated content and scheduled updates.

- **Protocols**: capabilities the validator depends on (FieldAccessor,
  ContentEntity, ScheduledUpdateRecord)
- **Base classes**: ContentRecord and ScheduledUpdate, dictionary-backed
  implementations used by the CLI and tests

Example usage:
    from moderation_schedule.core.entity import ContentRecord, ScheduledUpdate

    entity = ContentRecord(
        id="1",
        entity_type_id="node",
        bundle="article",
        fields={
            "moderation_state": "draft",
            "scheduled_publish": [
                ScheduledUpdate("publish", 1700000000, {"field_state": "published"}),
            ],
        },
    )
"""
from __future__ import annotations

from .protocols import (
    FieldAccessor,
    ScheduledUpdateRecord,
    ContentEntity,
)
from .base import (
    MODERATION_STATE_FIELD,
    UPDATE_TIMESTAMP_FIELD,
    ScheduledUpdate,
    ContentRecord,
)

__all__ = [
    # Protocols
    "FieldAccessor",
    "ScheduledUpdateRecord",
    "ContentEntity",
    # Base types
    "MODERATION_STATE_FIELD",
    "UPDATE_TIMESTAMP_FIELD",
    "ScheduledUpdate",
    "ContentRecord",
]
