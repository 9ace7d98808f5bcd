"""Concrete entity types backed by plain field dictionaries.

- ScheduledUpdate: a scheduled update record of some subtype
- ContentRecord: a moderated content entity whose reference fields hold
  ScheduledUpdate records
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from moderation_schedule.core.exceptions import EntityDocumentError
from moderation_schedule.core.utils.time import coerce_timestamp

# Well-known field names
MODERATION_STATE_FIELD = "moderation_state"
UPDATE_TIMESTAMP_FIELD = "update_timestamp"


def _single_value(value: Any) -> Any:
    """Unwrap single-item lists so ``get`` always returns a scalar."""
    if isinstance(value, list):
        return value[0] if value else None
    return value


def _timestamp(value: Any, *, record_id: Any) -> Optional[int]:
    try:
        return coerce_timestamp(value)
    except ValueError as exc:
        raise EntityDocumentError(str(exc), context={"record": record_id}) from exc


@dataclass
class ScheduledUpdate:
    """A scheduled update record.

    Attributes:
        subtype: Scheduled update type identifier
        update_timestamp: Epoch seconds when the update applies (optional)
        fields: Field values keyed by field name
        id: Record identifier (optional)
    """
    subtype: str
    update_timestamp: Optional[int] = None
    fields: Dict[str, Any] = field(default_factory=dict)
    id: Optional[str] = None

    def get(self, field_name: str) -> Optional[Any]:
        if field_name == UPDATE_TIMESTAMP_FIELD:
            return self.update_timestamp
        return _single_value(self.fields.get(field_name))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "type": self.subtype,
            "updateTimestamp": self.update_timestamp,
            "fields": dict(self.fields),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ScheduledUpdate":
        """Create from dictionary representation.

        Supports both camelCase and snake_case keys for compatibility.
        """
        if not isinstance(data, Mapping):
            raise EntityDocumentError(
                f"Scheduled update must be a mapping, got {type(data).__name__}"
            )
        record_id = data.get("id")
        subtype = data.get("type") or data.get("subtype")
        if not subtype:
            raise EntityDocumentError(
                "Scheduled update is missing its type", context={"record": record_id}
            )
        raw_time = data.get("updateTimestamp", data.get("update_timestamp"))
        return cls(
            subtype=str(subtype),
            update_timestamp=_timestamp(raw_time, record_id=record_id),
            fields=dict(data.get("fields") or {}),
            id=str(record_id) if record_id is not None else None,
        )


@dataclass
class ContentRecord:
    """A moderated content entity.

    Reference fields hold lists whose items are ScheduledUpdate records,
    or None for dangling references.
    """
    id: str
    entity_type_id: str
    bundle: str
    fields: Dict[str, Any] = field(default_factory=dict)

    def get(self, field_name: str) -> Optional[Any]:
        value = _single_value(self.fields.get(field_name))
        if isinstance(value, ScheduledUpdate):
            return None
        return value

    def referenced_entities(self, field_name: str) -> List[Optional[ScheduledUpdate]]:
        items = self.fields.get(field_name)
        if items is None:
            return []
        if not isinstance(items, list):
            items = [items]
        return [item if isinstance(item, ScheduledUpdate) else None for item in items]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        out: Dict[str, Any] = {}
        for name, value in self.fields.items():
            if isinstance(value, list):
                out[name] = [
                    v.to_dict() if isinstance(v, ScheduledUpdate) else v for v in value
                ]
            else:
                out[name] = value
        return {
            "id": self.id,
            "entityType": self.entity_type_id,
            "bundle": self.bundle,
            "fields": out,
        }

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        *,
        reference_fields: Optional[List[str]] = None,
    ) -> "ContentRecord":
        """Create from dictionary representation.

        Items of the named reference fields are turned into ScheduledUpdate
        records; ``null`` items are kept as dangling references. Without
        ``reference_fields``, any list of mappings carrying a ``type`` key is
        treated as a reference field.
        """
        if not isinstance(data, Mapping):
            raise EntityDocumentError(
                f"Entity document must be a mapping, got {type(data).__name__}"
            )
        entity_type_id = data.get("entityType") or data.get("entity_type")
        bundle = data.get("bundle")
        if not entity_type_id or not bundle:
            raise EntityDocumentError(
                "Entity document requires 'entityType' and 'bundle'",
                context={"id": data.get("id")},
            )

        fields: Dict[str, Any] = {}
        for name, value in (data.get("fields") or {}).items():
            if _is_reference_value(name, value, reference_fields):
                items = value if isinstance(value, list) else [value]
                fields[name] = [
                    ScheduledUpdate.from_dict(item) if item is not None else None
                    for item in items
                ]
            else:
                fields[name] = value

        return cls(
            id=str(data.get("id", "")),
            entity_type_id=str(entity_type_id),
            bundle=str(bundle),
            fields=fields,
        )


def _is_reference_value(
    name: str, value: Any, reference_fields: Optional[List[str]]
) -> bool:
    if reference_fields is not None:
        return name in reference_fields and value is not None
    if not isinstance(value, list) or not value:
        return False
    if all(item is None for item in value):
        return False
    return all(item is None or (isinstance(item, Mapping) and "type" in item) for item in value)


__all__ = [
    "MODERATION_STATE_FIELD",
    "UPDATE_TIMESTAMP_FIELD",
    "ScheduledUpdate",
    "ContentRecord",
]
