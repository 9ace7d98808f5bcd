"""Schema metadata and document validation."""
from __future__ import annotations

from .fields import (
    ENTITY_REFERENCE,
    SCHEDULED_UPDATE,
    FieldDefinition,
    FieldMetadataSource,
    InMemoryFieldMetadataSource,
    ScheduledUpdateFieldResolver,
)
from .validation import (
    SchemaValidationError,
    check_schema,
    load_schema,
    validate_payload,
    validate_payload_safe,
)

__all__ = [
    "ENTITY_REFERENCE",
    "SCHEDULED_UPDATE",
    "FieldDefinition",
    "FieldMetadataSource",
    "InMemoryFieldMetadataSource",
    "ScheduledUpdateFieldResolver",
    "SchemaValidationError",
    "check_schema",
    "load_schema",
    "validate_payload",
    "validate_payload_safe",
]
