"""Protocols for entity types.

The validator reads entities only through these capabilities. Fields are
accessed by a runtime-determined name via ``get``, and records attached
through an entity reference field are reached via ``referenced_entities``.
"""
from __future__ import annotations

from typing import Any, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class FieldAccessor(Protocol):
    """Protocol for objects exposing field values by name."""

    def get(self, field_name: str) -> Optional[Any]:
        """Return the (single) value of a field, or None when unset."""
        ...


@runtime_checkable
class ScheduledUpdateRecord(FieldAccessor, Protocol):
    """Protocol for scheduled update records.

    A record belongs to a subtype (its bundle) and optionally carries the
    timestamp at which its update should be applied.
    """

    @property
    def subtype(self) -> str:
        """Scheduled update type identifier."""
        ...

    @property
    def update_timestamp(self) -> Optional[int]:
        """Epoch seconds at which the update applies, or None."""
        ...


@runtime_checkable
class ContentEntity(FieldAccessor, Protocol):
    """Protocol for moderated content entities."""

    @property
    def id(self) -> str:
        """Unique entity identifier."""
        ...

    @property
    def entity_type_id(self) -> str:
        """Entity type identifier (e.g. ``node``)."""
        ...

    @property
    def bundle(self) -> str:
        """Bundle of the entity type (e.g. ``article``)."""
        ...

    def referenced_entities(self, field_name: str) -> List[Optional[ScheduledUpdateRecord]]:
        """Return records referenced through a field.

        Items are None for references whose target no longer exists.
        """
        ...


__all__ = [
    "FieldAccessor",
    "ScheduledUpdateRecord",
    "ContentEntity",
]
