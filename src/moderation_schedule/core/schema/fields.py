"""Field metadata and scheduled update reference field resolution."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import (
    Any,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    runtime_checkable,
)

from moderation_schedule.core.exceptions import UnknownBundleError

logger = logging.getLogger(__name__)

ENTITY_REFERENCE = "entity_reference"
SCHEDULED_UPDATE = "scheduled_update"


@dataclass(frozen=True)
class FieldDefinition:
    """Definition of a field on a bundle.

    Attributes:
        name: Field name
        type: Storage type (e.g. ``string``, ``entity_reference``)
        target_type: Referenced entity type for reference fields
    """
    name: str
    type: str
    target_type: Optional[str] = None

    @property
    def references_scheduled_updates(self) -> bool:
        return self.type == ENTITY_REFERENCE and self.target_type == SCHEDULED_UPDATE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FieldDefinition":
        return cls(
            name=str(data["name"]),
            type=str(data["type"]),
            target_type=data.get("targetType") or data.get("target_type"),
        )


@runtime_checkable
class FieldMetadataSource(Protocol):
    """Protocol for schema sources that enumerate field definitions."""

    def get_field_definitions(self, entity_type_id: str, bundle: str) -> Sequence[FieldDefinition]:
        """Return field definitions for a bundle in definition order.

        Raises:
            UnknownBundleError: If the entity type or bundle is unknown
        """
        ...


class InMemoryFieldMetadataSource:
    """Field metadata held in a dict keyed by ``(entity_type_id, bundle)``."""

    def __init__(
        self,
        definitions: Optional[Mapping[Tuple[str, str], Iterable[FieldDefinition]]] = None,
    ) -> None:
        self._definitions: Dict[Tuple[str, str], List[FieldDefinition]] = {}
        for key, defs in (definitions or {}).items():
            self._definitions[key] = list(defs)

    def add_bundle(self, entity_type_id: str, bundle: str, definitions: Iterable[FieldDefinition]) -> None:
        self._definitions[(entity_type_id, bundle)] = list(definitions)

    def get_field_definitions(self, entity_type_id: str, bundle: str) -> List[FieldDefinition]:
        try:
            return list(self._definitions[(entity_type_id, bundle)])
        except KeyError:
            raise UnknownBundleError(entity_type_id, bundle) from None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "InMemoryFieldMetadataSource":
        """Build from ``{entity_type: {bundle: [field, ...]}}``."""
        source = cls()
        for entity_type_id, bundles in (data or {}).items():
            for bundle, fields in (bundles or {}).items():
                source.add_bundle(
                    str(entity_type_id),
                    str(bundle),
                    [FieldDefinition.from_dict(f) for f in (fields or [])],
                )
        return source


class ScheduledUpdateFieldResolver:
    """Finds the fields of a bundle that reference scheduled update records."""

    def __init__(self, metadata: FieldMetadataSource) -> None:
        self.metadata = metadata

    def get_scheduled_update_reference_fields(self, entity_type_id: str, bundle: str) -> List[str]:
        """Get entity reference fields which reference scheduled update records.

        Args:
            entity_type_id: An entity type ID
            bundle: Bundle for the entity type

        Returns:
            Field names, in definition order

        Raises:
            UnknownBundleError: Propagated from the metadata source
        """
        definitions = self.metadata.get_field_definitions(entity_type_id, bundle)
        names = [d.name for d in definitions if d.references_scheduled_updates]
        logger.debug(
            "Scheduled update reference fields for %s:%s: %s", entity_type_id, bundle, names
        )
        return names


__all__ = [
    "ENTITY_REFERENCE",
    "SCHEDULED_UPDATE",
    "FieldDefinition",
    "FieldMetadataSource",
    "InMemoryFieldMetadataSource",
    "ScheduledUpdateFieldResolver",
]
