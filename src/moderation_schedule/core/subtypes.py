"""Scheduled update types and the moderation state field lookup.

A scheduled update type declares a field map: keys are fields on the
scheduled update record, values are the entity fields they will update.
Types whose map targets ``moderation_state`` change moderation state.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable

from moderation_schedule.core.entity.base import MODERATION_STATE_FIELD
from moderation_schedule.core.exceptions import SubtypeConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubtypeConfig:
    """Configuration of one scheduled update type."""
    id: str
    label: str = ""
    field_map: Mapping[str, str] = field(default_factory=dict)

    def source_field_for(self, destination: str) -> Optional[str]:
        """Return the first record field mapped onto ``destination``."""
        for source, target in self.field_map.items():
            if target == destination:
                return source
        return None

    @classmethod
    def from_dict(cls, subtype_id: str, data: Optional[Mapping[str, Any]]) -> "SubtypeConfig":
        data = data or {}
        return cls(
            id=subtype_id,
            label=str(data.get("label") or subtype_id),
            field_map=dict(data.get("fieldMap") or data.get("field_map") or {}),
        )


@runtime_checkable
class SubtypeConfigStore(Protocol):
    """Protocol for storage of scheduled update type configuration."""

    def load(self, subtype_id: str) -> SubtypeConfig:
        """Load a scheduled update type.

        Raises:
            SubtypeConfigError: If the type cannot be loaded
        """
        ...


class InMemorySubtypeConfigStore:
    """Scheduled update types held in a dict.

    ``load_count`` tracks backing lookups so callers can observe caching.
    """

    def __init__(self, configs: Optional[Mapping[str, SubtypeConfig]] = None) -> None:
        self._configs: Dict[str, SubtypeConfig] = dict(configs or {})
        self.load_count = 0

    def add(self, config: SubtypeConfig) -> None:
        self._configs[config.id] = config

    def load(self, subtype_id: str) -> SubtypeConfig:
        self.load_count += 1
        try:
            return self._configs[subtype_id]
        except KeyError:
            raise SubtypeConfigError(subtype_id) from None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "InMemorySubtypeConfigStore":
        """Build from ``{type_id: {label, fieldMap}}``."""
        return cls({
            str(subtype_id): SubtypeConfig.from_dict(str(subtype_id), cfg)
            for subtype_id, cfg in (data or {}).items()
        })


class ModerationStateFieldResolver:
    """Cached lookup of the field holding new moderation state values.

    Keys of the cache are scheduled update type IDs, values are the name of
    the field on the scheduled update record containing new state values.
    A None value means the type does not change moderation state.

    Entries never expire during the resolver's lifetime. Load failures are
    not cached.
    """

    def __init__(self, store: SubtypeConfigStore) -> None:
        self.store = store
        self._cache: Dict[str, Optional[str]] = {}
        self._lock = threading.Lock()

    def get_moderation_state_field_name(self, subtype_id: str) -> Optional[str]:
        """Get the field which contains new state values for a scheduled update type.

        Args:
            subtype_id: ID of a scheduled update type

        Returns:
            The name of the field, or None

        Raises:
            SubtypeConfigError: If the type configuration cannot be loaded
        """
        if subtype_id in self._cache:
            return self._cache[subtype_id]

        with self._lock:
            # Another thread may have resolved it while we waited.
            if subtype_id in self._cache:
                return self._cache[subtype_id]

            config = self.store.load(subtype_id)
            field_name = config.source_field_for(MODERATION_STATE_FIELD) or None
            self._cache[subtype_id] = field_name

        logger.debug("Scheduled update type %s maps moderation state from %r", subtype_id, field_name)
        return field_name

    def cache_info(self) -> Dict[str, Optional[str]]:
        """Return a copy of the resolved entries."""
        return dict(self._cache)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()


__all__ = [
    "SubtypeConfig",
    "SubtypeConfigStore",
    "InMemorySubtypeConfigStore",
    "ModerationStateFieldResolver",
]
