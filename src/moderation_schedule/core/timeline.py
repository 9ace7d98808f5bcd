"""Moderation state timelines.

A timeline is the sequence of moderation states an entity is asserted to
take: its current state "now" (time ``NOW``) followed by the target states
of its scheduled updates. Events are collected unordered and sorted with
``sort_timeline``.

Ordering:
- ascending by timestamp
- events without a timestamp come after all timestamped events
- ties keep insertion order (the current state first, then reference fields
  in definition order, then records in field order)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from moderation_schedule.core.entity.base import MODERATION_STATE_FIELD
from moderation_schedule.core.entity.protocols import ContentEntity
from moderation_schedule.core.schema.fields import ScheduledUpdateFieldResolver
from moderation_schedule.core.subtypes import ModerationStateFieldResolver

logger = logging.getLogger(__name__)

# Timestamp of the state the entity has once saved.
NOW = 0


@dataclass(frozen=True)
class TimelineEvent:
    """The moderation state an entity takes at a point in time."""
    time: Optional[int]
    state: str
    source: Optional[str] = field(default=None, compare=False)

    def to_dict(self) -> dict:
        return {"time": self.time, "state": self.state, "source": self.source}


def _sort_key(event: TimelineEvent) -> Tuple[bool, int]:
    return (event.time is None, event.time if event.time is not None else 0)


def sort_timeline(events: Iterable[TimelineEvent]) -> List[TimelineEvent]:
    """Return events in chronological order (stable)."""
    return sorted(events, key=_sort_key)


def timeline_pairs(timeline: List[TimelineEvent]) -> List[Tuple[TimelineEvent, TimelineEvent]]:
    """Return each consecutive ``(from, to)`` pair of a sorted timeline."""
    return list(zip(timeline[:-1], timeline[1:]))


def current_state_event(entity: ContentEntity) -> Optional[TimelineEvent]:
    """Return the "now" event for an entity with a moderation state."""
    current = entity.get(MODERATION_STATE_FIELD)
    if not current:
        return None
    return TimelineEvent(NOW, str(current), source=MODERATION_STATE_FIELD)


class ScheduledTransitionCollector:
    """Collects the moderation state changes scheduled for an entity."""

    def __init__(
        self,
        field_resolver: ScheduledUpdateFieldResolver,
        state_field_resolver: ModerationStateFieldResolver,
    ) -> None:
        self.field_resolver = field_resolver
        self.state_field_resolver = state_field_resolver

    def get_scheduled_state_transitions(self, entity: ContentEntity) -> List[TimelineEvent]:
        """Get a list of scheduled state transitions.

        Args:
            entity: The entity which scheduled updates are associated with

        Returns:
            Unordered events, one per scheduled update that sets a state

        Raises:
            UnknownBundleError: If the entity's bundle has no field metadata
            SubtypeConfigError: If a record's type cannot be loaded
        """
        reference_fields = self.field_resolver.get_scheduled_update_reference_fields(
            entity.entity_type_id, entity.bundle
        )

        events: List[TimelineEvent] = []
        for field_name in reference_fields:
            for record in entity.referenced_entities(field_name):
                if record is None:
                    logger.debug("Skipping dangling reference in %s of %s", field_name, entity.id)
                    continue

                # Does this scheduled update change moderation state?
                state_field = self.state_field_resolver.get_moderation_state_field_name(record.subtype)
                if not state_field:
                    continue

                # Does the scheduled update contain a value?
                target_state = record.get(state_field)
                if not target_state:
                    continue

                events.append(
                    TimelineEvent(record.update_timestamp, str(target_state), source=field_name)
                )

        return events


__all__ = [
    "NOW",
    "TimelineEvent",
    "sort_timeline",
    "timeline_pairs",
    "current_state_event",
    "ScheduledTransitionCollector",
]
