"""Validation of scheduled moderation state transitions.

Checks that an entity's timeline (current state plus scheduled state
changes) only walks edges of its workflow's transition graph. Every
disallowed consecutive pair is reported as a Violation. Pairs that involve
a state the workflow does not define are skipped, so stale scheduled data
does not block validation of the rest of the timeline.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional

from moderation_schedule.core.entity.protocols import ContentEntity
from moderation_schedule.core.exceptions import StateNotFoundError
from moderation_schedule.core.schema.fields import ScheduledUpdateFieldResolver
from moderation_schedule.core.state.moderation import WorkflowProvider
from moderation_schedule.core.state.workflow import Workflow
from moderation_schedule.core.subtypes import ModerationStateFieldResolver
from moderation_schedule.core.timeline import (
    ScheduledTransitionCollector,
    TimelineEvent,
    current_state_event,
    sort_timeline,
    timeline_pairs,
)
from moderation_schedule.core.utils.time import format_timestamp

if TYPE_CHECKING:
    from moderation_schedule.core.config.site import SiteConfig

logger = logging.getLogger(__name__)

MESSAGE_INVALID_TRANSITION = (
    "Invalid state transition scheduled for %date: %from to %to is not an allowed transition."
)
_PLACEHOLDER = re.compile(r"%(date|from|to)")


@dataclass(frozen=True)
class Violation:
    """A disallowed transition between two consecutive timeline events.

    ``timestamp`` is the time of the later event.
    """
    timestamp: Optional[int]
    from_state: str
    to_state: str
    from_label: str
    to_label: str

    def params(self) -> Dict[str, str]:
        """Return message placeholder values."""
        return {
            "%date": format_timestamp(self.timestamp),
            "%from": self.from_label,
            "%to": self.to_label,
        }

    def render(self, template: str = MESSAGE_INVALID_TRANSITION) -> str:
        params = self.params()
        return _PLACEHOLDER.sub(lambda m: params[m.group(0)], template)

    def to_dict(self) -> Dict[str, object]:
        return {
            "timestamp": self.timestamp,
            "from": self.from_state,
            "to": self.to_state,
            "fromLabel": self.from_label,
            "toLabel": self.to_label,
            "message": self.render(),
        }


class ScheduledStateTransitionValidator:
    """Checks if scheduled moderation state transitions are valid."""

    def __init__(
        self,
        field_resolver: ScheduledUpdateFieldResolver,
        state_field_resolver: ModerationStateFieldResolver,
        moderation_information: Optional[WorkflowProvider] = None,
    ) -> None:
        self.moderation_information = moderation_information
        self.state_field_resolver = state_field_resolver
        self.collector = ScheduledTransitionCollector(field_resolver, state_field_resolver)

    @classmethod
    def create(cls, config: "SiteConfig") -> "ScheduledStateTransitionValidator":
        """Wire a validator from a loaded site configuration."""
        return cls(
            ScheduledUpdateFieldResolver(config.field_metadata),
            ModerationStateFieldResolver(config.subtype_store),
            config.moderation_information,
        )

    def build_timeline(self, entity: ContentEntity) -> List[TimelineEvent]:
        """Return the entity's sorted timeline, starting with its current state."""
        timeline: List[TimelineEvent] = []
        now = current_state_event(entity)
        if now is not None:
            timeline.append(now)
        timeline.extend(self.collector.get_scheduled_state_transitions(entity))
        return sort_timeline(timeline)

    def _resolve_workflow(self, entity: ContentEntity, workflow: Optional[Workflow]) -> Workflow:
        if workflow is not None:
            return workflow
        if self.moderation_information is None:
            raise ValueError("A workflow is required when no moderation information is configured")
        return self.moderation_information.get_workflow_for_entity(entity)

    def validate(self, entity: ContentEntity, workflow: Optional[Workflow] = None) -> List[Violation]:
        """Return every disallowed transition in the entity's timeline.

        Args:
            entity: The moderated entity
            workflow: Workflow to check against; resolved from the entity
                when omitted

        Returns:
            Violations in timeline order (empty when valid)
        """
        workflow = self._resolve_workflow(entity, workflow)
        timeline = self.build_timeline(entity)

        violations: List[Violation] = []
        for from_event, to_event in timeline_pairs(timeline):
            try:
                state_from = workflow.get_state(from_event.state)
                state_to = workflow.get_state(to_event.state)
            except StateNotFoundError as exc:
                logger.debug("Skipping pair %s -> %s: %s", from_event.state, to_event.state, exc)
                continue

            if not state_from.can_transition_to(state_to.id):
                violations.append(
                    Violation(
                        timestamp=to_event.time,
                        from_state=state_from.id,
                        to_state=state_to.id,
                        from_label=state_from.label,
                        to_label=state_to.label,
                    )
                )

        if violations:
            logger.info(
                "%d invalid scheduled transition(s) for %s:%s %s",
                len(violations),
                entity.entity_type_id,
                entity.bundle,
                entity.id,
            )
        return violations

    def messages(
        self,
        entity: ContentEntity,
        workflow: Optional[Workflow] = None,
        template: str = MESSAGE_INVALID_TRANSITION,
    ) -> List[str]:
        """Return rendered violation messages for an entity."""
        return [v.render(template) for v in self.validate(entity, workflow)]


__all__ = [
    "MESSAGE_INVALID_TRANSITION",
    "Violation",
    "ScheduledStateTransitionValidator",
]
