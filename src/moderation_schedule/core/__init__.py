"""Core library: entity model, workflows, timelines and the validator."""
from __future__ import annotations

from . import exceptions  # noqa: F401
from .exceptions import (
    ConfigurationError,
    EntityDocumentError,
    ModerationScheduleError,
    StateNotFoundError,
    SubtypeConfigError,
    UnknownBundleError,
    WorkflowNotFoundError,
)
from .timeline import NOW, ScheduledTransitionCollector, TimelineEvent, sort_timeline
from .validator import MESSAGE_INVALID_TRANSITION, ScheduledStateTransitionValidator, Violation

__all__ = [
    "exceptions",
    "ConfigurationError",
    "EntityDocumentError",
    "ModerationScheduleError",
    "StateNotFoundError",
    "SubtypeConfigError",
    "UnknownBundleError",
    "WorkflowNotFoundError",
    "NOW",
    "ScheduledTransitionCollector",
    "TimelineEvent",
    "sort_timeline",
    "MESSAGE_INVALID_TRANSITION",
    "ScheduledStateTransitionValidator",
    "Violation",
]
