from __future__ import annotations

from typing import Any, Dict, Mapping


class ModerationScheduleError(Exception):
    """Base exception for the moderation schedule package."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ConfigurationError(ModerationScheduleError, ValueError):
    """Raised when a site configuration is missing or structurally invalid."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ModerationScheduleError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class EntityDocumentError(ModerationScheduleError, ValueError):
    """Raised when an entity document cannot be turned into a record."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ModerationScheduleError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class UnknownBundleError(ModerationScheduleError, LookupError):
    """Raised when field metadata is requested for an unknown entity type or bundle."""

    def __init__(self, entity_type_id: str, bundle: str) -> None:
        message = f"No field definitions for bundle '{bundle}' of entity type '{entity_type_id}'"
        ModerationScheduleError.__init__(
            self, message, context={"entity_type": entity_type_id, "bundle": bundle}
        )
        LookupError.__init__(self, message)
        self.entity_type_id = entity_type_id
        self.bundle = bundle


class SubtypeConfigError(ModerationScheduleError, LookupError):
    """Raised when a scheduled update type configuration cannot be loaded."""

    def __init__(self, subtype_id: str, message: str | None = None) -> None:
        message = message or f"Scheduled update type '{subtype_id}' does not exist"
        ModerationScheduleError.__init__(self, message, context={"subtype": subtype_id})
        LookupError.__init__(self, message)
        self.subtype_id = subtype_id


class WorkflowNotFoundError(ModerationScheduleError, LookupError):
    """Raised when no workflow governs an entity."""

    def __init__(self, entity_type_id: str, bundle: str) -> None:
        message = f"No workflow is configured for '{entity_type_id}:{bundle}'"
        ModerationScheduleError.__init__(
            self, message, context={"entity_type": entity_type_id, "bundle": bundle}
        )
        LookupError.__init__(self, message)


class StateNotFoundError(ModerationScheduleError, ValueError):
    """Raised when a workflow does not define the requested state."""

    def __init__(self, workflow_id: str, state_id: Any) -> None:
        message = f"Workflow '{workflow_id}' does not contain state '{state_id}'"
        ModerationScheduleError.__init__(
            self, message, context={"workflow": workflow_id, "state": state_id}
        )
        ValueError.__init__(self, message)
        self.workflow_id = workflow_id
        self.state_id = state_id


__all__ = [
    "ModerationScheduleError",
    "ConfigurationError",
    "EntityDocumentError",
    "UnknownBundleError",
    "SubtypeConfigError",
    "WorkflowNotFoundError",
    "StateNotFoundError",
]
