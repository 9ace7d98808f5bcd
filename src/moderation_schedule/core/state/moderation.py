"""Resolution of the workflow governing an entity."""
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Protocol, Tuple, runtime_checkable

from moderation_schedule.core.entity.protocols import ContentEntity
from moderation_schedule.core.exceptions import ConfigurationError, WorkflowNotFoundError

from .workflow import Workflow

logger = logging.getLogger(__name__)


@runtime_checkable
class WorkflowProvider(Protocol):
    """Protocol for objects that provide the workflow of an entity."""

    def get_workflow_for_entity(self, entity: ContentEntity) -> Workflow:
        """Get the workflow governing an entity."""
        ...


class ModerationInformation:
    """Maps ``(entity_type_id, bundle)`` pairs to their workflow."""

    def __init__(self, workflows: Optional[Mapping[str, Workflow]] = None) -> None:
        self.workflows: Dict[str, Workflow] = dict(workflows or {})
        self._bindings: Dict[Tuple[str, str], str] = {}

    def add_workflow(self, workflow: Workflow) -> None:
        self.workflows[workflow.id] = workflow

    def bind(self, workflow_id: str, entity_type_id: str, bundle: str) -> None:
        """Place a bundle under a workflow."""
        if workflow_id not in self.workflows:
            raise ConfigurationError(
                f"Cannot bind '{entity_type_id}:{bundle}' to unknown workflow '{workflow_id}'",
                context={"workflow": workflow_id},
            )
        key = (entity_type_id, bundle)
        existing = self._bindings.get(key)
        if existing is not None and existing != workflow_id:
            raise ConfigurationError(
                f"Bundle '{entity_type_id}:{bundle}' is bound to both '{existing}' and '{workflow_id}'",
                context={"entity_type": entity_type_id, "bundle": bundle},
            )
        self._bindings[key] = workflow_id

    def get_workflow_for_bundle(self, entity_type_id: str, bundle: str) -> Optional[Workflow]:
        workflow_id = self._bindings.get((entity_type_id, bundle))
        return self.workflows.get(workflow_id) if workflow_id else None

    def is_moderated_entity(self, entity: ContentEntity) -> bool:
        return (entity.entity_type_id, entity.bundle) in self._bindings

    def get_workflow_for_entity(self, entity: ContentEntity) -> Workflow:
        """Return the entity's workflow.

        Raises:
            WorkflowNotFoundError: If the entity's bundle is not moderated
        """
        workflow = self.get_workflow_for_bundle(entity.entity_type_id, entity.bundle)
        if workflow is None:
            raise WorkflowNotFoundError(entity.entity_type_id, entity.bundle)
        return workflow

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ModerationInformation":
        """Build from the ``workflows`` section of a site config."""
        info = cls()
        for workflow_id, spec in (data or {}).items():
            workflow = Workflow.from_spec(str(workflow_id), spec or {})
            info.add_workflow(workflow)
            for entity_type_id, bundles in ((spec or {}).get("bundles") or {}).items():
                for bundle in bundles or []:
                    info.bind(workflow.id, str(entity_type_id), str(bundle))
        logger.debug("Loaded %d workflow(s) with %d bundle binding(s)", len(info.workflows), len(info._bindings))
        return info


__all__ = ["WorkflowProvider", "ModerationInformation"]
