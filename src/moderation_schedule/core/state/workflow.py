"""Declarative moderation workflows.

A workflow is built from rich state definitions::

    states:
      draft:
        label: Draft
        allowed_transitions:
          - to: draft
          - to: published
      published:
        label: Published
        allowed_transitions:
          - to: archived

Transitions are directed edges. Staying in a state is only permitted when
the state lists itself as a target.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from moderation_schedule.core.exceptions import ConfigurationError, StateNotFoundError


def _flatten_transitions(states: Mapping[str, Any]) -> dict[str, list[str]]:
    """Return a simple from->to adjacency map from rich state definitions."""
    trans: dict[str, list[str]] = {}
    for state_name, info in (states or {}).items():
        allowed = []
        for t in (info or {}).get("allowed_transitions", []) or []:
            to_state = t.get("to")
            if to_state:
                allowed.append(str(to_state))
        trans[str(state_name)] = allowed
    return trans


@dataclass(frozen=True)
class WorkflowState:
    """A state of a workflow and its outgoing transitions."""
    id: str
    label: str
    targets: tuple[str, ...] = field(default_factory=tuple)

    def can_transition_to(self, to_state_id: str) -> bool:
        return to_state_id in self.targets

    def allowed_targets(self) -> list[str]:
        return list(self.targets)


class Workflow:
    """A named directed graph of moderation states."""

    def __init__(self, id: str, states: Mapping[str, WorkflowState], *, label: str | None = None) -> None:
        self.id = id
        self.label = label or id
        self.states: dict[str, WorkflowState] = dict(states)

        unknown = sorted(
            {t for s in self.states.values() for t in s.targets if t not in self.states}
        )
        if unknown:
            raise ConfigurationError(
                f"Workflow '{id}' has transitions to undefined states: {', '.join(unknown)}",
                context={"workflow": id, "states": unknown},
            )

    def __repr__(self) -> str:
        return f"Workflow({self.id!r}, states={list(self.states)!r})"

    def get_state(self, state_id: str) -> WorkflowState:
        """Return a state by ID.

        Raises:
            StateNotFoundError: If the workflow does not define the state
        """
        try:
            return self.states[state_id]
        except (KeyError, TypeError):
            raise StateNotFoundError(self.id, state_id) from None

    def transitions_map(self) -> dict[str, list[str]]:
        return {sid: s.allowed_targets() for sid, s in self.states.items()}

    @classmethod
    def from_spec(cls, workflow_id: str, spec: Mapping[str, Any]) -> "Workflow":
        """Build a workflow from its declarative definition."""
        states_spec = (spec or {}).get("states") or {}
        if not isinstance(states_spec, Mapping) or not states_spec:
            raise ConfigurationError(
                f"Workflow '{workflow_id}' requires a mapping of states",
                context={"workflow": workflow_id},
            )

        adjacency = _flatten_transitions(states_spec)
        states = {
            str(state_id): WorkflowState(
                id=str(state_id),
                label=str((info or {}).get("label") or state_id),
                targets=tuple(adjacency[str(state_id)]),
            )
            for state_id, info in states_spec.items()
        }
        return cls(workflow_id, states, label=spec.get("label"))


__all__ = ["Workflow", "WorkflowState"]
