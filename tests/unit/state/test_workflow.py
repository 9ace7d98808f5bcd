from __future__ import annotations

import pytest

from helpers.factories import EDITORIAL_SPEC
from moderation_schedule.core.exceptions import ConfigurationError, StateNotFoundError
from moderation_schedule.core.state import Workflow, WorkflowState, _flatten_transitions


def test_states_keep_labels_and_targets(workflow):
    draft = workflow.get_state("draft")
    assert draft.label == "Draft"
    assert draft.allowed_targets() == ["draft", "review", "published"]
    assert workflow.label == "Editorial"


def test_can_transition_to_follows_edges(workflow):
    published = workflow.get_state("published")
    assert published.can_transition_to("archived")
    assert not published.can_transition_to("review")
    assert not published.can_transition_to("published")


def test_unknown_state_raises_value_error(workflow):
    with pytest.raises(StateNotFoundError) as exc_info:
        workflow.get_state("ghost")
    assert isinstance(exc_info.value, ValueError)
    assert exc_info.value.context == {"workflow": "editorial", "state": "ghost"}


def test_transitions_map_matches_definition(workflow):
    assert workflow.transitions_map() == _flatten_transitions(EDITORIAL_SPEC["states"])


def test_label_defaults_to_id():
    wf = Workflow.from_spec("simple", {"states": {"a": None, "b": {"allowed_transitions": [{"to": "a"}]}}})
    assert wf.label == "simple"
    assert wf.get_state("a") == WorkflowState("a", "a", ())
    assert wf.get_state("b").label == "b"


def test_transitions_to_undefined_states_are_rejected():
    with pytest.raises(ConfigurationError, match="undefined states: nowhere"):
        Workflow.from_spec("broken", {"states": {"a": {"allowed_transitions": [{"to": "nowhere"}]}}})


def test_workflow_requires_states():
    with pytest.raises(ConfigurationError):
        Workflow.from_spec("empty", {"states": {}})
