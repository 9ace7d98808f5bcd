from .workflow import Workflow, WorkflowState, _flatten_transitions
from .moderation import ModerationInformation, WorkflowProvider

__all__ = [
    # Workflow graph
    "Workflow",
    "WorkflowState",
    "_flatten_transitions",
    # Entity to workflow resolution
    "ModerationInformation",
    "WorkflowProvider",
]
