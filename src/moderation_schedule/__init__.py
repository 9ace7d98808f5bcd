"""
Moderation Schedule - validation of scheduled moderation state transitions

Checks that the moderation states an entity is scheduled to move through
form a valid walk over its workflow's transition graph.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
