"""
Moderation schedule CLI package.

Commands are auto-discovered from the commands/ subfolder.

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
"""
from ._output import OutputFormatter
from ._args import add_config_flag, add_entity_arg, add_json_flag

__all__ = [
    # Output formatting
    "OutputFormatter",
    # Argument helpers
    "add_config_flag",
    "add_entity_arg",
    "add_json_flag",
]
