"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_config_flag(parser: argparse.ArgumentParser) -> None:
    """Add --config flag for the site configuration path.

    Defaults to the MODERATION_SCHEDULE_CONFIG environment variable.
    """
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        help="Path to the site configuration YAML (default: $MODERATION_SCHEDULE_CONFIG)",
    )


def add_entity_arg(parser: argparse.ArgumentParser) -> None:
    """Add the positional entity document argument."""
    parser.add_argument(
        "entity",
        help="Path to an entity document (YAML or JSON)",
    )


__all__ = ["add_json_flag", "add_config_flag", "add_entity_arg"]
