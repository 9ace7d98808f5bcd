"""
Auto-discovery CLI dispatcher.

Scans cli/commands/ for command modules and registers them.
Adding a new command = adding a .py file exposing SUMMARY, register_args
and main.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path
from typing import Any

from moderation_schedule.core.exceptions import ModerationScheduleError

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def discover_commands() -> dict[str, dict[str, Any]]:
    """Discover commands under cli/commands.

    Returns:
        Dict mapping command name to command info dict
    """
    commands_dir = Path(__file__).parent / "commands"
    commands: dict[str, dict[str, Any]] = {}

    for item in sorted(commands_dir.glob("*.py")):
        if item.name.startswith("_"):
            continue

        cmd_name = item.stem
        try:
            module = importlib.import_module(f"moderation_schedule.cli.commands.{cmd_name}")
        except ImportError as e:
            print(f"Warning: Could not import command {cmd_name}: {e}", file=sys.stderr)
            continue
        commands[cmd_name] = {
            "module": module,
            "summary": getattr(module, "SUMMARY", cmd_name),
            "register_args": getattr(module, "register_args", None),
            "main": getattr(module, "main", None),
        }

    return commands


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with auto-discovered commands."""
    parser = argparse.ArgumentParser(
        prog="moderation-schedule",
        description="Validate scheduled moderation state transitions against workflows",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Write log records to this file instead of stderr",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Minimum log level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    for cmd_name, cmd_info in sorted(discover_commands().items()):
        primary_name = cmd_name.replace("_", "-")
        aliases = [cmd_name] if primary_name != cmd_name else []
        cmd_parser = subparsers.add_parser(
            primary_name,
            aliases=aliases,
            help=cmd_info["summary"],
        )
        if cmd_info["register_args"]:
            cmd_info["register_args"](cmd_parser)
        if cmd_info["main"]:
            cmd_parser.set_defaults(_func=cmd_info["main"])

    return parser


def _get_version() -> str:
    from moderation_schedule import __version__

    return __version__


def _configure_logging(args: argparse.Namespace) -> None:
    from moderation_schedule.core.stdlib_logging import (
        configure_stderr_logging,
        configure_stdlib_logging,
        suppress_lastresort_in_json_mode,
    )

    level = str(getattr(args, "log_level", "WARNING") or "WARNING")
    log_file = getattr(args, "log_file", None)
    if log_file:
        configure_stdlib_logging(log_path=Path(log_file), level=level)
    elif bool(getattr(args, "json", False)):
        # JSON mode must remain machine-readable.
        suppress_lastresort_in_json_mode()
    else:
        configure_stderr_logging(level)


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for errors or violations)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    _configure_logging(args)

    func: Callable[[argparse.Namespace], int] | None = getattr(args, "_func", None)
    if func is None:
        parser.print_help()
        return 0

    from moderation_schedule.cli import OutputFormatter

    try:
        return int(func(args))
    except ModerationScheduleError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        OutputFormatter(json_mode=bool(getattr(args, "json", False))).error(
            exc, error_code="command_failed"
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())
