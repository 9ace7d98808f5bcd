"""
Check a site configuration.

SUMMARY: Validate a site configuration against its schema
"""

from __future__ import annotations

import argparse
import sys

from moderation_schedule.cli import OutputFormatter, add_json_flag

SUMMARY = "Validate a site configuration against its schema"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        help="Path to the site configuration YAML (default: $MODERATION_SCHEDULE_CONFIG)",
    )
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    from moderation_schedule.core.config import SiteConfig

    formatter = OutputFormatter(json_mode=bool(getattr(args, "json", False)))

    config = SiteConfig.load(args.path)
    config.check()

    info = config.moderation_information
    data = {
        "path": str(config.source),
        "workflows": sorted(info.workflows),
        "transitions": {wid: wf.transitions_map() for wid, wf in sorted(info.workflows.items())},
        "scheduledUpdateTypes": sorted((config.data.get("scheduledUpdateTypes") or {}).keys()),
    }
    formatter.success(
        data,
        f"Configuration OK: {len(info.workflows)} workflow(s), "
        f"{len(data['scheduledUpdateTypes'])} scheduled update type(s)",
    )
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
