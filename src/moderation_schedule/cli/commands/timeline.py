"""
Show the moderation state timeline of an entity.

SUMMARY: Print the current and scheduled moderation states in order
"""

from __future__ import annotations

import argparse
import sys

from moderation_schedule.cli import OutputFormatter, add_config_flag, add_entity_arg, add_json_flag

SUMMARY = "Print the current and scheduled moderation states in order"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_entity_arg(parser)
    add_config_flag(parser)
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    from moderation_schedule.core.config import SiteConfig, load_entity
    from moderation_schedule.core.timeline import NOW
    from moderation_schedule.core.utils.time import format_timestamp
    from moderation_schedule.core.validator import ScheduledStateTransitionValidator

    formatter = OutputFormatter(json_mode=bool(getattr(args, "json", False)))

    config = SiteConfig.load(args.config)
    entity = load_entity(args.entity, config)
    timeline = ScheduledStateTransitionValidator.create(config).build_timeline(entity)

    lines = []
    for event in timeline:
        when = "now" if event.time == NOW else format_timestamp(event.time)
        lines.append(f"{when}: {event.state}")

    formatter.success(
        {"timeline": [e.to_dict() for e in timeline]},
        "\n".join(lines) if lines else "No moderation states",
    )
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
