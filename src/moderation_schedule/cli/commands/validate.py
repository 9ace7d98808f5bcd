"""
Validate the scheduled moderation transitions of an entity.

SUMMARY: Report scheduled transitions that the entity's workflow does not allow
"""

from __future__ import annotations

import argparse
import sys

from moderation_schedule.cli import OutputFormatter, add_config_flag, add_entity_arg, add_json_flag

SUMMARY = "Report scheduled transitions that the entity's workflow does not allow"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_entity_arg(parser)
    add_config_flag(parser)
    parser.add_argument(
        "--workflow",
        help="Check against this workflow instead of the one bound to the entity's bundle",
    )
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    from moderation_schedule.core.config import SiteConfig, load_entity
    from moderation_schedule.core.exceptions import ConfigurationError
    from moderation_schedule.core.validator import ScheduledStateTransitionValidator

    formatter = OutputFormatter(json_mode=bool(getattr(args, "json", False)))

    config = SiteConfig.load(args.config)
    entity = load_entity(args.entity, config)
    validator = ScheduledStateTransitionValidator.create(config)

    workflow = None
    if getattr(args, "workflow", None):
        workflow = config.moderation_information.workflows.get(args.workflow)
        if workflow is None:
            raise ConfigurationError(
                f"Unknown workflow '{args.workflow}'", context={"workflow": args.workflow}
            )
    violations = validator.validate(entity, workflow)

    data = {
        "entity": {"id": entity.id, "entityType": entity.entity_type_id, "bundle": entity.bundle},
        "violations": [v.to_dict() for v in violations],
    }
    if violations:
        lines = [v.render() for v in violations]
        formatter.success(data, "\n".join(lines), status="invalid")
        return 1

    label = f"{entity.entity_type_id}:{entity.bundle} {entity.id}".rstrip()
    formatter.success(data, f"No invalid scheduled transitions for {label}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
