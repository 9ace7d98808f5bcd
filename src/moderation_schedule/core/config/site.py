"""Site configuration for scheduled moderation validation.

A single YAML document declares everything the validator consumes:

- ``workflows``: state definitions and the bundles each workflow governs
- ``scheduledUpdateTypes``: field maps of scheduled update types
- ``fields``: field definitions per entity type and bundle

The document is validated against ``config.schema.yaml`` before use.
"""
from __future__ import annotations

import logging
import os
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from moderation_schedule.core.exceptions import ConfigurationError
from moderation_schedule.core.schema.fields import InMemoryFieldMetadataSource
from moderation_schedule.core.schema.validation import validate_payload
from moderation_schedule.core.state.moderation import ModerationInformation
from moderation_schedule.core.subtypes import InMemorySubtypeConfigStore
from moderation_schedule.core.utils.io import read_yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "MODERATION_SCHEDULE_CONFIG"
CONFIG_SCHEMA = "config.schema"


def resolve_config_path(path: Optional[str | Path] = None) -> Path:
    """Return the config path, falling back to ``MODERATION_SCHEDULE_CONFIG``.

    Raises:
        ConfigurationError: If neither is set
    """
    raw = str(path) if path else os.environ.get(CONFIG_ENV_VAR, "")
    if not raw.strip():
        raise ConfigurationError(
            f"No configuration file given; pass --config or set {CONFIG_ENV_VAR}"
        )
    return Path(raw).expanduser()


class SiteConfig:
    """Validated site configuration with lazily built collaborators.

    Usage:
        cfg = SiteConfig.load(Path("site.yaml"))
        validator = ScheduledStateTransitionValidator.create(cfg)
    """

    def __init__(self, data: Mapping[str, Any], *, source: Optional[Path] = None) -> None:
        self.source = source
        self._data: Dict[str, Any] = dict(data or {})
        validate_payload(self._data, CONFIG_SCHEMA)

    @classmethod
    def load(cls, path: Optional[str | Path] = None) -> "SiteConfig":
        """Load and validate a YAML site configuration.

        Raises:
            ConfigurationError: If the file is missing, unreadable or invalid
        """
        config_path = resolve_config_path(path)
        try:
            data = read_yaml(config_path, default={}, raise_on_error=True)
        except FileNotFoundError as exc:
            raise ConfigurationError(str(exc), context={"path": str(config_path)}) from exc
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigurationError(
                f"Could not read configuration {config_path}: {exc}",
                context={"path": str(config_path)},
            ) from exc

        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"Configuration must be a YAML mapping, got {type(data).__name__}",
                context={"path": str(config_path)},
            )
        logger.debug("Loaded site configuration from %s", config_path)
        return cls(data, source=config_path)

    @property
    def data(self) -> Dict[str, Any]:
        return self._data

    @cached_property
    def moderation_information(self) -> ModerationInformation:
        return ModerationInformation.from_dict(self._data.get("workflows") or {})

    @cached_property
    def subtype_store(self) -> InMemorySubtypeConfigStore:
        return InMemorySubtypeConfigStore.from_dict(self._data.get("scheduledUpdateTypes") or {})

    @cached_property
    def field_metadata(self) -> InMemoryFieldMetadataSource:
        return InMemoryFieldMetadataSource.from_dict(self._data.get("fields") or {})

    def check(self) -> None:
        """Build every collaborator so cross-reference errors surface now."""
        _ = (self.moderation_information, self.subtype_store, self.field_metadata)


__all__ = ["CONFIG_ENV_VAR", "SiteConfig", "resolve_config_path"]
