"""Loading of entity documents."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from moderation_schedule.core.entity.base import ContentRecord
from moderation_schedule.core.exceptions import EntityDocumentError, UnknownBundleError
from moderation_schedule.core.schema.fields import ScheduledUpdateFieldResolver
from moderation_schedule.core.schema.validation import validate_payload_safe
from moderation_schedule.core.utils.io import read_yaml

from .site import SiteConfig

logger = logging.getLogger(__name__)

ENTITY_SCHEMA = "entity.schema"


def entity_from_dict(data: Mapping[str, Any], config: Optional[SiteConfig] = None) -> ContentRecord:
    """Build a ContentRecord from an entity document.

    When ``config`` is given, the bundle's field metadata decides which
    fields hold scheduled update references.

    Raises:
        EntityDocumentError: If the document does not match the entity schema
    """
    errors = validate_payload_safe(data, ENTITY_SCHEMA)
    if errors:
        raise EntityDocumentError(
            f"Invalid entity document: {'; '.join(errors)}", context={"errors": errors}
        )

    reference_fields = None
    if config is not None:
        resolver = ScheduledUpdateFieldResolver(config.field_metadata)
        try:
            reference_fields = resolver.get_scheduled_update_reference_fields(
                str(data["entityType"]), str(data["bundle"])
            )
        except UnknownBundleError:
            logger.debug("No field metadata for %s:%s", data["entityType"], data["bundle"])
    return ContentRecord.from_dict(data, reference_fields=reference_fields)


def load_entity(path: str | Path, config: Optional[SiteConfig] = None) -> ContentRecord:
    """Load an entity document from YAML (or JSON) file."""
    path = Path(path)
    try:
        data = read_yaml(path, default=None, raise_on_error=True)
    except FileNotFoundError as exc:
        raise EntityDocumentError(str(exc), context={"path": str(path)}) from exc
    except (OSError, yaml.YAMLError) as exc:
        raise EntityDocumentError(
            f"Could not read entity document {path}: {exc}", context={"path": str(path)}
        ) from exc
    if not isinstance(data, Mapping):
        raise EntityDocumentError(
            f"Entity document must be a mapping: {path}", context={"path": str(path)}
        )
    return entity_from_dict(data, config)


__all__ = ["entity_from_dict", "load_entity"]
