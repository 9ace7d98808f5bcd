"""Site configuration and document loading.

YAML-only: the site configuration and entity documents are YAML (JSON is a
subset and is accepted too), validated with JSON Schema.
"""
from __future__ import annotations

from .site import CONFIG_ENV_VAR, SiteConfig, resolve_config_path
from .documents import entity_from_dict, load_entity

__all__ = [
    "CONFIG_ENV_VAR",
    "SiteConfig",
    "resolve_config_path",
    "entity_from_dict",
    "load_entity",
]
