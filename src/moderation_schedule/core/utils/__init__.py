"""Shared helpers for file I/O and timestamp handling."""
from __future__ import annotations

from .io import read_yaml
from .time import coerce_timestamp, format_timestamp

__all__ = ["read_yaml", "coerce_timestamp", "format_timestamp"]
