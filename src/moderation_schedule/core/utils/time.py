"""Timestamp helpers.

Scheduled update timestamps are integer UNIX epoch seconds. Documents may
also carry ISO 8601 strings or YAML datetimes, which are normalized here.
"""
from __future__ import annotations

import math
from datetime import date, datetime, timezone
from email.utils import format_datetime
from typing import Any, Optional

UNSCHEDULED = "an unscheduled time"

# Range representable as a datetime (years 1 through 9999).
MIN_TIMESTAMP = int(datetime(1, 1, 1, tzinfo=timezone.utc).timestamp())
MAX_TIMESTAMP = int(datetime(9999, 12, 31, 23, 59, 59, tzinfo=timezone.utc).timestamp())


def _in_range(timestamp: int) -> int:
    if not MIN_TIMESTAMP <= timestamp <= MAX_TIMESTAMP:
        raise ValueError(f"Timestamp out of range: {timestamp}")
    return timestamp


def coerce_timestamp(value: Any) -> Optional[int]:
    """Normalize a timestamp value to epoch seconds.

    Accepts ints, numeric strings, ISO 8601 strings and datetime objects.
    Naive datetimes are treated as UTC. ``None`` and ``""`` yield ``None``.

    Raises:
        ValueError: If the value cannot be interpreted as a timestamp, is not
            finite, or falls outside years 1 to 9999 (e.g. epoch milliseconds).
    """
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError(f"Invalid timestamp: {value!r}")
    if isinstance(value, int):
        return _in_range(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Invalid timestamp: {value!r}")
        return _in_range(int(value))
    if isinstance(value, datetime):
        dt = value if value.tzinfo else value.replace(tzinfo=timezone.utc)
        return int(dt.timestamp())
    if isinstance(value, date):
        return int(datetime(value.year, value.month, value.day, tzinfo=timezone.utc).timestamp())
    if isinstance(value, str):
        text = value.strip()
        if text.lstrip("-").isdigit():
            return _in_range(int(text))
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError as exc:
            raise ValueError(f"Invalid timestamp: {value!r}") from exc
        return coerce_timestamp(parsed)
    raise ValueError(f"Invalid timestamp: {value!r}")


def format_timestamp(timestamp: Optional[int]) -> str:
    """Format epoch seconds as an RFC 2822 date in UTC.

    Timestamps outside the datetime range are rendered as the raw number.
    """
    if timestamp is None:
        return UNSCHEDULED
    if not MIN_TIMESTAMP <= timestamp <= MAX_TIMESTAMP:
        return str(timestamp)
    dt = datetime.fromtimestamp(int(timestamp), tz=timezone.utc)
    return format_datetime(dt)


__all__ = ["UNSCHEDULED", "MIN_TIMESTAMP", "MAX_TIMESTAMP", "coerce_timestamp", "format_timestamp"]
