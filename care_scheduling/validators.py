"""Shared validation utilities"""

import re

TIME_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")
COLOR_RE = re.compile(r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$")


def validate_time(value: str) -> str:
    """
    Validate a wall-clock time in HH:mm format (00:00 through 23:59).

    Raises:
        ValueError: If the string is not a valid HH:mm time
    """
    if not isinstance(value, str) or not TIME_RE.match(value):
        raise ValueError(f"Invalid time {value!r}, expected HH:mm")
    return value


def validate_color(value: str) -> str:
    """Validate a #RGB or #RRGGBB hex color"""
    if not isinstance(value, str) or not COLOR_RE.match(value):
        raise ValueError(f"Invalid color {value!r}, expected hex format (#RRGGBB)")
    return value


def time_to_minutes(value: str) -> int:
    match = TIME_RE.match(value)
    if not match:
        raise ValueError(f"Invalid time {value!r}, expected HH:mm")
    return int(match.group(1)) * 60 + int(match.group(2))
