"""
Worked-hours computation.

Pure functions, no error path: malformed or missing times give a zero
duration instead of raising.
"""

from typing import Optional

MINUTES_PER_DAY = 24 * 60


def time_to_minutes(value: Optional[str]) -> Optional[int]:
    """
    Convert "HH:MM" to minutes since midnight.

    Returns None for absent or unparseable values.
    """
    if not value:
        return None
    try:
        hours, minutes = value.split(":")
        return int(hours) * 60 + int(minutes)
    except (ValueError, AttributeError):
        return None


def calculate_duration(start: Optional[str], end: Optional[str], break_minutes: int = 0) -> float:
    """
    Worked hours between start and end minus the break.

    An end earlier than the start is read as crossing midnight (one day only).
    The result is never negative and is rounded to 2 decimal places.
    """
    start_min = time_to_minutes(start)
    end_min = time_to_minutes(end)
    if start_min is None or end_min is None:
        return 0.0

    if end_min < start_min:
        end_min += MINUTES_PER_DAY

    try:
        worked = end_min - start_min - int(break_minutes or 0)
    except (TypeError, ValueError):
        return 0.0
    return round(max(0, worked) / 60, 2)
