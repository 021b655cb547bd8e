from __future__ import annotations

from datetime import time

from ..core.constants import MINUTES_PER_DAY, MINUTES_PER_HOUR


def time_to_minutes(t: time, *, is_end_time: bool = False) -> int:
    """
    Convert time to minutes since midnight.

    Args:
        t: Time object.
        is_end_time: If True, treat time(0, 0) as 1440 (end of day).

    Returns:
        Minutes since midnight (0-1440).
    """
    minutes = t.hour * MINUTES_PER_HOUR + t.minute
    if is_end_time and minutes == 0:
        return MINUTES_PER_DAY
    return minutes


def minutes_to_time(minutes: int) -> time:
    """Convert minutes since midnight (0-1439) to a `datetime.time` for TIME columns."""
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError(f"minutes out of range: {minutes}")
    return time(minutes // MINUTES_PER_HOUR, minutes % MINUTES_PER_HOUR)
