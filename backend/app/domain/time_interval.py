"""Wall-clock time primitives for weekly availability.

A time of day is an integer number of minutes since midnight. Intervals are
half-open (`[start, end)`), so touching blocks such as 09:00-10:00 and
10:00-11:00 do not overlap. No timezone is attached at this layer.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
import re
from typing import Dict, List, Tuple, Union

from ..core.constants import (
    GRID_END_MINUTES,
    GRID_START_MINUTES,
    MINUTES_PER_DAY,
    MINUTES_PER_HOUR,
    SNAP_MINUTES,
)
from .violations import InvalidFormat

TimeOfDay = int

_HHMM_RE = re.compile(r"([01][0-9]|2[0-3]):([0-5][0-9])")


@dataclass(frozen=True, order=True)
class TimeInterval:
    """Half-open wall-clock interval in minutes since midnight.

    `end > start` is not enforced here so that invalid candidates can be
    represented and reported by validation (as `InvalidRange`).
    """

    start: TimeOfDay
    end: TimeOfDay

    @property
    def duration_minutes(self) -> int:
        return self.end - self.start

    def overlaps(self, other: "TimeInterval") -> bool:
        return overlaps(self, other)

    def contains(self, minute: TimeOfDay) -> bool:
        return self.start <= minute < self.end

    def shifted(self, delta_minutes: int) -> "TimeInterval":
        return TimeInterval(self.start + delta_minutes, self.end + delta_minutes)

    def to_wire(self) -> Dict[str, str]:
        """Serialize as the `{startTime, endTime}` block used on the wire and in storage."""
        return {
            "startTime": format_time_of_day(self.start),
            "endTime": format_time_of_day(self.end),
        }

    @classmethod
    def from_strings(cls, start: str, end: str) -> Union["TimeInterval", InvalidFormat]:
        parsed_start = parse_time_of_day(start)
        if isinstance(parsed_start, InvalidFormat):
            return parsed_start
        parsed_end = parse_time_of_day(end)
        if isinstance(parsed_end, InvalidFormat):
            return parsed_end
        return cls(parsed_start, parsed_end)

    def __str__(self) -> str:
        return f"{format_time_of_day(self.start)}-{format_time_of_day(self.end)}"


def overlaps(a: TimeInterval, b: TimeInterval) -> bool:
    """True when two half-open intervals share at least one minute."""
    return a.start < b.end and b.start < a.end


def duration_minutes(interval: TimeInterval) -> int:
    return interval.end - interval.start


def parse_time_of_day(text: str) -> Union[TimeOfDay, InvalidFormat]:
    """
    Parse a strict 24-hour `HH:MM` string.

    Hours and minutes must both be two zero-padded digits, so "9:30",
    "24:00" and "09:30:00" are all rejected.

    Returns:
        Minutes since midnight, or `InvalidFormat` when the shape is wrong.
    """
    if not isinstance(text, str):
        return InvalidFormat(value=repr(text))
    match = _HHMM_RE.fullmatch(text)
    if match is None:
        return InvalidFormat(value=text)
    hours, minutes = match.groups()
    return int(hours) * MINUTES_PER_HOUR + int(minutes)


def require_time_of_day(text: str) -> TimeOfDay:
    """Parse `HH:MM`, raising ValueError for use inside schema validators."""
    parsed = parse_time_of_day(text)
    if isinstance(parsed, InvalidFormat):
        raise ValueError(parsed.message)
    return parsed


def format_time_of_day(minutes: TimeOfDay) -> str:
    """Render minutes since midnight as zero-padded `HH:MM`."""
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError(f"minutes out of range: {minutes}")
    return f"{minutes // MINUTES_PER_HOUR:02d}:{minutes % MINUTES_PER_HOUR:02d}"


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (toward +infinity)."""
    return int(math.floor(value + 0.5))


def snap(
    minutes: float,
    grid: int = SNAP_MINUTES,
    *,
    grid_start: int = GRID_START_MINUTES,
    grid_end: int = GRID_END_MINUTES,
) -> TimeOfDay:
    """Round to the nearest multiple of `grid`, then clamp to `[grid_start, grid_end]`."""
    if grid <= 0:
        raise ValueError("grid must be positive")
    snapped = round_half_up(minutes / grid) * grid
    return max(grid_start, min(grid_end, snapped))


def display_label(minutes: TimeOfDay) -> str:
    """12-hour label such as '9:30 AM' for a time of day."""
    hours, mins = divmod(minutes, MINUTES_PER_HOUR)
    hours %= 24
    period = "PM" if hours >= 12 else "AM"
    display_hours = 12 if hours == 0 else hours - 12 if hours > 12 else hours
    return f"{display_hours}:{mins:02d} {period}"


def time_options(quantum: int = SNAP_MINUTES) -> List[Tuple[str, str]]:
    """All `(value, label)` choices in `quantum` steps across one day, for select inputs."""
    return [
        (format_time_of_day(minutes), display_label(minutes))
        for minutes in range(0, MINUTES_PER_DAY, quantum)
    ]
