"""Day and week availability values.

A day's block list is replaced wholesale; `replace_day` is the only way a day
changes, and every helper here (clear, copy, whole-week replace) goes through
the same validation before producing a new value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Sequence, Tuple, Union

from ..core.constants import (
    DEFAULT_TIMEZONE,
    MAX_BLOCKS_PER_DAY,
    MIN_BLOCK_MINUTES,
    MINUTES_PER_DAY,
    WEEKDAYS,
)
from .time_interval import TimeInterval
from .validation import validate_block_set
from .violations import InvalidArgument, Violation

DAYS_IN_WEEK = 7
ALL_DAYS: Tuple[int, ...] = tuple(range(DAYS_IN_WEEK))

BlockRow = Tuple[int, int, int]


def is_valid_day(day_of_week: Any) -> bool:
    if isinstance(day_of_week, bool) or not isinstance(day_of_week, int):
        return False
    return 0 <= day_of_week < DAYS_IN_WEEK


@dataclass(frozen=True)
class DayAvailability:
    """Blocks for one weekday (0 = Sunday), sorted by start and non-overlapping."""

    day_of_week: int
    blocks: Tuple[TimeInterval, ...] = ()

    @classmethod
    def empty(cls, day_of_week: int) -> "DayAvailability":
        return cls(day_of_week=day_of_week, blocks=())

    @property
    def is_available(self) -> bool:
        return bool(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)

    def __iter__(self) -> Iterator[TimeInterval]:
        return iter(self.blocks)

    def to_wire(self) -> List[Dict[str, str]]:
        return [block.to_wire() for block in self.blocks]


def replace_day(
    day: DayAvailability,
    blocks: Sequence[TimeInterval],
    *,
    max_blocks: int = MAX_BLOCKS_PER_DAY,
    min_minutes: int = MIN_BLOCK_MINUTES,
) -> Union[DayAvailability, Violation]:
    """Validate a full block list for `day` and return the day with blocks sorted by start."""
    candidate = list(blocks)
    violation = validate_block_set(candidate, max_blocks=max_blocks, min_minutes=min_minutes)
    if violation is not None:
        return violation
    return DayAvailability(day_of_week=day.day_of_week, blocks=tuple(sorted(candidate)))


def clear_day(day: DayAvailability) -> DayAvailability:
    return DayAvailability.empty(day.day_of_week)


def copy_day(
    source: DayAvailability, target_days: Iterable[int]
) -> Union[Dict[int, DayAvailability], InvalidArgument]:
    """
    Clone `source`'s blocks verbatim into each target day, overwriting them.

    No merge takes place, so existing target content is irrelevant. Copying a
    day onto itself, an empty target set, or a target outside 0..6 is refused.
    """
    targets = sorted(set(target_days))
    if not targets:
        return InvalidArgument(reason="Select at least one day to copy to")
    if any(not is_valid_day(target) for target in targets):
        return InvalidArgument(reason="Target days must be between 0 (Sunday) and 6 (Saturday)")
    if source.day_of_week in targets:
        return InvalidArgument(reason="Cannot copy a day to itself")
    return {
        target: DayAvailability(day_of_week=target, blocks=source.blocks) for target in targets
    }


def copy_to_weekdays(source: DayAvailability) -> Union[Dict[int, DayAvailability], InvalidArgument]:
    """Copy onto Monday through Friday; a weekday source is rejected as a copy onto itself."""
    return copy_day(source, WEEKDAYS)


def copy_to_day(
    source: DayAvailability, target_day: int
) -> Union[Dict[int, DayAvailability], InvalidArgument]:
    return copy_day(source, {target_day})


@dataclass(frozen=True)
class WeeklyAvailability:
    """An instructor's recurring week: all seven days always present."""

    instructor_id: str
    days: Mapping[int, DayAvailability] = field(hash=False)
    timezone: str = DEFAULT_TIMEZONE

    def __post_init__(self) -> None:
        if sorted(self.days) != list(ALL_DAYS):
            raise ValueError("WeeklyAvailability requires exactly the days 0..6")
        for key, day in self.days.items():
            if day.day_of_week != key:
                raise ValueError(f"Day {key} holds blocks for day {day.day_of_week}")

    @classmethod
    def empty(cls, instructor_id: str, timezone: str = DEFAULT_TIMEZONE) -> "WeeklyAvailability":
        return cls(
            instructor_id=instructor_id,
            days={day: DayAvailability.empty(day) for day in ALL_DAYS},
            timezone=timezone,
        )

    def day(self, day_of_week: int) -> DayAvailability:
        if not is_valid_day(day_of_week):
            raise ValueError(f"Invalid day of week: {day_of_week}")
        return self.days[day_of_week]

    def with_day(self, day: DayAvailability) -> "WeeklyAvailability":
        return self.apply({day.day_of_week: day})

    def apply(self, changes: Mapping[int, DayAvailability]) -> "WeeklyAvailability":
        """Return a new week with the given days swapped in."""
        days = dict(self.days)
        days.update(changes)
        return WeeklyAvailability(
            instructor_id=self.instructor_id, days=days, timezone=self.timezone
        )

    @property
    def days_with_availability(self) -> int:
        return sum(1 for day in self.days.values() if day.blocks)

    @property
    def has_availability(self) -> bool:
        return self.days_with_availability > 0

    def to_wire(self) -> Dict[str, List[Dict[str, str]]]:
        """`{"0": [{startTime, endTime}], ..., "6": [...]}` with every day present."""
        return {str(day): self.days[day].to_wire() for day in ALL_DAYS}

    @classmethod
    def from_rows(
        cls,
        instructor_id: str,
        rows: Iterable[BlockRow],
        *,
        timezone: str = DEFAULT_TIMEZONE,
    ) -> "WeeklyAvailability":
        """
        Group stored `(day_of_week, start_minutes, end_minutes)` rows into a week.

        Rows are trusted (they were validated on write), so they are sorted but
        not re-validated. Out-of-range minutes or day numbers raise ValueError.
        """
        grouped: Dict[int, List[TimeInterval]] = {day: [] for day in ALL_DAYS}
        for day_of_week, start, end in rows:
            if not is_valid_day(day_of_week):
                raise ValueError(f"Invalid day of week in stored row: {day_of_week}")
            if not 0 <= start < end <= MINUTES_PER_DAY:
                raise ValueError(f"Invalid stored block: {start}-{end}")
            grouped[day_of_week].append(TimeInterval(start, end))
        return cls(
            instructor_id=instructor_id,
            days={
                day: DayAvailability(day_of_week=day, blocks=tuple(sorted(blocks)))
                for day, blocks in grouped.items()
            },
            timezone=timezone,
        )


def replace_week(
    week: WeeklyAvailability,
    schedule: Mapping[int, Sequence[TimeInterval]],
    *,
    max_blocks: int = MAX_BLOCKS_PER_DAY,
    min_minutes: int = MIN_BLOCK_MINUTES,
) -> Union[WeeklyAvailability, Tuple[int, Violation]]:
    """
    Replace the whole schedule; days missing from `schedule` become empty.

    Nothing is applied unless every supplied day validates. On rejection the
    offending day is returned with its violation.
    """
    days: Dict[int, DayAvailability] = {}
    for day_of_week in sorted(schedule):
        if not is_valid_day(day_of_week):
            return day_of_week, InvalidArgument(reason=f"Invalid day of week: {day_of_week}")
        result = replace_day(
            DayAvailability.empty(day_of_week),
            schedule[day_of_week],
            max_blocks=max_blocks,
            min_minutes=min_minutes,
        )
        if isinstance(result, Violation):
            return day_of_week, result
        days[day_of_week] = result
    for day_of_week in ALL_DAYS:
        days.setdefault(day_of_week, DayAvailability.empty(day_of_week))
    return WeeklyAvailability(instructor_id=week.instructor_id, days=days, timezone=week.timezone)


def day_changes(
    before: WeeklyAvailability, after: WeeklyAvailability
) -> Dict[int, DayAvailability]:
    """Days whose block lists differ between two weeks."""
    return {
        day: after.days[day]
        for day in ALL_DAYS
        if before.days[day].blocks != after.days[day].blocks
    }

