# backend/app/schemas/instructor_availability.py
"""
Recurring weekly availability schemas for the Cadence platform.

Blocks travel as `{"startTime": "HH:MM", "endTime": "HH:MM"}`. Schemas only
check the time format; ordering, duration, count and overlap rules belong to
the domain layer so the same rules apply to every caller.
"""

from typing import Dict, List, Optional

from pydantic import Field, field_validator

from ..core.enums import MembershipRole
from ..domain.availability import DayAvailability, WeeklyAvailability
from ..domain.time_interval import TimeInterval, format_time_of_day, require_time_of_day
from ._strict_base import StrictRequestModel
from .base import StandardizedModel

DAY_KEYS = {str(day) for day in range(7)}


class TimeBlock(StrictRequestModel):
    """One wall-clock block in 24-hour `HH:MM` notation."""

    start_time: str = Field(..., alias="startTime", examples=["09:00"])
    end_time: str = Field(..., alias="endTime", examples=["17:00"])

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time_format(cls, v: str) -> str:
        require_time_of_day(v)
        return v

    def to_interval(self) -> TimeInterval:
        return TimeInterval(require_time_of_day(self.start_time), require_time_of_day(self.end_time))

    @classmethod
    def from_interval(cls, interval: TimeInterval) -> "TimeBlock":
        return cls(
            start_time=format_time_of_day(interval.start),
            end_time=format_time_of_day(interval.end),
        )


class SetDayRequest(StrictRequestModel):
    """Replace every block of one weekday."""

    instructor_id: Optional[str] = Field(None, alias="instructorId")
    blocks: List[TimeBlock] = Field(default_factory=list)

    def intervals(self) -> List[TimeInterval]:
        return [block.to_interval() for block in self.blocks]


class SetWeekRequest(StrictRequestModel):
    """Replace the whole weekly schedule; days left out become unavailable."""

    instructor_id: Optional[str] = Field(None, alias="instructorId")
    schedule: Dict[str, List[TimeBlock]]

    @field_validator("schedule")
    @classmethod
    def validate_day_keys(cls, v: Dict[str, List[TimeBlock]]) -> Dict[str, List[TimeBlock]]:
        unknown = sorted(key for key in v if key not in DAY_KEYS)
        if unknown:
            raise ValueError(f"Schedule keys must be days 0-6 (got {', '.join(unknown)})")
        return v

    def intervals_by_day(self) -> Dict[int, List[TimeInterval]]:
        return {
            int(day): [block.to_interval() for block in blocks]
            for day, blocks in self.schedule.items()
        }


class CopyDayRequest(StrictRequestModel):
    """Overwrite the target days with a copy of the source day."""

    instructor_id: Optional[str] = Field(None, alias="instructorId")
    source_day: int = Field(..., alias="sourceDay", ge=0, le=6)
    target_days: List[int] = Field(..., alias="targetDays", min_length=1, max_length=6)

    @field_validator("target_days")
    @classmethod
    def validate_target_days(cls, v: List[int]) -> List[int]:
        if any(day < 0 or day > 6 for day in v):
            raise ValueError("Target days must be between 0 and 6")
        return v


class WeeklyAvailabilityResponse(StandardizedModel):
    instructor_id: str = Field(..., alias="instructorId")
    timezone: str
    availability: Dict[str, List[TimeBlock]]

    @classmethod
    def from_domain(cls, week: WeeklyAvailability) -> "WeeklyAvailabilityResponse":
        return cls(
            instructor_id=week.instructor_id,
            timezone=week.timezone,
            availability={
                str(day): [TimeBlock.from_interval(block) for block in value.blocks]
                for day, value in sorted(week.days.items())
            },
        )


class DayAvailabilityResponse(StandardizedModel):
    success: bool = True
    day_of_week: int = Field(..., alias="dayOfWeek")
    blocks: List[TimeBlock]

    @classmethod
    def from_domain(cls, day: DayAvailability) -> "DayAvailabilityResponse":
        return cls(
            day_of_week=day.day_of_week,
            blocks=[TimeBlock.from_interval(block) for block in day.blocks],
        )


class OperationResponse(StandardizedModel):
    success: bool = True


class CopyDayResponse(StandardizedModel):
    success: bool = True
    copied_blocks: int = Field(..., alias="copiedBlocks")


class InstructorSummaryUser(StandardizedModel):
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    email: str
    timezone: str


class InstructorSummaryResponse(StandardizedModel):
    id: str
    role: MembershipRole
    user: InstructorSummaryUser
    days_with_availability: int = Field(..., alias="daysWithAvailability")
    has_availability: bool = Field(..., alias="hasAvailability")


class TimeOptionResponse(StandardizedModel):
    """One choice for the select-based block editor."""

    value: str
    label: str
