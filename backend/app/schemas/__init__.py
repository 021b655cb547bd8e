# backend/app/schemas/__init__.py
"""
Pydantic schemas for the Cadence platform.
"""

from .instructor_availability import (
    CopyDayRequest,
    CopyDayResponse,
    DayAvailabilityResponse,
    InstructorSummaryResponse,
    InstructorSummaryUser,
    OperationResponse,
    SetDayRequest,
    SetWeekRequest,
    TimeBlock,
    WeeklyAvailabilityResponse,
)

__all__ = [
    "CopyDayRequest",
    "CopyDayResponse",
    "DayAvailabilityResponse",
    "InstructorSummaryResponse",
    "InstructorSummaryUser",
    "OperationResponse",
    "SetDayRequest",
    "SetWeekRequest",
    "TimeBlock",
    "WeeklyAvailabilityResponse",
]
