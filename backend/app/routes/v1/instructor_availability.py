# backend/app/routes/v1/instructor_availability.py
"""
Instructor availability routes - API v1

Recurring weekly availability under /api/v1/instructor-availability.
All business logic delegated to InstructorAvailabilityService; the caller is
resolved from the organization / membership headers.

Endpoints:
    GET /                              → Weekly schedule (own, or any for admins)
    PUT /days/{day_of_week}            → Replace one day's blocks
    PUT /week                          → Replace the whole week
    DELETE /days/{day_of_week}         → Clear one day
    POST /copy                         → Copy one day onto other days
    GET /instructors                   → Admin overview of every instructor
    GET /time-options                  → Selectable start/end times
"""

import asyncio
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from ...api.dependencies import get_current_principal, get_instructor_availability_service
from ...core.config import settings
from ...core.exceptions import DomainException
from ...domain.time_interval import time_options
from ...principal import ActorPrincipal
from ...schemas.instructor_availability import (
    CopyDayRequest,
    CopyDayResponse,
    DayAvailabilityResponse,
    InstructorSummaryResponse,
    InstructorSummaryUser,
    OperationResponse,
    SetDayRequest,
    SetWeekRequest,
    TimeOptionResponse,
    WeeklyAvailabilityResponse,
)
from ...services.instructor_availability_service import InstructorAvailabilityService

logger = logging.getLogger(__name__)

# V1 router - no prefix here, will be added when mounting in main.py
router = APIRouter(tags=["instructor-availability-v1"])


@router.get("", response_model=WeeklyAvailabilityResponse, response_model_by_alias=True)
async def get_weekly_availability(
    instructor_id: Optional[str] = Query(None, alias="instructorId"),
    principal: ActorPrincipal = Depends(get_current_principal),
    service: InstructorAvailabilityService = Depends(get_instructor_availability_service),
) -> WeeklyAvailabilityResponse:
    """
    Get the weekly schedule of the caller, or of `instructorId` for admins.

    Every day 0 (Sunday) through 6 (Saturday) is present in the response;
    days without blocks map to an empty list.
    """
    try:
        week = await asyncio.to_thread(service.get_availability, principal, instructor_id)
        return WeeklyAvailabilityResponse.from_domain(week)
    except DomainException as e:
        raise e.to_http_exception()
    except Exception as e:
        logger.error(f"Unexpected error getting availability: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.put(
    "/days/{day_of_week}", response_model=DayAvailabilityResponse, response_model_by_alias=True
)
async def set_day_availability(
    payload: SetDayRequest,
    day_of_week: int = Path(..., ge=0, le=6),
    principal: ActorPrincipal = Depends(get_current_principal),
    service: InstructorAvailabilityService = Depends(get_instructor_availability_service),
) -> DayAvailabilityResponse:
    """Replace every block of one weekday; an empty list clears the day."""
    try:
        day = await asyncio.to_thread(
            service.set_day, principal, day_of_week, payload.intervals(), payload.instructor_id
        )
        return DayAvailabilityResponse.from_domain(day)
    except DomainException as e:
        raise e.to_http_exception()
    except Exception as e:
        logger.error(f"Unexpected error setting day {day_of_week}: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.put("/week", response_model=OperationResponse)
async def set_week_availability(
    payload: SetWeekRequest,
    principal: ActorPrincipal = Depends(get_current_principal),
    service: InstructorAvailabilityService = Depends(get_instructor_availability_service),
) -> OperationResponse:
    """
    Replace the whole weekly schedule.

    Days missing from `schedule` become unavailable. Nothing is written if any
    day is invalid.
    """
    try:
        await asyncio.to_thread(
            service.set_week, principal, payload.intervals_by_day(), payload.instructor_id
        )
        return OperationResponse(success=True)
    except DomainException as e:
        raise e.to_http_exception()
    except Exception as e:
        logger.error(f"Unexpected error setting week: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/days/{day_of_week}", response_model=OperationResponse)
async def clear_day_availability(
    day_of_week: int = Path(..., ge=0, le=6),
    instructor_id: Optional[str] = Query(None, alias="instructorId"),
    principal: ActorPrincipal = Depends(get_current_principal),
    service: InstructorAvailabilityService = Depends(get_instructor_availability_service),
) -> OperationResponse:
    try:
        await asyncio.to_thread(service.clear_day, principal, day_of_week, instructor_id)
        return OperationResponse(success=True)
    except DomainException as e:
        raise e.to_http_exception()
    except Exception as e:
        logger.error(f"Unexpected error clearing day {day_of_week}: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/copy", response_model=CopyDayResponse, response_model_by_alias=True)
async def copy_day_availability(
    payload: CopyDayRequest,
    principal: ActorPrincipal = Depends(get_current_principal),
    service: InstructorAvailabilityService = Depends(get_instructor_availability_service),
) -> CopyDayResponse:
    """Overwrite each target day with the source day's blocks."""
    try:
        copied = await asyncio.to_thread(
            service.copy_day,
            principal,
            payload.source_day,
            payload.target_days,
            payload.instructor_id,
        )
        return CopyDayResponse(success=True, copied_blocks=copied)
    except DomainException as e:
        raise e.to_http_exception()
    except Exception as e:
        logger.error(f"Unexpected error copying day {payload.source_day}: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get(
    "/instructors", response_model=List[InstructorSummaryResponse], response_model_by_alias=True
)
async def list_instructor_summaries(
    principal: ActorPrincipal = Depends(get_current_principal),
    service: InstructorAvailabilityService = Depends(get_instructor_availability_service),
) -> List[InstructorSummaryResponse]:
    """List every active instructor with the number of days they are available (admin only)."""
    try:
        summaries = await asyncio.to_thread(service.list_instructor_summaries, principal)
        return [
            InstructorSummaryResponse(
                id=summary.membership_id,
                role=summary.role,
                user=InstructorSummaryUser(
                    first_name=summary.first_name,
                    last_name=summary.last_name,
                    email=summary.email,
                    timezone=summary.timezone,
                ),
                days_with_availability=summary.days_with_availability,
                has_availability=summary.has_availability,
            )
            for summary in summaries
        ]
    except DomainException as e:
        raise e.to_http_exception()
    except Exception as e:
        logger.error(f"Unexpected error listing instructor summaries: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/time-options", response_model=List[TimeOptionResponse])
async def list_time_options(
    principal: ActorPrincipal = Depends(get_current_principal),
) -> List[TimeOptionResponse]:
    """Every `HH:MM` value in snap steps across one day, with its 12-hour label."""
    return [
        TimeOptionResponse(value=value, label=label)
        for value, label in time_options(settings.availability_snap_minutes)
    ]
