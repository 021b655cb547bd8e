# backend/app/services/availability_gateway.py
"""
Persistence boundary for interactive availability editing.

`AvailabilityGateway` is what an edit session talks to: load a week, replace
one day, or replace several days atomically. Implementations raise
`AvailabilityPersistenceException` for any failure to store a write; the
session turns that into a rollback. No retries happen here.
"""

import asyncio
import logging
from typing import Mapping, Protocol, Sequence

from ..core.exceptions import AvailabilityPersistenceException, DomainException
from ..domain.availability import WeeklyAvailability
from ..domain.time_interval import TimeInterval
from ..principal import EditContext
from .instructor_availability_service import InstructorAvailabilityService

logger = logging.getLogger(__name__)


class AvailabilityGateway(Protocol):
    async def load_week(self, instructor_id: str) -> WeeklyAvailability:
        ...

    async def replace_day(
        self, instructor_id: str, day_of_week: int, blocks: Sequence[TimeInterval]
    ) -> None:
        ...

    async def replace_days(
        self, instructor_id: str, days: Mapping[int, Sequence[TimeInterval]]
    ) -> None:
        ...


class SqlAvailabilityGateway:
    """
    Gateway over `InstructorAvailabilityService` for one resolved `EditContext`.

    The synchronous service runs in a worker thread so the edit session's
    event loop is never blocked by database I/O. Calls for any instructor
    other than the context's are refused.
    """

    def __init__(self, service: InstructorAvailabilityService, context: EditContext):
        self.service = service
        self.context = context

    def _check_instructor(self, instructor_id: str) -> None:
        if instructor_id != self.context.instructor_id:
            raise AvailabilityPersistenceException(
                "Edit session is bound to another instructor",
                details={"instructor_id": instructor_id},
            )

    async def load_week(self, instructor_id: str) -> WeeklyAvailability:
        self._check_instructor(instructor_id)
        return await asyncio.to_thread(self.service.load_week, self.context)

    async def replace_day(
        self, instructor_id: str, day_of_week: int, blocks: Sequence[TimeInterval]
    ) -> None:
        await self.replace_days(instructor_id, {day_of_week: blocks})

    async def replace_days(
        self, instructor_id: str, days: Mapping[int, Sequence[TimeInterval]]
    ) -> None:
        self._check_instructor(instructor_id)
        try:
            await asyncio.to_thread(self.service.write_days, self.context, days)
        except DomainException as exc:
            logger.error(
                "Availability write failed for instructor %s days %s: %s",
                instructor_id,
                sorted(days),
                exc.message,
            )
            if isinstance(exc, AvailabilityPersistenceException):
                raise
            raise AvailabilityPersistenceException(
                details={"cause": exc.code, "days": sorted(days)}
            ) from exc
