# backend/app/repositories/instructor_availability_repository.py
"""
Instructor Availability Repository for the Cadence platform.

Data access for recurring weekly blocks. Every query is scoped by both
organization and instructor membership. Days are replaced wholesale:
`replace_day` deletes the day's rows and inserts the new list, and the
calling service wraps it in a transaction so readers never see a half-written
day.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Sequence

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..domain.time_interval import TimeInterval
from ..models.instructor_availability import InstructorAvailability
from ..utils.time_utils import minutes_to_time
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class InstructorAvailabilityRepository(BaseRepository[InstructorAvailability]):
    """Repository for `instructor_availability` rows."""

    def __init__(self, db: Session):
        super().__init__(db, InstructorAvailability)

    def _scoped(self, organization_id: str, instructor_id: str):
        return self._build_query().filter(
            InstructorAvailability.organization_id == organization_id,
            InstructorAvailability.instructor_id == instructor_id,
        )

    def list_for_instructor(
        self, organization_id: str, instructor_id: str
    ) -> List[InstructorAvailability]:
        """All blocks of one instructor ordered by day, then start time."""
        query = self._scoped(organization_id, instructor_id).order_by(
            InstructorAvailability.day_of_week, InstructorAvailability.start_time
        )
        return self._execute_query(query)

    def delete_day(self, organization_id: str, instructor_id: str, day_of_week: int) -> int:
        try:
            return (
                self._scoped(organization_id, instructor_id)
                .filter(InstructorAvailability.day_of_week == day_of_week)
                .delete(synchronize_session=False)
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error deleting availability for day {day_of_week}: {str(e)}")
            raise RepositoryException(f"Failed to delete availability: {str(e)}")

    def delete_all(self, organization_id: str, instructor_id: str) -> int:
        try:
            return self._scoped(organization_id, instructor_id).delete(synchronize_session=False)
        except SQLAlchemyError as e:
            self.logger.error(f"Error deleting availability for {instructor_id}: {str(e)}")
            raise RepositoryException(f"Failed to delete availability: {str(e)}")

    def replace_day(
        self,
        organization_id: str,
        instructor_id: str,
        day_of_week: int,
        blocks: Sequence[TimeInterval],
    ) -> List[InstructorAvailability]:
        """Delete a day's rows and insert `blocks` in their place (flush only)."""
        removed = self.delete_day(organization_id, instructor_id, day_of_week)
        created = self.bulk_create(
            [
                {
                    "instructor_id": instructor_id,
                    "organization_id": organization_id,
                    "day_of_week": day_of_week,
                    "start_time": minutes_to_time(block.start),
                    "end_time": minutes_to_time(block.end),
                }
                for block in blocks
            ]
        )
        logger.debug(
            "Replaced day %s for %s: removed %s, inserted %s",
            day_of_week,
            instructor_id,
            removed,
            len(created),
        )
        return created

    def replace_days(
        self,
        organization_id: str,
        instructor_id: str,
        days: Mapping[int, Sequence[TimeInterval]],
    ) -> int:
        """Replace several days; returns the number of rows inserted."""
        inserted = 0
        for day_of_week in sorted(days):
            inserted += len(
                self.replace_day(organization_id, instructor_id, day_of_week, days[day_of_week])
            )
        return inserted

    def count_days_with_availability(
        self, organization_id: str, instructor_ids: Iterable[str]
    ) -> Dict[str, int]:
        """Distinct weekdays holding at least one block, per instructor."""
        ids = list(instructor_ids)
        if not ids:
            return {}
        try:
            rows = (
                self.db.query(
                    InstructorAvailability.instructor_id,
                    func.count(func.distinct(InstructorAvailability.day_of_week)),
                )
                .filter(
                    InstructorAvailability.organization_id == organization_id,
                    InstructorAvailability.instructor_id.in_(ids),
                )
                .group_by(InstructorAvailability.instructor_id)
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error counting availability days: {str(e)}")
            raise RepositoryException(f"Failed to count availability days: {str(e)}")
        return {instructor_id: int(count) for instructor_id, count in rows}
