# backend/app/services/instructor_availability_service.py
"""
Instructor Availability Service for the Cadence platform.

Reads and replaces recurring weekly availability for organization members.
All block rules (count, range, duration, overlap) come from the domain layer;
this service adds authorization, organization scoping and transactions, and
turns domain violations into `AvailabilityValidationException`.

Two entry styles are offered:
- actor-based methods (`get_availability`, `set_day`, ...) used by the API
  routes, which resolve an `EditContext` from the caller first;
- context-based methods (`load_week`, `write_days`) used by the persistence
  gateway of an interactive edit session that already holds a context.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.constants import ERROR_INSTRUCTOR_NOT_FOUND, ERROR_NOT_INSTRUCTOR_CAPABLE
from ..core.enums import MembershipRole
from ..core.exceptions import (
    AvailabilityValidationException,
    ForbiddenException,
    NotFoundException,
    ValidationException,
)
from ..core.timezone_utils import resolve_timezone_name
from ..domain.availability import (
    ALL_DAYS,
    DayAvailability,
    WeeklyAvailability,
    copy_day,
    is_valid_day,
    replace_day,
    replace_week,
)
from ..domain.time_interval import TimeInterval
from ..domain.violations import InvalidArgument, Violation
from ..principal import ActorPrincipal, EditContext
from ..repositories.factory import RepositoryFactory
from ..repositories.instructor_availability_repository import InstructorAvailabilityRepository
from ..repositories.membership_repository import MembershipRepository
from ..utils.time_utils import time_to_minutes
from .availability_access_policy import AvailabilityAccessPolicy
from .base import BaseService


@dataclass(frozen=True)
class InstructorAvailabilitySummary:
    """One row of the admin team overview."""

    membership_id: str
    role: MembershipRole
    email: str
    first_name: Optional[str]
    last_name: Optional[str]
    timezone: str
    days_with_availability: int

    @property
    def has_availability(self) -> bool:
        return self.days_with_availability > 0


class InstructorAvailabilityService(BaseService):
    """Organization-scoped reads and whole-day writes of weekly availability."""

    def __init__(
        self,
        db: Session,
        availability_repository: Optional[InstructorAvailabilityRepository] = None,
        membership_repository: Optional[MembershipRepository] = None,
        policy: Optional[AvailabilityAccessPolicy] = None,
    ):
        super().__init__(db)
        self.availability_repository = (
            availability_repository
            or RepositoryFactory.create_instructor_availability_repository(db)
        )
        self.membership_repository = (
            membership_repository or RepositoryFactory.create_membership_repository(db)
        )
        self.policy = policy or AvailabilityAccessPolicy()
        self.max_blocks = settings.availability_max_blocks_per_day
        self.min_minutes = settings.availability_min_block_minutes

    # ------------------------------------------------------------------
    # Context resolution
    # ------------------------------------------------------------------

    @BaseService.measure_operation("resolve_context")
    def resolve_context(
        self,
        actor: ActorPrincipal,
        instructor_id: Optional[str] = None,
        *,
        for_edit: bool = False,
    ) -> EditContext:
        """
        Authorize `actor` against a target schedule and build its `EditContext`.

        Raises:
            ForbiddenException: role does not allow the access
            NotFoundException: target is not an active member of the organization
            ValidationException: target's role cannot own a schedule
        """
        if for_edit:
            target = self.policy.resolve_edit_target(actor, instructor_id)
        else:
            target = self.policy.resolve_read_target(actor, instructor_id)

        membership = self.membership_repository.get_active_in_organization(
            actor.organization_id, target
        )
        if membership is None:
            raise NotFoundException(ERROR_INSTRUCTOR_NOT_FOUND, code="INSTRUCTOR_NOT_FOUND")
        if not membership.is_instructor_capable:
            raise ValidationException(ERROR_NOT_INSTRUCTOR_CAPABLE, code="NOT_INSTRUCTOR_CAPABLE")

        timezone = resolve_timezone_name(membership.user.timezone if membership.user else None)
        return EditContext(
            organization_id=actor.organization_id,
            instructor_id=target,
            actor_membership_id=actor.membership_id,
            actor_role=actor.role,
            can_edit=self.policy.can_edit(actor, target),
            timezone=timezone,
        )

    # ------------------------------------------------------------------
    # Context-based operations
    # ------------------------------------------------------------------

    @BaseService.measure_operation("load_week")
    def load_week(self, context: EditContext) -> WeeklyAvailability:
        rows = self.availability_repository.list_for_instructor(
            context.organization_id, context.instructor_id
        )
        return WeeklyAvailability.from_rows(
            context.instructor_id,
            (
                (
                    row.day_of_week,
                    time_to_minutes(row.start_time),
                    time_to_minutes(row.end_time, is_end_time=True),
                )
                for row in rows
            ),
            timezone=context.timezone or settings.default_timezone,
        )

    @BaseService.measure_operation("write_days")
    def write_days(
        self, context: EditContext, days: Mapping[int, Sequence[TimeInterval]]
    ) -> Dict[int, DayAvailability]:
        """
        Validate and replace one or more whole days in a single transaction.

        Either every listed day is written or none is.
        """
        if not context.can_edit:
            raise ForbiddenException("This session cannot edit availability", code="READ_ONLY")
        if not days:
            return {}

        validated = self._validate_days(days)
        with self.transaction():
            self.availability_repository.replace_days(
                context.organization_id,
                context.instructor_id,
                {day: value.blocks for day, value in validated.items()},
            )
        self.logger.info(
            "Replaced availability days %s for instructor %s",
            sorted(validated),
            context.instructor_id,
        )
        return validated

    # ------------------------------------------------------------------
    # Actor-based operations (API surface)
    # ------------------------------------------------------------------

    @BaseService.measure_operation("get_availability")
    def get_availability(
        self, actor: ActorPrincipal, instructor_id: Optional[str] = None
    ) -> WeeklyAvailability:
        context = self.resolve_context(actor, instructor_id)
        return self.load_week(context)

    @BaseService.measure_operation("set_day")
    def set_day(
        self,
        actor: ActorPrincipal,
        day_of_week: int,
        blocks: Sequence[TimeInterval],
        instructor_id: Optional[str] = None,
    ) -> DayAvailability:
        """Replace every block of one weekday."""
        context = self.resolve_context(actor, instructor_id, for_edit=True)
        return self.write_days(context, {day_of_week: blocks})[day_of_week]

    @BaseService.measure_operation("set_week")
    def set_week(
        self,
        actor: ActorPrincipal,
        schedule: Mapping[int, Sequence[TimeInterval]],
        instructor_id: Optional[str] = None,
    ) -> WeeklyAvailability:
        """Replace the whole schedule; days missing from `schedule` end up empty."""
        context = self.resolve_context(actor, instructor_id, for_edit=True)
        current = WeeklyAvailability.empty(context.instructor_id, context.timezone)
        result = replace_week(
            current, schedule, max_blocks=self.max_blocks, min_minutes=self.min_minutes
        )
        if isinstance(result, tuple):
            day_of_week, violation = result
            raise AvailabilityValidationException(violation, day_of_week=day_of_week)

        with self.transaction():
            self.availability_repository.delete_all(
                context.organization_id, context.instructor_id
            )
            self.availability_repository.replace_days(
                context.organization_id,
                context.instructor_id,
                {day: result.day(day).blocks for day in ALL_DAYS if result.day(day).blocks},
            )
        self.logger.info(
            "Replaced weekly schedule for instructor %s (%s days with availability)",
            context.instructor_id,
            result.days_with_availability,
        )
        return result

    @BaseService.measure_operation("clear_day")
    def clear_day(
        self, actor: ActorPrincipal, day_of_week: int, instructor_id: Optional[str] = None
    ) -> None:
        context = self.resolve_context(actor, instructor_id, for_edit=True)
        self.write_days(context, {day_of_week: ()})

    @BaseService.measure_operation("copy_day")
    def copy_day(
        self,
        actor: ActorPrincipal,
        source_day: int,
        target_days: Iterable[int],
        instructor_id: Optional[str] = None,
    ) -> int:
        """
        Overwrite each target day with the source day's blocks.

        Returns:
            Source blocks times the number of requested target days; a day
            listed twice is written once but counted twice
        """
        target_days = list(target_days)
        context = self.resolve_context(actor, instructor_id, for_edit=True)
        if not is_valid_day(source_day):
            raise AvailabilityValidationException(
                InvalidArgument(reason=f"Invalid day of week: {source_day}")
            )
        week = self.load_week(context)
        copies = copy_day(week.day(source_day), target_days)
        if isinstance(copies, Violation):
            raise AvailabilityValidationException(copies, day_of_week=source_day)

        self.write_days(context, {day: value.blocks for day, value in copies.items()})
        return len(week.day(source_day).blocks) * len(target_days)

    @BaseService.measure_operation("list_instructor_summaries")
    def list_instructor_summaries(
        self, actor: ActorPrincipal
    ) -> List[InstructorAvailabilitySummary]:
        """Every active instructor-capable member with a count of days they are available."""
        self.policy.require_admin(actor)
        memberships = self.membership_repository.list_instructor_capable(actor.organization_id)
        counts = self.availability_repository.count_days_with_availability(
            actor.organization_id, [membership.id for membership in memberships]
        )
        return [
            InstructorAvailabilitySummary(
                membership_id=membership.id,
                role=membership.role,
                email=membership.user.email,
                first_name=membership.user.first_name,
                last_name=membership.user.last_name,
                timezone=resolve_timezone_name(membership.user.timezone),
                days_with_availability=counts.get(membership.id, 0),
            )
            for membership in memberships
        ]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _validate_days(
        self, days: Mapping[int, Sequence[TimeInterval]]
    ) -> Dict[int, DayAvailability]:
        validated: Dict[int, DayAvailability] = {}
        for day_of_week in sorted(days):
            if not is_valid_day(day_of_week):
                raise AvailabilityValidationException(
                    InvalidArgument(reason=f"Invalid day of week: {day_of_week}")
                )
            result = replace_day(
                DayAvailability.empty(day_of_week),
                days[day_of_week],
                max_blocks=self.max_blocks,
                min_minutes=self.min_minutes,
            )
            if isinstance(result, Violation):
                raise AvailabilityValidationException(result, day_of_week=day_of_week)
            validated[day_of_week] = result
        return validated
