# backend/tests/services/test_instructor_availability_service.py
"""
Tests for InstructorAvailabilityService against a real (SQLite) session.

Covers authorization and organization scoping, whole-day replacement,
weekly replacement, copy semantics and validation error codes.
"""

from datetime import time

import pytest

from app.core.enums import MembershipRole
from app.core.exceptions import (
    AvailabilityValidationException,
    ForbiddenException,
    NotFoundException,
    ValidationException,
)
from app.domain.time_interval import TimeInterval
from app.principal import EditContext
from app.repositories import InstructorAvailabilityRepository
from app.services.instructor_availability_service import InstructorAvailabilityService

SUNDAY, MONDAY, TUESDAY, WEDNESDAY = 0, 1, 2, 3


def hours(start: float, end: float) -> TimeInterval:
    return TimeInterval(int(start * 60), int(end * 60))


@pytest.fixture
def service(db) -> InstructorAvailabilityService:
    return InstructorAvailabilityService(db)


def stored(db, membership):
    rows = InstructorAvailabilityRepository(db).list_for_instructor(
        membership.organization_id, membership.id
    )
    return [(row.day_of_week, row.start_time, row.end_time) for row in rows]


class TestResolveContext:
    def test_self_context(self, service, members, instructor_principal) -> None:
        context = service.resolve_context(instructor_principal)
        assert context.instructor_id == members.instructor.id
        assert context.is_self
        assert context.can_edit
        assert context.timezone == "America/Chicago"

    def test_admin_viewing_instructor(self, service, members, admin_principal) -> None:
        context = service.resolve_context(admin_principal, members.instructor.id, for_edit=True)
        assert context.instructor_id == members.instructor.id
        assert context.can_edit
        assert not context.is_self
        assert context.actor_role == MembershipRole.SUPER_ADMIN

    def test_student_reads_self_without_schedule(self, service, student_principal) -> None:
        with pytest.raises(ValidationException) as exc_info:
            service.resolve_context(student_principal)
        assert exc_info.value.code == "NOT_INSTRUCTOR_CAPABLE"

    def test_admin_targeting_student(self, service, members, admin_principal) -> None:
        with pytest.raises(ValidationException) as exc_info:
            service.resolve_context(admin_principal, members.student.id)
        assert exc_info.value.status_code == 400

    @pytest.mark.parametrize("target", ["suspended_instructor", "outsider"])
    def test_inactive_or_foreign_member_not_found(
        self, service, members, admin_principal, target
    ) -> None:
        with pytest.raises(NotFoundException) as exc_info:
            service.resolve_context(admin_principal, getattr(members, target).id)
        assert exc_info.value.code == "INSTRUCTOR_NOT_FOUND"

    def test_instructor_cannot_read_colleague(self, service, members, instructor_principal) -> None:
        with pytest.raises(ForbiddenException):
            service.resolve_context(instructor_principal, members.other_instructor.id)

    def test_student_cannot_edit(self, service, student_principal) -> None:
        with pytest.raises(ForbiddenException) as exc_info:
            service.resolve_context(student_principal, for_edit=True)
        assert exc_info.value.code == "INSTRUCTOR_ROLE_REQUIRED"


class TestGetAvailability:
    def test_week_is_grouped_and_sorted(
        self, service, members, instructor_principal, add_block
    ) -> None:
        add_block(members.instructor, MONDAY, "13:00", "17:00")
        add_block(members.instructor, MONDAY, "09:00", "12:00")
        add_block(members.instructor, WEDNESDAY, "10:00", "11:30")
        add_block(members.other_instructor, MONDAY, "07:00", "08:00")

        week = service.get_availability(instructor_principal)

        assert week.instructor_id == members.instructor.id
        assert week.timezone == "America/Chicago"
        assert week.day(MONDAY).blocks == (hours(9, 12), hours(13, 17))
        assert week.day(WEDNESDAY).blocks == (hours(10, 11.5),)
        assert week.day(SUNDAY).blocks == ()
        assert week.days_with_availability == 2

    def test_empty_week(self, service, members, admin_principal) -> None:
        week = service.get_availability(admin_principal, members.other_instructor.id)
        assert not week.has_availability
        assert week.timezone == "America/New_York"


class TestSetDay:
    def test_replaces_only_that_day(
        self, db, service, members, instructor_principal, add_block
    ) -> None:
        add_block(members.instructor, MONDAY, "08:00", "09:00")
        add_block(members.instructor, TUESDAY, "08:00", "09:00")

        day = service.set_day(instructor_principal, MONDAY, [hours(14, 16), hours(10, 12)])

        assert day.blocks == (hours(10, 12), hours(14, 16))
        assert stored(db, members.instructor) == [
            (MONDAY, time(10, 0), time(12, 0)),
            (MONDAY, time(14, 0), time(16, 0)),
            (TUESDAY, time(8, 0), time(9, 0)),
        ]

    def test_touching_blocks_are_accepted(self, service, instructor_principal) -> None:
        day = service.set_day(instructor_principal, MONDAY, [hours(9, 10), hours(10, 11)])
        assert len(day.blocks) == 2

    def test_admin_sets_instructor_day(self, db, service, members, admin_principal) -> None:
        service.set_day(admin_principal, SUNDAY, [hours(9, 10)], members.instructor.id)
        assert stored(db, members.instructor) == [(SUNDAY, time(9, 0), time(10, 0))]
        assert stored(db, members.admin) == []

    def test_instructor_cannot_set_colleague_day(
        self, db, service, members, instructor_principal
    ) -> None:
        with pytest.raises(ForbiddenException) as exc_info:
            service.set_day(instructor_principal, MONDAY, [hours(9, 10)], members.other_instructor.id)
        assert exc_info.value.code == "EDIT_OWN_ONLY"
        assert stored(db, members.other_instructor) == []

    @pytest.mark.parametrize(
        "blocks, code",
        [
            ([hours(9, 12), hours(11, 13)], "OVERLAP"),
            ([hours(12, 9)], "INVALID_RANGE"),
            ([TimeInterval(540, 550)], "BLOCK_TOO_SHORT"),
            ([hours(h, h + 1) for h in range(6, 12)], "TOO_MANY_BLOCKS"),
        ],
    )
    def test_invalid_blocks_rejected_without_write(
        self, db, service, members, instructor_principal, add_block, blocks, code
    ) -> None:
        add_block(members.instructor, MONDAY, "08:00", "09:00")

        with pytest.raises(AvailabilityValidationException) as exc_info:
            service.set_day(instructor_principal, MONDAY, blocks)

        assert exc_info.value.code == code
        assert exc_info.value.details["day_of_week"] == MONDAY
        assert stored(db, members.instructor) == [(MONDAY, time(8, 0), time(9, 0))]

    def test_overlap_message(self, service, instructor_principal) -> None:
        with pytest.raises(AvailabilityValidationException) as exc_info:
            service.set_day(instructor_principal, MONDAY, [hours(9, 12), hours(11, 13)])
        assert exc_info.value.message == "Time blocks cannot overlap"

    def test_invalid_day_rejected(self, service, instructor_principal) -> None:
        with pytest.raises(AvailabilityValidationException) as exc_info:
            service.set_day(instructor_principal, 7, [hours(9, 10)])
        assert exc_info.value.code == "INVALID_ARGUMENT"


class TestSetWeek:
    def test_missing_days_end_up_empty(
        self, db, service, members, instructor_principal, add_block
    ) -> None:
        add_block(members.instructor, WEDNESDAY, "08:00", "09:00")

        week = service.set_week(
            instructor_principal, {MONDAY: [hours(9, 12)], TUESDAY: [hours(13, 14)]}
        )

        assert week.days_with_availability == 2
        assert stored(db, members.instructor) == [
            (MONDAY, time(9, 0), time(12, 0)),
            (TUESDAY, time(13, 0), time(14, 0)),
        ]

    def test_invalid_day_aborts_whole_week(
        self, db, service, members, instructor_principal, add_block
    ) -> None:
        add_block(members.instructor, WEDNESDAY, "08:00", "09:00")

        with pytest.raises(AvailabilityValidationException) as exc_info:
            service.set_week(
                instructor_principal,
                {MONDAY: [hours(9, 12)], TUESDAY: [hours(9, 12), hours(10, 11)]},
            )

        assert exc_info.value.details["day_of_week"] == TUESDAY
        assert stored(db, members.instructor) == [(WEDNESDAY, time(8, 0), time(9, 0))]


class TestClearAndCopy:
    def test_clear_day(self, db, service, members, instructor_principal, add_block) -> None:
        add_block(members.instructor, MONDAY, "08:00", "09:00")
        add_block(members.instructor, TUESDAY, "08:00", "09:00")
        service.clear_day(instructor_principal, MONDAY)
        assert stored(db, members.instructor) == [(TUESDAY, time(8, 0), time(9, 0))]

    def test_copy_overwrites_targets(
        self, db, service, members, instructor_principal, add_block
    ) -> None:
        add_block(members.instructor, MONDAY, "09:00", "12:00")
        add_block(members.instructor, MONDAY, "13:00", "17:00")
        add_block(members.instructor, WEDNESDAY, "06:00", "07:00")

        copied = service.copy_day(instructor_principal, MONDAY, [TUESDAY, WEDNESDAY])

        assert copied == 4
        week = service.get_availability(instructor_principal)
        for day in (MONDAY, TUESDAY, WEDNESDAY):
            assert week.day(day).blocks == (hours(9, 12), hours(13, 17))

    def test_copy_count_includes_repeated_targets(
        self, db, service, members, instructor_principal, add_block
    ) -> None:
        add_block(members.instructor, MONDAY, "09:00", "12:00")
        add_block(members.instructor, MONDAY, "13:00", "17:00")

        copied = service.copy_day(instructor_principal, MONDAY, [TUESDAY, TUESDAY])

        assert copied == 4
        tuesday = [row for row in stored(db, members.instructor) if row[0] == TUESDAY]
        assert len(tuesday) == 2

    def test_copy_empty_day_clears_targets(
        self, db, service, members, instructor_principal, add_block
    ) -> None:
        add_block(members.instructor, TUESDAY, "09:00", "10:00")
        assert service.copy_day(instructor_principal, SUNDAY, [TUESDAY]) == 0
        assert stored(db, members.instructor) == []

    def test_copy_to_itself_rejected(self, service, instructor_principal) -> None:
        with pytest.raises(AvailabilityValidationException) as exc_info:
            service.copy_day(instructor_principal, MONDAY, [MONDAY, TUESDAY])
        assert exc_info.value.message == "Cannot copy a day to itself"

    def test_copy_from_invalid_day_rejected(self, service, instructor_principal) -> None:
        with pytest.raises(AvailabilityValidationException):
            service.copy_day(instructor_principal, 8, [TUESDAY])


class TestWriteDays:
    def test_read_only_context_refused(self, db, service, members) -> None:
        context = EditContext(
            organization_id=members.organization.id,
            instructor_id=members.instructor.id,
            actor_membership_id=members.student.id,
            actor_role=MembershipRole.STUDENT,
            can_edit=False,
        )
        with pytest.raises(ForbiddenException) as exc_info:
            service.write_days(context, {MONDAY: [hours(9, 10)]})
        assert exc_info.value.code == "READ_ONLY"
        assert stored(db, members.instructor) == []

    def test_no_days_is_a_no_op(self, service, instructor_principal) -> None:
        context = service.resolve_context(instructor_principal, for_edit=True)
        assert service.write_days(context, {}) == {}

    def test_all_days_or_none(self, db, service, members, instructor_principal) -> None:
        context = service.resolve_context(instructor_principal, for_edit=True)
        with pytest.raises(AvailabilityValidationException):
            service.write_days(context, {MONDAY: [hours(9, 10)], TUESDAY: [hours(10, 9)]})
        assert stored(db, members.instructor) == []


class TestInstructorSummaries:
    def test_admin_overview(self, service, members, admin_principal, add_block) -> None:
        add_block(members.instructor, MONDAY, "09:00", "10:00")
        add_block(members.instructor, MONDAY, "11:00", "12:00")
        add_block(members.instructor, TUESDAY, "09:00", "10:00")

        summaries = service.list_instructor_summaries(admin_principal)

        assert [s.first_name for s in summaries] == ["Ada", "Mike", "Sarah"]
        sarah = summaries[2]
        assert sarah.membership_id == members.instructor.id
        assert sarah.days_with_availability == 2
        assert sarah.has_availability
        assert sarah.timezone == "America/Chicago"
        assert not summaries[1].has_availability

    def test_instructor_cannot_list(self, service, instructor_principal) -> None:
        with pytest.raises(ForbiddenException):
            service.list_instructor_summaries(instructor_principal)

    def test_operations_are_measured(self, service, admin_principal) -> None:
        service.list_instructor_summaries(admin_principal)
        assert service.get_metrics()["list_instructor_summaries"]["success_count"] == 1
