"""Tests for day and week availability values."""

import pytest

from app.domain.availability import (
    ALL_DAYS,
    DayAvailability,
    WeeklyAvailability,
    clear_day,
    copy_day,
    copy_to_day,
    copy_to_weekdays,
    day_changes,
    is_valid_day,
    replace_day,
    replace_week,
)
from app.domain.time_interval import TimeInterval
from app.domain.violations import InvalidArgument, Overlap, TooManyBlocks

MONDAY = 1
TUESDAY = 2
SATURDAY = 6


def hours(start: float, end: float) -> TimeInterval:
    return TimeInterval(int(start * 60), int(end * 60))


@pytest.mark.unit
class TestReplaceDay:
    def test_blocks_are_sorted_by_start(self) -> None:
        result = replace_day(
            DayAvailability.empty(MONDAY), [hours(13, 17), hours(8, 9), hours(9, 12)]
        )
        assert isinstance(result, DayAvailability)
        assert result.blocks == (hours(8, 9), hours(9, 12), hours(13, 17))

    def test_result_never_overlaps(self) -> None:
        result = replace_day(DayAvailability.empty(MONDAY), [hours(9, 12), hours(11, 13)])
        assert result == Overlap(index_a=0, index_b=1)

    def test_replace_is_idempotent(self) -> None:
        blocks = [hours(13, 17), hours(9, 12)]
        once = replace_day(DayAvailability.empty(MONDAY), blocks)
        twice = replace_day(once, blocks)
        assert once == twice

    def test_replacing_with_own_blocks_is_identity(self) -> None:
        day = replace_day(DayAvailability.empty(MONDAY), [hours(9, 12)])
        assert replace_day(day, day.blocks) == day

    def test_previous_blocks_are_discarded(self) -> None:
        day = DayAvailability(MONDAY, (hours(9, 12), hours(13, 17)))
        assert replace_day(day, [hours(18, 19)]).blocks == (hours(18, 19),)

    def test_empty_list_clears(self) -> None:
        day = DayAvailability(MONDAY, (hours(9, 12),))
        cleared = replace_day(day, [])
        assert cleared == DayAvailability.empty(MONDAY)
        assert clear_day(day) == cleared
        assert not cleared.is_available


@pytest.mark.unit
class TestCopyDay:
    def test_copy_overwrites_targets(self) -> None:
        # Monday 9-12 copied onto Tuesday (which had 14-16) and Saturday (empty)
        monday = DayAvailability(MONDAY, (hours(9, 12),))
        copies = copy_day(monday, [TUESDAY, SATURDAY])
        assert copies == {
            TUESDAY: DayAvailability(TUESDAY, (hours(9, 12),)),
            SATURDAY: DayAvailability(SATURDAY, (hours(9, 12),)),
        }

    def test_copy_monday_over_tuesday_week(self) -> None:
        week = WeeklyAvailability.empty("inst_1").apply(
            {
                MONDAY: DayAvailability(MONDAY, (TimeInterval(540, 600), TimeInterval(660, 720))),
                TUESDAY: DayAvailability(TUESDAY, (TimeInterval(480, 510),)),
            }
        )

        copied = week.apply(copy_day(week.day(MONDAY), [TUESDAY]))

        assert copied.day(TUESDAY).blocks == (TimeInterval(540, 600), TimeInterval(660, 720))
        assert copied.day(MONDAY) == week.day(MONDAY)
        assert TimeInterval(480, 510) not in copied.day(TUESDAY).blocks

    def test_copy_of_empty_day_clears_targets(self) -> None:
        copies = copy_day(DayAvailability.empty(0), [MONDAY])
        assert copies == {MONDAY: DayAvailability.empty(MONDAY)}

    def test_copy_onto_itself_rejected(self) -> None:
        result = copy_day(DayAvailability.empty(MONDAY), [MONDAY, TUESDAY])
        assert result == InvalidArgument(reason="Cannot copy a day to itself")

    @pytest.mark.parametrize("targets", [[], [7], [-1], [True]])
    def test_invalid_targets_rejected(self, targets: list) -> None:
        assert isinstance(copy_day(DayAvailability.empty(0), targets), InvalidArgument)

    def test_copy_to_weekdays_from_sunday(self) -> None:
        sunday = DayAvailability(0, (hours(10, 11),))
        copies = copy_to_weekdays(sunday)
        assert sorted(copies) == [1, 2, 3, 4, 5]

    def test_copy_to_weekdays_from_weekday_is_rejected(self) -> None:
        assert isinstance(copy_to_weekdays(DayAvailability.empty(MONDAY)), InvalidArgument)

    def test_copy_to_single_day(self) -> None:
        assert list(copy_to_day(DayAvailability.empty(0), SATURDAY)) == [SATURDAY]


@pytest.mark.unit
class TestWeeklyAvailability:
    def test_empty_week_has_all_days(self) -> None:
        week = WeeklyAvailability.empty("inst_1")
        assert sorted(week.days) == list(ALL_DAYS)
        assert not week.has_availability
        assert week.timezone == "America/New_York"

    def test_missing_day_rejected(self) -> None:
        with pytest.raises(ValueError):
            WeeklyAvailability("inst_1", {0: DayAvailability.empty(0)})

    def test_mismatched_day_rejected(self) -> None:
        days = {day: DayAvailability.empty(day) for day in ALL_DAYS}
        days[3] = DayAvailability.empty(4)
        with pytest.raises(ValueError):
            WeeklyAvailability("inst_1", days)

    def test_with_day_and_counts(self) -> None:
        week = WeeklyAvailability.empty("inst_1").with_day(
            DayAvailability(MONDAY, (hours(9, 12),))
        )
        assert week.day(MONDAY).blocks == (hours(9, 12),)
        assert week.days_with_availability == 1
        assert week.has_availability

    def test_day_rejects_invalid_index(self) -> None:
        with pytest.raises(ValueError):
            WeeklyAvailability.empty("inst_1").day(7)

    def test_from_rows_groups_and_sorts(self) -> None:
        week = WeeklyAvailability.from_rows(
            "inst_1",
            [(1, 780, 1020), (1, 540, 720), (5, 600, 690)],
            timezone="Europe/London",
        )
        assert week.day(1).blocks == (hours(9, 12), hours(13, 17))
        assert week.day(5).blocks == (hours(10, 11.5),)
        assert week.timezone == "Europe/London"

    def test_from_rows_rejects_bad_rows(self) -> None:
        with pytest.raises(ValueError):
            WeeklyAvailability.from_rows("inst_1", [(9, 540, 600)])
        with pytest.raises(ValueError):
            WeeklyAvailability.from_rows("inst_1", [(1, 600, 540)])
        with pytest.raises(ValueError):
            WeeklyAvailability.from_rows("inst_1", [(1, 1380, 1500)])

    def test_to_wire(self) -> None:
        week = WeeklyAvailability.empty("inst_1").with_day(
            DayAvailability(MONDAY, (hours(9, 12),))
        )
        wire = week.to_wire()
        assert sorted(wire) == [str(day) for day in ALL_DAYS]
        assert wire["1"] == [{"startTime": "09:00", "endTime": "12:00"}]
        assert wire["0"] == []

    def test_day_changes(self) -> None:
        before = WeeklyAvailability.empty("inst_1")
        after = before.apply(
            {
                MONDAY: DayAvailability(MONDAY, (hours(9, 12),)),
                TUESDAY: DayAvailability.empty(TUESDAY),
            }
        )
        assert day_changes(before, after) == {MONDAY: after.day(MONDAY)}


@pytest.mark.unit
class TestReplaceWeek:
    def test_missing_days_become_empty(self) -> None:
        week = WeeklyAvailability.empty("inst_1").with_day(
            DayAvailability(SATURDAY, (hours(9, 10),))
        )
        result = replace_week(week, {MONDAY: [hours(9, 12)]})
        assert isinstance(result, WeeklyAvailability)
        assert result.day(MONDAY).blocks == (hours(9, 12),)
        assert result.day(SATURDAY).blocks == ()

    def test_one_bad_day_rejects_everything(self) -> None:
        week = WeeklyAvailability.empty("inst_1")
        too_many = [hours(h, h + 1) for h in range(8, 14)]
        result = replace_week(week, {MONDAY: [hours(9, 12)], TUESDAY: too_many})
        assert result == (TUESDAY, TooManyBlocks(count=6, limit=5))

    def test_invalid_day_key(self) -> None:
        day, violation = replace_week(WeeklyAvailability.empty("inst_1"), {8: []})
        assert day == 8
        assert isinstance(violation, InvalidArgument)


@pytest.mark.unit
class TestHelpers:
    @pytest.mark.parametrize("value, valid", [(0, True), (6, True), (7, False), (-1, False)])
    def test_is_valid_day(self, value: int, valid: bool) -> None:
        assert is_valid_day(value) is valid

    def test_bool_and_str_are_not_days(self) -> None:
        assert not is_valid_day(True)
        assert not is_valid_day("1")
