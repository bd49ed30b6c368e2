from datetime import date

from app.services.planning.workdays import (
    is_weekend,
    is_working_day,
    next_working_day,
    advance_working_days,
    expand_date_range,
)

from conftest import get_test_monday, day


class TestIsWorkingDay:
    def test_weekday_without_absence(self):
        assert is_working_day(1, get_test_monday(), set()) is True

    def test_weekend(self):
        assert is_weekend(day(5)) is True
        assert is_working_day(1, day(5), set()) is False
        assert is_working_day(1, day(6), set()) is False

    def test_absence_blocks_day(self):
        absences = {(1, day(1))}
        assert is_working_day(1, day(1), absences) is False

    def test_other_staff_absence_not_applied(self):
        absences = {(2, day(1))}
        assert is_working_day(1, day(1), absences) is True


class TestNextWorkingDay:
    def test_inclusive_of_start(self):
        assert next_working_day(1, get_test_monday(), set()) == get_test_monday()

    def test_saturday_moves_to_monday(self):
        assert next_working_day(1, day(5), set()) == day(7)

    def test_skips_absences(self):
        absences = {(1, day(0)), (1, day(1))}
        assert next_working_day(1, day(0), absences) == day(2)

    def test_absence_on_following_monday(self):
        absences = {(1, day(7))}
        assert next_working_day(1, day(5), absences) == day(8)


class TestAdvanceWorkingDays:
    def test_zero_is_noop(self):
        assert advance_working_days(1, day(0), 0, set()) == day(0)

    def test_counts_weekdays(self):
        assert advance_working_days(1, day(0), 2, set()) == day(2)

    def test_weekend_not_counted(self):
        # Friday + 1 working day = Monday
        assert advance_working_days(1, day(4), 1, set()) == day(7)

    def test_absence_not_counted(self):
        absences = {(1, day(1))}
        assert advance_working_days(1, day(0), 1, absences) == day(2)


class TestExpandDateRange:
    def test_inclusive(self):
        assert expand_date_range(day(0), day(2)) == [day(0), day(1), day(2)]

    def test_single_day(self):
        assert expand_date_range(day(3), day(3)) == [day(3)]

    def test_inverted_is_empty(self):
        assert expand_date_range(date(2025, 1, 22), date(2025, 1, 20)) == []
