import pytest

from app.db.models import ScheduleEntries, Skill
from app.db.models.schedule_entries import CompletionType
from app.services.planning.completion import classify_completion, mark_complete
from app.services.planning.errors import EntryAlreadyCompletedError, EntryNotFoundError

from conftest import day, add_staff, add_work_item


def planned_entry(db, start, end, due=None, is_overdue=False, days_overdue=0) -> ScheduleEntries:
    add_staff(db, 1, "Alice", Skill.DEVELOPER)
    add_work_item(db, 10, "Login page", Skill.DEVELOPER, 16, due_date=due)
    entry = ScheduleEntries(
        work_item_id=10, staff_id=1, start_date=start, end_date=end,
        allocated_hours=16, is_overdue=is_overdue, days_overdue=days_overdue,
    )
    db.add(entry)
    db.commit()
    return entry


class TestClassifyCompletion:
    def test_no_due_date_is_on_time(self):
        assert classify_completion(day(9), None) == CompletionType.ON_TIME

    def test_on_due_date_is_on_time(self):
        assert classify_completion(day(4), day(4)) == CompletionType.ON_TIME

    def test_after_due_date_is_late(self):
        assert classify_completion(day(5), day(4)) == CompletionType.LATE


class TestMarkComplete:
    def test_completes_on_time(self, db):
        entry = planned_entry(db, day(0), day(1), due=day(4))

        result = mark_complete(db, entry.id, today=day(0))

        assert result.is_completed is True
        assert result.completed_at is not None
        assert result.completion_type == CompletionType.ON_TIME
        assert result.end_date == day(0)
        assert result.is_overdue is False

    def test_completes_late(self, db):
        entry = planned_entry(db, day(0), day(1), due=day(1))

        result = mark_complete(db, entry.id, today=day(3))

        assert result.completion_type == CompletionType.LATE
        assert result.end_date == day(3)
        assert result.is_overdue is True
        assert result.days_overdue == 2

    def test_early_completion_clears_overdue(self, db):
        # planned to finish late, actually done before the due date
        entry = planned_entry(db, day(0), day(7), due=day(4), is_overdue=True, days_overdue=3)

        result = mark_complete(db, entry.id, today=day(2))

        assert result.completion_type == CompletionType.ON_TIME
        assert result.is_overdue is False
        assert result.days_overdue == 0

    def test_completion_before_start_moves_start(self, db):
        entry = planned_entry(db, day(7), day(8))

        result = mark_complete(db, entry.id, today=day(2))

        assert result.start_date == day(2)
        assert result.end_date == day(2)

    def test_unknown_entry(self, db):
        with pytest.raises(EntryNotFoundError):
            mark_complete(db, 999, today=day(0))

    def test_already_completed(self, db):
        entry = planned_entry(db, day(0), day(1))
        mark_complete(db, entry.id, today=day(0))

        with pytest.raises(EntryAlreadyCompletedError):
            mark_complete(db, entry.id, today=day(1))
