"""
Foreign key behaviour on SQLite (constraints are only enforced with the pragma on).
"""
import pytest

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from app.db.models import Absences, ScheduleEntries, Skill, Staff
from app.services.planning.generator import generate_plan

from conftest import get_test_monday, day, add_staff, add_work_item, add_absence


def count(db, model) -> int:
    return len(db.execute(select(model)).scalars().all())


class TestForeignKeys:
    def test_deleting_staff_removes_absences_and_entries(self, db):
        add_staff(db, 1, "Alice", Skill.DEVELOPER)
        add_staff(db, 2, "Bob", Skill.QA)
        add_work_item(db, 10, "Login page", Skill.DEVELOPER, 16)
        add_work_item(db, 11, "Regression", Skill.QA, 8)
        add_absence(db, 1, day(3))
        add_absence(db, 2, day(3))
        generate_plan(db, today=get_test_monday())

        db.delete(db.get(Staff, 1))
        db.commit()

        absences = db.execute(select(Absences)).scalars().all()
        assert [a.staff_id for a in absences] == [2]
        remaining = db.execute(select(ScheduleEntries)).scalars().all()
        assert [e.staff_id for e in remaining] == [2]

    def test_entry_for_unknown_work_item_refused(self, db):
        add_staff(db, 1, "Alice", Skill.DEVELOPER)
        db.add(ScheduleEntries(
            work_item_id=999, staff_id=1, start_date=day(0), end_date=day(0), allocated_hours=8,
        ))

        with pytest.raises(IntegrityError):
            db.commit()
        db.rollback()

        assert count(db, ScheduleEntries) == 0
