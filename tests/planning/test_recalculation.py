from datetime import datetime

from app.db.models import Staff, WorkItems, ScheduleEntries, Skill
from app.services.planning.recalculation import needs_recalculation

from conftest import day


def add_masters_at(db, updated_at: datetime) -> tuple[Staff, WorkItems]:
    staff = Staff(id=1, name="Alice", skill=Skill.DEVELOPER, active=True, updated_at=updated_at)
    item = WorkItems(
        id=10, title="Login page", client="Acme", skill_required=Skill.DEVELOPER,
        effort_hours=16, updated_at=updated_at,
    )
    db.add_all([staff, item])
    db.commit()
    return staff, item


def add_entry_at(db, updated_at: datetime) -> ScheduleEntries:
    entry = ScheduleEntries(
        work_item_id=10, staff_id=1, start_date=day(0), end_date=day(1),
        allocated_hours=16, updated_at=updated_at,
    )
    db.add(entry)
    db.commit()
    return entry


class TestNeedsRecalculation:
    def test_empty_database(self, db):
        assert needs_recalculation(db) is False

    def test_masters_without_plan(self, db):
        add_masters_at(db, datetime(2025, 1, 20, 9, 0))
        assert needs_recalculation(db) is True

    def test_plan_newer_than_masters(self, db):
        add_masters_at(db, datetime(2025, 1, 20, 9, 0))
        add_entry_at(db, datetime(2025, 1, 20, 10, 0))
        assert needs_recalculation(db) is False

    def test_master_changed_after_plan(self, db):
        staff, _ = add_masters_at(db, datetime(2025, 1, 20, 9, 0))
        add_entry_at(db, datetime(2025, 1, 20, 10, 0))

        staff.name = "Alice Smith"
        staff.updated_at = datetime(2025, 1, 20, 11, 0)
        db.commit()

        assert needs_recalculation(db) is True

    def test_any_master_table_counts(self, db):
        _, item = add_masters_at(db, datetime(2025, 1, 20, 9, 0))
        add_entry_at(db, datetime(2025, 1, 20, 10, 0))

        item.effort_hours = 24
        item.updated_at = datetime(2025, 1, 20, 12, 0)
        db.commit()

        assert needs_recalculation(db) is True
