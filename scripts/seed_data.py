"""
Seed script for the planner development database.

- 4 staff: 2 Developers, 1 QA, 1 inactive Developer
- 6 work items across two clients, some with due dates
- A handful of absences in the coming weeks
- No schedule entries (generate a plan after seeding)

Run with: python -m scripts.seed_data
"""

from datetime import date, timedelta
from sqlalchemy import delete
from app.db.database import Base, SessionLocal, engine
from app.db.models.staff import Staff, Skill
from app.db.models.work_items import WorkItems
from app.db.models.absences import Absences
from app.db.models.schedule_entries import ScheduleEntries
from app.db.models.version_records import VersionRecords


def clear_tables(db):
    """Delete all rows, children first."""
    print("Clearing tables...")

    for model in (VersionRecords, ScheduleEntries, Absences, WorkItems, Staff):
        db.execute(delete(model))

    db.commit()
    print("All tables cleared.")


def get_next_monday():
    today = date.today()
    return today + timedelta(days=(7 - today.weekday()) % 7 or 7)


def seed_staff(db):
    print("Seeding staff...")

    staff = [
        Staff(id=1, name="Alice Smith", skill=Skill.DEVELOPER, active=True),
        Staff(id=2, name="Bob Jones", skill=Skill.DEVELOPER, active=True),
        Staff(id=3, name="Carol White", skill=Skill.QA, active=True),
        # Inactive - never assigned
        Staff(id=4, name="David Brown", skill=Skill.DEVELOPER, active=False),
    ]
    db.add_all(staff)
    db.commit()
    print(f"  Created {len(staff)} staff members")


def seed_work_items(db, monday):
    print("Seeding work items...")

    work_items = [
        WorkItems(id=1, title="Login page", client="Acme", skill_required=Skill.DEVELOPER,
                  effort_hours=16, due_date=monday + timedelta(days=4)),
        WorkItems(id=2, title="Payments API", client="Acme", skill_required=Skill.DEVELOPER,
                  effort_hours=40, due_date=monday + timedelta(days=11)),
        WorkItems(id=3, title="Regression suite", client="Acme", skill_required=Skill.QA,
                  effort_hours=24, due_date=monday + timedelta(days=7)),
        WorkItems(id=4, title="Reporting export", client="Globex", skill_required=Skill.DEVELOPER,
                  effort_hours=12, due_date=None),
        WorkItems(id=5, title="Onboarding flow", client="Globex", skill_required=Skill.DEVELOPER,
                  effort_hours=32, due_date=monday + timedelta(days=9)),
        WorkItems(id=6, title="Smoke tests", client="Globex", skill_required=Skill.QA,
                  effort_hours=8, due_date=monday + timedelta(days=2)),
    ]
    db.add_all(work_items)
    db.commit()
    print(f"  Created {len(work_items)} work items")


def seed_absences(db, monday):
    print("Seeding absences...")

    absences = [
        # Alice off next Wednesday
        Absences(staff_id=1, absence_date=monday + timedelta(days=2)),
        # Carol off Thursday and Friday
        Absences(staff_id=3, absence_date=monday + timedelta(days=3)),
        Absences(staff_id=3, absence_date=monday + timedelta(days=4)),
    ]
    db.add_all(absences)
    db.commit()
    print(f"  Created {len(absences)} absences")


def main():
    print("\n" + "="*50)
    print("Planner Seed Data")
    print("="*50 + "\n")

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()

    try:
        monday = get_next_monday()
        print(f"Anchoring dates to Monday {monday}\n")

        clear_tables(db)
        seed_staff(db)
        seed_work_items(db, monday)
        seed_absences(db, monday)

        print("\n" + "="*50)
        print("Seeding complete!")
        print("="*50)
        print("\nNext: POST /api/v1/planner/generate")
        print("="*50 + "\n")

    except Exception as e:
        db.rollback()
        print(f"\nError during seeding: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
