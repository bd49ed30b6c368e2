import pytest
from datetime import date, timedelta
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.database import enable_sqlite_foreign_keys
from app.db.models import Base, Staff, WorkItems, Absences, Skill
from app.services.planning.types import (
    StaffMember,
    WorkItem,
    PlanContext,
)


def get_test_monday() -> date:
    # returns a fixed Monday for deterministic tests
    return date(2025, 1, 20)


def day(offset: int) -> date:
    """get_test_monday() shifted by offset calendar days."""
    return get_test_monday() + timedelta(days=offset)


def make_context(
    staff: list[StaffMember],
    work_items: list[WorkItem],
    absences: Optional[set] = None,
    today: Optional[date] = None,
) -> PlanContext:
    return PlanContext(
        today=today or get_test_monday(),
        staff=staff,
        work_items=work_items,
        absences=absences or set(),
    )


@pytest.fixture
def dev_and_qa() -> list[StaffMember]:
    return [
        StaffMember(id=1, name="Alice", skill=Skill.DEVELOPER),
        StaffMember(id=2, name="Bob", skill=Skill.QA),
    ]


@pytest.fixture
def two_developers() -> list[StaffMember]:
    return [
        StaffMember(id=1, name="Alice", skill=Skill.DEVELOPER),
        StaffMember(id=2, name="Bob", skill=Skill.DEVELOPER),
    ]


@pytest.fixture
def mixed_team() -> list[StaffMember]:
    # 3 developers and 2 QA, interleaved
    return [
        StaffMember(id=1, name="Alice", skill=Skill.DEVELOPER),
        StaffMember(id=2, name="Bob", skill=Skill.QA),
        StaffMember(id=3, name="Carol", skill=Skill.DEVELOPER),
        StaffMember(id=4, name="Dan", skill=Skill.QA),
        StaffMember(id=5, name="Erin", skill=Skill.DEVELOPER),
    ]


@pytest.fixture
def mixed_work_items() -> list[WorkItem]:
    return [
        WorkItem(id=1, title="API", client="Acme", skill_required=Skill.DEVELOPER, effort_hours=40),
        WorkItem(id=2, title="UI", client="Acme", skill_required=Skill.DEVELOPER, effort_hours=12),
        WorkItem(id=3, title="Tests", client="Acme", skill_required=Skill.QA, effort_hours=16),
        WorkItem(id=4, title="Docs", client="Globex", skill_required=Skill.DEVELOPER, effort_hours=8),
        WorkItem(id=5, title="Smoke", client="Globex", skill_required=Skill.QA, effort_hours=4),
        WorkItem(id=6, title="Infra", client="Globex", skill_required=Skill.DEVELOPER, effort_hours=24),
        WorkItem(id=7, title="Audit", client="Initech", skill_required=Skill.QA, effort_hours=20),
    ]


# ==================== Database ====================

@pytest.fixture
def db():
    """Fresh in-memory SQLite session per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


def add_staff(db, id: int, name: str, skill: Skill, active: bool = True) -> Staff:
    staff = Staff(id=id, name=name, skill=skill, active=active)
    db.add(staff)
    db.commit()
    return staff


def add_work_item(
    db,
    id: int,
    title: str,
    skill: Skill,
    effort_hours: float,
    due_date: Optional[date] = None,
    client: str = "Acme",
) -> WorkItems:
    item = WorkItems(
        id=id, title=title, client=client, skill_required=skill,
        effort_hours=effort_hours, due_date=due_date,
    )
    db.add(item)
    db.commit()
    return item


def add_absence(db, staff_id: int, absence_date: date) -> Absences:
    absence = Absences(staff_id=staff_id, absence_date=absence_date)
    db.add(absence)
    db.commit()
    return absence
