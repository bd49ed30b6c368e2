"""
Data loader for plan generation.
Fetches masters and the persisted plan from the database and converts to internal types.
"""

from datetime import date
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.db.models.staff import Staff
from app.db.models.work_items import WorkItems
from app.db.models.absences import Absences
from app.db.models.schedule_entries import ScheduleEntries

from .allocation import DAILY_CAPACITY_HOURS
from .types import (
    Absence,
    ExistingEntry,
    PlanContext,
    StaffMember,
    WorkItem,
)


def load_staff(db: Session) -> list[StaffMember]:
    """Load active staff, ordered by id so tie-breaking is reproducible."""
    stmt = select(Staff).where(Staff.active == True).order_by(Staff.id)
    rows = db.execute(stmt).scalars().all()

    return [
        StaffMember(id=s.id, name=s.name, skill=s.skill, active=s.active)
        for s in rows
    ]


def load_completed_work_item_ids(db: Session) -> set[int]:
    """Work items whose current schedule entry is completed."""
    stmt = select(ScheduleEntries.work_item_id).where(ScheduleEntries.is_completed == True)
    return set(db.execute(stmt).scalars().all())


def completed_work_item_ids(existing: list[ExistingEntry]) -> set[int]:
    """Same as load_completed_work_item_ids, taken from an already loaded snapshot."""
    return {e.work_item_id for e in existing if e.is_completed}


def load_work_items(db: Session, exclude_ids: Optional[set[int]] = None) -> list[WorkItem]:
    stmt = select(WorkItems).order_by(WorkItems.id)
    rows = db.execute(stmt).scalars().all()
    exclude_ids = exclude_ids or set()

    return [
        WorkItem(
            id=w.id,
            title=w.title,
            client=w.client,
            skill_required=w.skill_required,
            effort_hours=w.effort_hours,
            due_date=w.due_date,
        )
        for w in rows
        if w.id not in exclude_ids
    ]


def load_absences(db: Session) -> set[Absence]:
    stmt = select(Absences.staff_id, Absences.absence_date)
    return {(staff_id, day) for staff_id, day in db.execute(stmt).all()}


def load_existing_entries(db: Session) -> list[ExistingEntry]:
    """Snapshot of the persisted plan, in insertion order."""
    stmt = select(ScheduleEntries).order_by(ScheduleEntries.id)
    rows = db.execute(stmt).scalars().all()

    return [
        ExistingEntry(
            id=e.id,
            work_item_id=e.work_item_id,
            staff_id=e.staff_id,
            start_date=e.start_date,
            end_date=e.end_date,
            is_completed=e.is_completed,
        )
        for e in rows
    ]


def load_name_lookups(
    db: Session,
    staff_ids: set[int],
    work_item_ids: set[int],
) -> tuple[dict[int, str], dict[int, str]]:
    """staff_id -> name and work_item_id -> title for version records."""
    staff_names: dict[int, str] = {}
    work_item_titles: dict[int, str] = {}

    if staff_ids:
        stmt = select(Staff.id, Staff.name).where(Staff.id.in_(staff_ids))
        staff_names = {staff_id: name for staff_id, name in db.execute(stmt).all()}

    if work_item_ids:
        stmt = select(WorkItems.id, WorkItems.title).where(WorkItems.id.in_(work_item_ids))
        work_item_titles = {item_id: title for item_id, title in db.execute(stmt).all()}

    return staff_names, work_item_titles


def load_plan_context(
    db: Session,
    today: date,
    exclude_completed: bool = False,
    daily_capacity: int = DAILY_CAPACITY_HOURS,
) -> PlanContext:
    """
    Load all data needed to build a plan.

    With exclude_completed, work items whose current entry is completed are
    left out so their entries survive regeneration.
    """
    exclude_ids = load_completed_work_item_ids(db) if exclude_completed else set()

    return PlanContext(
        today=today,
        staff=load_staff(db),
        work_items=load_work_items(db, exclude_ids),
        absences=load_absences(db),
        daily_capacity=daily_capacity,
        completed_work_item_ids=exclude_ids,
    )
