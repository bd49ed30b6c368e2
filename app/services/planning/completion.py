"""
Marking schedule entries complete.
"""

import logging
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.db.models.schedule_entries import ScheduleEntries, CompletionType
from app.db.models.work_items import WorkItems

from .builder import classify_overdue
from .errors import EntryAlreadyCompletedError, EntryNotFoundError


logger = logging.getLogger(__name__)


def classify_completion(completed_on: date, due_date: Optional[date]) -> CompletionType:
    if due_date is not None and completed_on > due_date:
        return CompletionType.LATE
    return CompletionType.ON_TIME


def mark_complete(db: Session, entry_id: int, today: Optional[date] = None) -> ScheduleEntries:
    """
    Mark a schedule entry completed as of `today`.

    The end date is rewritten to the completion day, which can flip the
    overdue flags either way. A completion before the planned start also
    pulls start_date back so start never trails end.

    Raises:
        EntryNotFoundError: no entry with this id
        EntryAlreadyCompletedError: entry was completed earlier
    """
    entry = db.get(ScheduleEntries, entry_id)
    if entry is None:
        raise EntryNotFoundError(f"Schedule entry {entry_id} not found")
    if entry.is_completed:
        raise EntryAlreadyCompletedError(f"Schedule entry {entry_id} is already completed")

    completed_on = today or date.today()
    due_date = db.execute(
        select(WorkItems.due_date).where(WorkItems.id == entry.work_item_id)
    ).scalar_one_or_none()

    completion_type = classify_completion(completed_on, due_date)
    is_overdue, days_overdue = classify_overdue(completed_on, due_date)

    logger.info(
        "Completing entry %s (work item %s): planned end %s, completed %s, due %s -> %s",
        entry.id, entry.work_item_id, entry.end_date, completed_on, due_date, completion_type.value,
    )

    entry.is_completed = True
    entry.completed_at = datetime.now(timezone.utc)
    entry.completion_type = completion_type
    entry.end_date = completed_on
    if entry.start_date > completed_on:
        entry.start_date = completed_on
    entry.is_overdue = is_overdue
    entry.days_overdue = days_overdue

    db.commit()
    db.refresh(entry)
    return entry
