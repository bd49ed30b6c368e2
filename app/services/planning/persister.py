"""
Plan persister.

Order matters:
1. Version records are committed first, so they never depend on prior
   entries that are about to be deleted. Failures here are logged and skipped.
2. Prior entries are deleted (all, or only non-completed ones) and the new
   entries inserted in a single transaction. Failures here roll back and raise.

Nothing serialises two concurrent generations: each computes against its own
snapshot and the last one to commit wins.
"""

import logging

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.models.schedule_entries import ScheduleEntries
from app.db.models.version_records import VersionRecords

from .errors import PlanPersistenceError
from .types import PlannedEntry, VersionChange


logger = logging.getLogger(__name__)


def write_version_records(db: Session, changes: list[VersionChange]) -> int:
    """Insert version records. Returns how many were written (0 on failure)."""
    if not changes:
        logger.info("No version records to create")
        return 0

    generation_id = changes[0].generation_id
    records = [
        VersionRecords(
            prior_entry_id=c.prior_entry_id,
            work_item_id=c.work_item_id,
            staff_id=c.staff_id,
            previous_staff_id=c.previous_staff_id,
            staff_name=c.staff_name,
            work_item_title=c.work_item_title,
            change_type=c.change_type,
            old_start_date=c.old_start_date,
            old_end_date=c.old_end_date,
            new_start_date=c.new_start_date,
            new_end_date=c.new_end_date,
            delta_days=c.delta_days,
            generation_id=c.generation_id,
            generation_timestamp=c.generation_timestamp,
        )
        for c in changes
    ]

    try:
        db.add_all(records)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(
            "Error inserting %d version records for generation %s, continuing without history",
            len(records), generation_id,
        )
        return 0

    logger.info("Created %d version records for generation %s", len(records), generation_id)
    return len(records)


def replace_entries(db: Session, entries: list[PlannedEntry], exclude_completed: bool = False) -> None:
    """
    Swap the persisted plan for `entries` in one transaction.

    With exclude_completed, completed entries are left physically untouched.

    Raises:
        PlanPersistenceError: if the delete or insert fails
    """
    stmt = delete(ScheduleEntries)
    if exclude_completed:
        stmt = stmt.where(ScheduleEntries.is_completed == False)

    try:
        result = db.execute(stmt)
        db.add_all([
            ScheduleEntries(
                work_item_id=e.work_item_id,
                staff_id=e.staff_id,
                start_date=e.start_date,
                end_date=e.end_date,
                allocated_hours=e.allocated_hours,
                is_overdue=e.is_overdue,
                days_overdue=e.days_overdue,
                is_completed=False,
            )
            for e in entries
        ])
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error replacing schedule entries")
        raise PlanPersistenceError("Failed to save plan to database") from exc

    logger.info("Replaced %d schedule entries with %d new ones", result.rowcount, len(entries))


def persist_plan(
    db: Session,
    entries: list[PlannedEntry],
    changes: list[VersionChange],
    exclude_completed: bool = False,
) -> int:
    """
    Write version history, then replace the persisted plan.

    Returns:
        Number of version records written
    """
    written = write_version_records(db, changes)
    replace_entries(db, entries, exclude_completed=exclude_completed)
    return written
