"""
Version differ.

Compares a freshly built plan with the persisted one and classifies each
work item's change. Work items with no prior entry are not recorded: there
is no "before" state to compare against, so first-time scheduling only shows
up in history from the following generation onwards.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from app.db.models.version_records import ChangeType

from .types import ExistingEntry, PlannedEntry, VersionChange


logger = logging.getLogger(__name__)

UNKNOWN_STAFF = "Unknown Staff"
UNKNOWN_WORK_ITEM = "Unknown Work Item"


def new_generation_id() -> str:
    return str(uuid.uuid4())


def diff_plans(
    new_entries: list[PlannedEntry],
    existing_entries: list[ExistingEntry],
    staff_names: dict[int, str],
    work_item_titles: dict[int, str],
    generation_id: Optional[str] = None,
    generated_at: Optional[datetime] = None,
) -> list[VersionChange]:
    """
    Detect date shifts and reassignments between two plans.

    Every change returned shares one generation id and timestamp. The function
    has no side effects, so its output is still available if persisting fails.
    """
    generation_id = generation_id or new_generation_id()
    generated_at = generated_at or datetime.now(timezone.utc)

    if not existing_entries:
        logger.info("No existing entries, nothing to compare (generation %s)", generation_id)
        return []

    by_pair = {(e.work_item_id, e.staff_id): e for e in existing_entries}
    by_work_item: dict[int, ExistingEntry] = {}
    for entry in existing_entries:
        by_work_item.setdefault(entry.work_item_id, entry)

    changes: list[VersionChange] = []
    date_shifts = reassignments = untracked = 0

    for new in new_entries:
        old = by_pair.get((new.work_item_id, new.staff_id))
        if old is not None:
            if old.start_date == new.start_date and old.end_date == new.end_date:
                continue
            change_type = ChangeType.DATE_SHIFT
            date_shifts += 1
        else:
            old = by_work_item.get(new.work_item_id)
            if old is None:
                untracked += 1
                continue
            change_type = ChangeType.REASSIGNMENT
            reassignments += 1

        changes.append(VersionChange(
            prior_entry_id=old.id,
            work_item_id=new.work_item_id,
            staff_id=new.staff_id,
            previous_staff_id=old.staff_id,
            staff_name=staff_names.get(new.staff_id, UNKNOWN_STAFF),
            work_item_title=work_item_titles.get(new.work_item_id, UNKNOWN_WORK_ITEM),
            change_type=change_type,
            old_start_date=old.start_date,
            old_end_date=old.end_date,
            new_start_date=new.start_date,
            new_end_date=new.end_date,
            delta_days=(new.end_date - old.end_date).days,
            generation_id=generation_id,
            generation_timestamp=generated_at,
        ))

    logger.info(
        "Generation %s: %d date shifts, %d reassignments, %d new work items (not tracked)",
        generation_id, date_shifts, reassignments, untracked,
    )
    return changes
