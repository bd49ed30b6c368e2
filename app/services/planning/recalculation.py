"""
"Recalculation needed" signal.
Master data changed after the persisted plan was last written.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.db.models.absences import Absences
from app.db.models.schedule_entries import ScheduleEntries
from app.db.models.staff import Staff
from app.db.models.work_items import WorkItems


logger = logging.getLogger(__name__)


def needs_recalculation(db: Session) -> bool:
    master_updates = [
        db.execute(select(func.max(model.updated_at))).scalar()
        for model in (Staff, WorkItems, Absences)
    ]
    master_updates = [ts for ts in master_updates if ts is not None]

    if not master_updates:
        # No master data yet
        return False

    latest_master = max(master_updates)
    latest_plan = db.execute(select(func.max(ScheduleEntries.updated_at))).scalar()

    if latest_plan is None:
        logger.info("No plan exists yet, recalculation needed")
        return True

    needed = latest_master > latest_plan
    logger.debug(
        "Latest master update %s, latest plan update %s, recalculation needed: %s",
        latest_master, latest_plan, needed,
    )
    return needed
