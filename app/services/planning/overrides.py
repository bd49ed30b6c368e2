"""
Simulation override handling.

Malformed overrides are rejected one by one and reported back; they never
abort the simulation as a whole.
"""

import logging
from typing import Optional

from .types import (
    Absence,
    BlackoutWindow,
    DelayOverride,
    RejectedOverride,
    StaffMember,
    WorkItem,
)
from .workdays import expand_date_range


logger = logging.getLogger(__name__)


def validate_delays(
    delays: list[DelayOverride],
    work_items: list[WorkItem],
    excluded_ids: Optional[set[int]] = None,
) -> tuple[dict[int, int], list[RejectedOverride]]:
    """
    Turn delay overrides into a work_item_id -> delay_days map.

    A later override for the same work item replaces an earlier one.
    excluded_ids are work items left out of the plan because they are completed.
    """
    known_ids = {w.id for w in work_items}
    excluded_ids = excluded_ids or set()
    accepted: dict[int, int] = {}
    rejected: list[RejectedOverride] = []

    for delay in delays:
        if delay.work_item_id in excluded_ids:
            rejected.append(RejectedOverride(
                kind="delay",
                reason=f"Work item {delay.work_item_id} is completed and excluded from this plan",
                work_item_id=delay.work_item_id,
            ))
            continue
        if delay.work_item_id not in known_ids:
            rejected.append(RejectedOverride(
                kind="delay",
                reason=f"Unknown work item {delay.work_item_id}",
                work_item_id=delay.work_item_id,
            ))
            continue
        if delay.delay_days < 0:
            rejected.append(RejectedOverride(
                kind="delay",
                reason=f"delay_days must not be negative, got {delay.delay_days}",
                work_item_id=delay.work_item_id,
            ))
            continue
        accepted[delay.work_item_id] = delay.delay_days

    return accepted, rejected


def validate_blackouts(
    blackouts: list[BlackoutWindow],
    staff: list[StaffMember],
) -> tuple[list[BlackoutWindow], list[RejectedOverride]]:
    known_ids = {s.id for s in staff}
    accepted: list[BlackoutWindow] = []
    rejected: list[RejectedOverride] = []

    for window in blackouts:
        if window.staff_id not in known_ids:
            rejected.append(RejectedOverride(
                kind="blackout",
                reason=f"Unknown staff member {window.staff_id}",
                staff_id=window.staff_id,
            ))
            continue
        if window.start_date > window.end_date:
            rejected.append(RejectedOverride(
                kind="blackout",
                reason=f"Blackout starts after it ends ({window.start_date} > {window.end_date})",
                staff_id=window.staff_id,
            ))
            continue
        accepted.append(window)

    return accepted, rejected


def expand_blackouts(blackouts: list[BlackoutWindow]) -> set[Absence]:
    """Expand blackout windows into one synthetic absence per calendar day."""
    synthetic: set[Absence] = set()
    for window in blackouts:
        for day in expand_date_range(window.start_date, window.end_date):
            synthetic.add((window.staff_id, day))
    return synthetic


def merge_absences(absences: set[Absence], blackouts: list[BlackoutWindow]) -> set[Absence]:
    """Union of persisted absences and blackout days. Overlaps count once."""
    synthetic = expand_blackouts(blackouts)
    added = len(synthetic - absences)
    if added:
        logger.debug("Blackouts added %d synthetic absence days", added)
    return absences | synthetic
