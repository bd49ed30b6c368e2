"""
Plan builder - deterministic greedy assignment.

Strategy:
1. Sort work items by effort, smallest first (stable)
2. For each item pick the least-loaded staff member with the required skill
3. Start at that person's next available working day (plus any simulated delay)
4. Walk the calendar, consuming one daily capacity unit per working day
5. Flag entries that end after their work item's due date
"""

import logging
from collections import defaultdict
from datetime import date
from typing import Optional

from .allocation import allocate
from .selector import select_staff
from .types import (
    PlanContext,
    PlanResult,
    PlannedEntry,
    WorkItem,
)
from .workdays import advance_working_days, next_working_day


logger = logging.getLogger(__name__)


def classify_overdue(end_date: date, due_date: Optional[date]) -> tuple[bool, int]:
    """(is_overdue, days_overdue) for an entry ending on end_date."""
    if due_date is None or end_date <= due_date:
        return False, 0
    return True, (end_date - due_date).days


class PlanBuilder:
    """
    Greedy planner for one generation.

    next_available and allocated_hours are scoped to this instance, so every
    generation starts from a clean slate.
    """

    def __init__(self, context: PlanContext):
        self.context = context
        self.entries: list[PlannedEntry] = []
        self.skipped: list[int] = []
        self.next_available: dict[int, date] = {s.id: context.today for s in context.staff}
        self.allocated_hours: dict[int, float] = {s.id: 0.0 for s in context.staff}
        self._unmatched_by_skill: dict[str, list[int]] = defaultdict(list)
        self._invalid_effort: list[int] = []

    def build(self) -> PlanResult:
        """
        Main planning method.

        Returns:
            PlanResult with one entry per placeable work item
        """
        for work_item in self._sorted_work_items():
            self._place_work_item(work_item)
        return self._build_result()

    def _sorted_work_items(self) -> list[WorkItem]:
        # sorted() is stable, so equal efforts keep their input order
        return sorted(self.context.work_items, key=lambda w: w.effort_hours)

    def _place_work_item(self, work_item: WorkItem):
        if work_item.effort_hours <= 0:
            logger.warning(
                "Skipping work item %s: effort_hours must be positive, got %s",
                work_item.id, work_item.effort_hours,
            )
            self._invalid_effort.append(work_item.id)
            self.skipped.append(work_item.id)
            return

        staff = select_staff(work_item.skill_required, self.context.staff, self.allocated_hours)
        if staff is None:
            logger.warning(
                "Skipping work item %s (%s): no active staff with skill %s",
                work_item.id, work_item.title, work_item.skill_required.value,
            )
            self._unmatched_by_skill[work_item.skill_required.value].append(work_item.id)
            self.skipped.append(work_item.id)
            return

        absences = self.context.absences
        earliest = next_working_day(staff.id, self.next_available[staff.id], absences)

        delay_days = self.context.delays.get(work_item.id, 0)
        if delay_days > 0:
            earliest = advance_working_days(staff.id, earliest, delay_days, absences)

        allocation = allocate(
            staff.id,
            work_item.effort_hours,
            earliest,
            absences,
            daily_capacity=self.context.daily_capacity,
        )

        self.next_available[staff.id] = allocation.next_available
        self.allocated_hours[staff.id] += work_item.effort_hours

        is_overdue, days_overdue = classify_overdue(allocation.end_date, work_item.due_date)
        self.entries.append(PlannedEntry(
            work_item_id=work_item.id,
            staff_id=staff.id,
            start_date=allocation.start_date,
            end_date=allocation.end_date,
            allocated_hours=work_item.effort_hours,
            is_overdue=is_overdue,
            days_overdue=days_overdue,
        ))

    def _build_result(self) -> PlanResult:
        warnings = []
        for skill, item_ids in self._unmatched_by_skill.items():
            warnings.append(f"{len(item_ids)} work items skipped: no staff with skill {skill}")
        if self._invalid_effort:
            warnings.append(f"{len(self._invalid_effort)} work items skipped: non-positive effort")

        overdue = sum(1 for e in self.entries if e.is_overdue)
        if overdue:
            warnings.append(f"{overdue} work items finish after their due date")

        return PlanResult(
            entries=self.entries,
            skipped_work_item_ids=self.skipped,
            allocated_hours=dict(self.allocated_hours),
            warnings=warnings,
        )


def build_plan(context: PlanContext) -> PlanResult:
    """
    Main entry point for plan building.

    Args:
        context: PlanContext with staff, work items, absences and delays

    Returns:
        PlanResult with the candidate schedule
    """
    builder = PlanBuilder(context)
    result = builder.build()
    logger.info(
        "Built plan: %d entries, %d skipped",
        len(result.entries), result.skipped_count,
    )
    return result
