"""
Checks for a plan supplied from outside (e.g. a previewed simulation).

A supplied plan is written verbatim, so it has to satisfy the same
invariants the builder guarantees for plans it computes itself.
"""

from .types import PlannedEntry, StaffMember, WorkItem
from .workdays import is_weekend


def check_supplied_plan(
    entries: list[PlannedEntry],
    staff: list[StaffMember],
    work_items: list[WorkItem],
) -> list[str]:
    """
    Return one message per problem found. An empty list means the plan can be saved.

    Args:
        entries: the plan to apply
        staff: active staff members
        work_items: work items eligible for planning
    """
    staff_by_id = {s.id: s for s in staff}
    items_by_id = {w.id: w for w in work_items}
    seen: set[int] = set()
    errors: list[str] = []

    for entry in entries:
        label = f"work item {entry.work_item_id}"

        if entry.work_item_id in seen:
            errors.append(f"{label}: more than one entry")
        seen.add(entry.work_item_id)

        item = items_by_id.get(entry.work_item_id)
        member = staff_by_id.get(entry.staff_id)
        if item is None:
            errors.append(f"{label}: unknown work item")
        if member is None:
            errors.append(f"{label}: unknown or inactive staff member {entry.staff_id}")
        if item is not None and member is not None and member.skill != item.skill_required:
            errors.append(
                f"{label}: staff member {member.id} has skill {member.skill.value}, "
                f"{item.skill_required.value} required"
            )

        if entry.start_date > entry.end_date:
            errors.append(f"{label}: starts after it ends ({entry.start_date} > {entry.end_date})")
        if is_weekend(entry.start_date) or is_weekend(entry.end_date):
            errors.append(f"{label}: starts or ends on a weekend")
        if entry.allocated_hours <= 0:
            errors.append(f"{label}: allocated_hours must be positive")

    return errors
