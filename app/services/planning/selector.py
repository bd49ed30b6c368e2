"""
Assignment selection.
Narrows staff to an exact skill match and picks the least-loaded one.
"""

from typing import Optional

from app.db.models.staff import Skill

from .types import StaffMember


def matching_staff(skill: Skill, staff: list[StaffMember]) -> list[StaffMember]:
    """Staff whose skill equals the required skill, in input order."""
    return [s for s in staff if s.skill == skill]


def select_staff(
    skill: Skill,
    staff: list[StaffMember],
    allocated_hours: dict[int, float],
) -> Optional[StaffMember]:
    """
    Pick the matching staff member with the smallest allocated-hours tally.

    Returns None when nobody has the skill. Ties go to whoever comes first in
    `staff`, so callers must pass staff in a stable order for reproducible plans.
    """
    candidates = matching_staff(skill, staff)
    if not candidates:
        return None

    selected = candidates[0]
    for candidate in candidates[1:]:
        if allocated_hours.get(candidate.id, 0) < allocated_hours.get(selected.id, 0):
            selected = candidate
    return selected
