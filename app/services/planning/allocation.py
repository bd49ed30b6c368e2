"""
Allocation walker.

Steps day by day from an earliest eligible date, consuming one daily capacity
unit per working day until the work item's effort is used up.

Partial final days: an effort that is not a multiple of the daily capacity
still occupies its whole last working day. Remaining effort can go negative
on that step and end dates are never fractional.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from .types import Absence
from .workdays import is_working_day


DAILY_CAPACITY_HOURS = 8


@dataclass
class Allocation:
    start_date: date
    end_date: date
    hours: float
    next_available: date  # day after the last consumed working day
    working_days: int


def allocate(
    staff_id: int,
    effort_hours: float,
    earliest: date,
    absences: set[Absence],
    daily_capacity: int = DAILY_CAPACITY_HOURS,
) -> Allocation:
    """
    Walk forward from `earliest` and place `effort_hours` of work.

    Raises:
        ValueError: if effort_hours or daily_capacity is not positive
    """
    if effort_hours <= 0:
        raise ValueError(f"effort_hours must be positive, got {effort_hours}")
    if daily_capacity <= 0:
        raise ValueError(f"daily_capacity must be positive, got {daily_capacity}")

    remaining = effort_hours
    current = earliest
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    working_days = 0

    while remaining > 0:
        if not is_working_day(staff_id, current, absences):
            current += timedelta(days=1)
            continue

        if start_date is None:
            start_date = current

        remaining -= daily_capacity
        end_date = current
        working_days += 1
        current += timedelta(days=1)

    return Allocation(
        start_date=start_date,
        end_date=end_date,
        hours=effort_hours,
        next_available=current,
        working_days=working_days,
    )
