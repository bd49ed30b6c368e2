"""
Working-day calendar utilities.
Decides whether a staff member can work on a given date.
"""

from datetime import date, timedelta

from .types import Absence


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def is_working_day(staff_id: int, day: date, absences: set[Absence]) -> bool:
    """False on weekends and on any absence recorded for this staff member."""
    if is_weekend(day):
        return False
    return (staff_id, day) not in absences


def next_working_day(staff_id: int, from_date: date, absences: set[Absence]) -> date:
    """First working day on or after from_date."""
    current = from_date
    while not is_working_day(staff_id, current, absences):
        current += timedelta(days=1)
    return current


def advance_working_days(
    staff_id: int,
    from_date: date,
    count: int,
    absences: set[Absence],
) -> date:
    """
    Walk forward `count` working days from from_date (exclusive).

    Weekends and absences do not count towards the total. count=0 returns
    from_date unchanged.
    """
    current = from_date
    counted = 0
    while counted < count:
        current += timedelta(days=1)
        if is_working_day(staff_id, current, absences):
            counted += 1
    return current


def expand_date_range(start: date, end: date) -> list[date]:
    """Every calendar day from start to end inclusive. Empty if start > end."""
    days = []
    current = start
    while current <= end:
        days.append(current)
        current += timedelta(days=1)
    return days

