"""
Internal data types for plan generation.
decoupled from SQLAlchemy models for cleaner logic.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from app.db.models.staff import Skill
from app.db.models.version_records import ChangeType


# (staff_id, date) - persisted absences and simulated blackouts share this shape
Absence = tuple[int, date]


@dataclass
class StaffMember:
    id: int
    name: str
    skill: Skill
    active: bool = True


@dataclass
class WorkItem:
    id: int
    title: str
    client: str
    skill_required: Skill
    effort_hours: float
    due_date: Optional[date] = None


@dataclass
class PlannedEntry:
    """A schedule entry candidate produced by the generator."""
    work_item_id: int
    staff_id: int
    start_date: date
    end_date: date
    allocated_hours: float
    is_overdue: bool = False
    days_overdue: int = 0


@dataclass
class ExistingEntry:
    """Snapshot of a persisted schedule entry, used for diffing."""
    id: int
    work_item_id: int
    staff_id: int
    start_date: date
    end_date: date
    is_completed: bool = False


@dataclass
class DelayOverride:
    work_item_id: int
    delay_days: int


@dataclass
class BlackoutWindow:
    staff_id: int
    start_date: date
    end_date: date


@dataclass
class RejectedOverride:
    kind: str  # "delay" or "blackout"
    reason: str
    work_item_id: Optional[int] = None
    staff_id: Optional[int] = None


@dataclass
class PlanContext:
    """All data needed to generate one plan."""
    today: date
    staff: list[StaffMember]
    work_items: list[WorkItem]
    absences: set[Absence] = field(default_factory=set)
    delays: dict[int, int] = field(default_factory=dict)  # work_item_id -> working days
    daily_capacity: int = 8
    # left out of work_items because their current entry is completed
    completed_work_item_ids: set[int] = field(default_factory=set)


@dataclass
class PlanResult:
    """Output of one generator pass."""
    entries: list[PlannedEntry]
    skipped_work_item_ids: list[int] = field(default_factory=list)
    allocated_hours: dict[int, float] = field(default_factory=dict)  # staff_id -> hours
    rejected_overrides: list[RejectedOverride] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped_work_item_ids)


@dataclass
class VersionChange:
    """A detected change for one work item between two generations."""
    prior_entry_id: Optional[int]
    work_item_id: int
    staff_id: int
    previous_staff_id: int
    staff_name: str
    work_item_title: str
    change_type: ChangeType
    old_start_date: date
    old_end_date: date
    new_start_date: date
    new_end_date: date
    delta_days: int
    generation_id: str
    generation_timestamp: datetime


@dataclass
class GenerationOutcome:
    """Structured result handed back to the triggering layer."""
    success: bool
    message: str
    entries: list[PlannedEntry] = field(default_factory=list)
    generation_id: Optional[str] = None
    version_count: int = 0
    skipped_work_item_ids: list[int] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    # set when a supplied plan was refused; nothing was written
    plan_errors: list[str] = field(default_factory=list)
