from app.db.database import Base

# Import models
from app.db.models.staff import Staff, Skill
from app.db.models.work_items import WorkItems
from app.db.models.absences import Absences
from app.db.models.schedule_entries import ScheduleEntries, CompletionType
from app.db.models.version_records import VersionRecords, ChangeType

__all__ = [
    "Base",
    # Models
    "Staff",
    "WorkItems",
    "Absences",
    "ScheduleEntries",
    "VersionRecords",
    # Enums
    "Skill",
    "CompletionType",
    "ChangeType",
]
