from pydantic import BaseModel
from datetime import date, datetime
from typing import Optional
from app.db.models.version_records import ChangeType


class VersionRecordResponse(BaseModel):
    id: int
    prior_entry_id: Optional[int]
    work_item_id: int
    staff_id: int
    previous_staff_id: Optional[int]
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

    class Config:
        from_attributes = True
