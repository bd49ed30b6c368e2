from pydantic import BaseModel, Field, model_validator
from datetime import date, datetime
from typing import Optional
from app.db.models.schedule_entries import CompletionType


class PlannedEntryBase(BaseModel):
    work_item_id: int
    staff_id: int
    start_date: date
    end_date: date
    allocated_hours: float = Field(gt=0)
    is_overdue: bool = False
    days_overdue: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def check_date_order(self):
        if self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class PlannedEntryPayload(PlannedEntryBase):
    """An entry from a previewed simulation, applied verbatim."""
    pass


class PlannedEntryResponse(PlannedEntryBase):

    class Config:
        from_attributes = True


class ScheduleEntryResponse(PlannedEntryBase):
    id: int
    is_completed: bool
    completed_at: Optional[datetime]
    completion_type: Optional[CompletionType]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
