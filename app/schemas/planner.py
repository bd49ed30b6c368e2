from pydantic import BaseModel, Field
from datetime import date
from typing import List, Optional

from app.schemas.schedule_entries import PlannedEntryPayload, PlannedEntryResponse


class GenerateRequest(BaseModel):
    exclude_completed: bool = False
    plan: Optional[List[PlannedEntryPayload]] = None


class GenerateResponse(BaseModel):
    success: bool
    message: str
    generation_id: Optional[str]
    version_count: int
    entries: List[PlannedEntryResponse]
    skipped_work_item_ids: List[int]
    warnings: List[str]


class DelayOverrideIn(BaseModel):
    work_item_id: int
    delay_days: int


class BlackoutWindowIn(BaseModel):
    # start_date > end_date is not rejected here: bad windows are dropped
    # individually by the simulation instead of failing the whole request
    staff_id: int
    start_date: date
    end_date: date


class SimulationRequest(BaseModel):
    delays: List[DelayOverrideIn] = Field(default_factory=list)
    blackouts: List[BlackoutWindowIn] = Field(default_factory=list)
    exclude_completed: bool = False


class RejectedOverrideResponse(BaseModel):
    kind: str
    reason: str
    work_item_id: Optional[int] = None
    staff_id: Optional[int] = None

    class Config:
        from_attributes = True


class SimulationResponse(BaseModel):
    entries: List[PlannedEntryResponse]
    skipped_work_item_ids: List[int]
    rejected_overrides: List[RejectedOverrideResponse]
    warnings: List[str]


class RecalculationStatus(BaseModel):
    needs_recalculation: bool
