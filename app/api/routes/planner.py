import logging
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.db.models.schedule_entries import ScheduleEntries
from app.db.models.version_records import VersionRecords
from app.schemas.planner import (
    GenerateRequest,
    GenerateResponse,
    RecalculationStatus,
    RejectedOverrideResponse,
    SimulationRequest,
    SimulationResponse,
)
from app.schemas.schedule_entries import PlannedEntryResponse, ScheduleEntryResponse
from app.schemas.version_records import VersionRecordResponse
from app.services.planning import (
    BlackoutWindow,
    DelayOverride,
    EntryAlreadyCompletedError,
    EntryNotFoundError,
    PlannedEntry,
    generate_plan,
    mark_complete,
    needs_recalculation,
    run_simulation,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/planner", tags=["planner"])


@router.post("/generate", response_model=GenerateResponse)
def generate(
    payload: GenerateRequest,
    db: Session = Depends(get_db),
):
    """Generate and persist a plan, or apply a previewed simulation verbatim"""
    plan = None
    if payload.plan:
        plan = [PlannedEntry(**entry.model_dump()) for entry in payload.plan]

    outcome = generate_plan(db, exclude_completed=payload.exclude_completed, plan=plan)
    if outcome.plan_errors:
        raise HTTPException(
            status_code=422,
            detail={"success": False, "error": outcome.message, "plan_errors": outcome.plan_errors},
        )
    if not outcome.success:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"success": False, "error": outcome.message},
        )

    return GenerateResponse(
        success=True,
        message=outcome.message,
        generation_id=outcome.generation_id,
        version_count=outcome.version_count,
        entries=[PlannedEntryResponse.model_validate(e) for e in outcome.entries],
        skipped_work_item_ids=outcome.skipped_work_item_ids,
        warnings=outcome.warnings,
    )


@router.post("/simulate", response_model=SimulationResponse)
def simulate(
    payload: SimulationRequest,
    db: Session = Depends(get_db),
):
    """Preview a plan with delay/blackout overrides - nothing is saved"""
    delays = [DelayOverride(**d.model_dump()) for d in payload.delays]
    blackouts = [BlackoutWindow(**b.model_dump()) for b in payload.blackouts]

    try:
        result = run_simulation(
            db,
            delays=delays,
            blackouts=blackouts,
            exclude_completed=payload.exclude_completed,
        )
    except SQLAlchemyError:
        logger.exception("Error running plan simulation")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"success": False, "error": "Failed to run simulation"},
        )

    return SimulationResponse(
        entries=[PlannedEntryResponse.model_validate(e) for e in result.entries],
        skipped_work_item_ids=result.skipped_work_item_ids,
        rejected_overrides=[RejectedOverrideResponse.model_validate(r) for r in result.rejected_overrides],
        warnings=result.warnings,
    )


@router.post("/entries/{entry_id}/complete", response_model=ScheduleEntryResponse)
def complete_entry(
    entry_id: int,
    db: Session = Depends(get_db),
):
    try:
        return mark_complete(db, entry_id)
    except EntryNotFoundError:
        raise HTTPException(status_code=404, detail="Schedule entry not found")
    except EntryAlreadyCompletedError:
        raise HTTPException(status_code=409, detail="Schedule entry already completed")


@router.get("/entries", response_model=List[ScheduleEntryResponse])
def list_entries(
    staff_id: Optional[int] = None,
    work_item_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: Session = Depends(get_db),
):
    stmt = select(ScheduleEntries)

    #optional filters
    if staff_id:
        stmt = stmt.where(ScheduleEntries.staff_id == staff_id)
    if work_item_id:
        stmt = stmt.where(ScheduleEntries.work_item_id == work_item_id)
    if start_date:
        stmt = stmt.where(ScheduleEntries.start_date >= start_date)
    if end_date:
        stmt = stmt.where(ScheduleEntries.end_date <= end_date)

    stmt = stmt.order_by(ScheduleEntries.start_date, ScheduleEntries.id)
    return db.execute(stmt).scalars().all()


@router.get("/versions", response_model=List[VersionRecordResponse])
def list_versions(
    generation_id: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
):
    """Version history, newest generation first"""
    stmt = select(VersionRecords)
    if generation_id:
        stmt = stmt.where(VersionRecords.generation_id == generation_id)

    stmt = stmt.order_by(
        VersionRecords.generation_timestamp.desc(),
        VersionRecords.id.desc(),
    ).offset(skip).limit(limit)
    return db.execute(stmt).scalars().all()


@router.get("/recalculation", response_model=RecalculationStatus)
def recalculation_status(db: Session = Depends(get_db)):
    return RecalculationStatus(needs_recalculation=needs_recalculation(db))
