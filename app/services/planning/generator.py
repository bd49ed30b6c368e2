"""
Plan generator - main orchestration layer.

This module provides the high-level API for generating, simulating and
applying plans, combining data loading, building, diffing and persisting.
"""

import logging
from datetime import date
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings

from .builder import build_plan
from .data_loader import (
    completed_work_item_ids,
    load_existing_entries,
    load_name_lookups,
    load_plan_context,
    load_staff,
    load_work_items,
)
from .differ import diff_plans, new_generation_id
from .errors import PlanPersistenceError
from .overrides import merge_absences, validate_blackouts, validate_delays
from .persister import persist_plan
from .plan_checks import check_supplied_plan
from .types import (
    BlackoutWindow,
    DelayOverride,
    GenerationOutcome,
    PlanContext,
    PlannedEntry,
    PlanResult,
)


logger = logging.getLogger(__name__)


def generate_plan_from_context(context: PlanContext) -> PlanResult:
    """
    Build a plan from a pre-loaded context.

    Useful for testing or when you want to manipulate the context
    before building.
    """
    return build_plan(context)


def simulate_plan_from_context(
    context: PlanContext,
    delays: Optional[list[DelayOverride]] = None,
    blackouts: Optional[list[BlackoutWindow]] = None,
) -> PlanResult:
    """
    Build a what-if plan with delay and blackout overrides applied.

    Malformed overrides are dropped and listed in result.rejected_overrides.
    The context passed in is not modified.
    """
    accepted_delays, rejected_delays = validate_delays(
        delays or [], context.work_items, context.completed_work_item_ids,
    )
    accepted_blackouts, rejected_blackouts = validate_blackouts(blackouts or [], context.staff)

    simulated = PlanContext(
        today=context.today,
        staff=context.staff,
        work_items=context.work_items,
        absences=merge_absences(context.absences, accepted_blackouts),
        delays=accepted_delays,
        daily_capacity=context.daily_capacity,
        completed_work_item_ids=context.completed_work_item_ids,
    )
    result = build_plan(simulated)

    rejected = rejected_delays + rejected_blackouts
    for override in rejected:
        logger.warning("Rejected %s override: %s", override.kind, override.reason)
    if rejected:
        result.warnings.append(f"{len(rejected)} simulation overrides rejected")
    result.rejected_overrides = rejected
    return result


def run_simulation(
    db: Session,
    delays: Optional[list[DelayOverride]] = None,
    blackouts: Optional[list[BlackoutWindow]] = None,
    exclude_completed: bool = False,
    today: Optional[date] = None,
) -> PlanResult:
    """
    Run a what-if plan against live masters. Never writes.

    Raises:
        SQLAlchemyError: if loading masters fails
    """
    context = load_plan_context(
        db,
        today or date.today(),
        exclude_completed=exclude_completed,
        daily_capacity=settings.DAILY_CAPACITY_HOURS,
    )
    return simulate_plan_from_context(context, delays, blackouts)


def generate_plan(
    db: Session,
    exclude_completed: bool = False,
    plan: Optional[list[PlannedEntry]] = None,
    today: Optional[date] = None,
) -> GenerationOutcome:
    """
    Generate a plan and replace the persisted one with it.

    Main entry point for plan generation. This function:
    1. Loads masters and builds a plan, or takes `plan` as given
       (applying a previewed simulation verbatim once it passes
       check_supplied_plan)
    2. Diffs it against the persisted plan
    3. Writes version records, then replaces the persisted entries

    Args:
        db: Database session
        exclude_completed: keep completed entries and skip their work items
        plan: pre-computed entries to apply instead of building
        today: first schedulable day, defaults to date.today()

    Returns:
        GenerationOutcome. On failure success is False and no entries are
        returned. A refused supplied plan also lists its problems in
        plan_errors.
    """
    warnings: list[str] = []
    skipped: list[int] = []
    plan_errors: list[str] = []

    try:
        existing = load_existing_entries(db)
        if plan:
            entries = list(plan)
            if exclude_completed:
                entries = _drop_completed(entries, completed_work_item_ids(existing), warnings)
            plan_errors = check_supplied_plan(entries, load_staff(db), load_work_items(db))
        else:
            context = load_plan_context(
                db,
                today or date.today(),
                exclude_completed=exclude_completed,
                daily_capacity=settings.DAILY_CAPACITY_HOURS,
            )
            result = build_plan(context)
            entries = result.entries
            skipped = result.skipped_work_item_ids
            warnings.extend(result.warnings)

        staff_names, work_item_titles = load_name_lookups(
            db,
            {e.staff_id for e in entries} | {e.staff_id for e in existing},
            {e.work_item_id for e in entries} | {e.work_item_id for e in existing},
        )
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error loading data for plan generation")
        return GenerationOutcome(success=False, message="Failed to generate plan")

    if plan_errors:
        for error in plan_errors:
            logger.warning("Supplied plan rejected: %s", error)
        return GenerationOutcome(
            success=False,
            message=f"Supplied plan rejected: {len(plan_errors)} problems found",
            warnings=warnings,
            plan_errors=plan_errors,
        )

    generation_id = new_generation_id()
    logger.info("Starting plan generation %s", generation_id)

    changes = diff_plans(entries, existing, staff_names, work_item_titles, generation_id=generation_id)

    try:
        version_count = persist_plan(db, entries, changes, exclude_completed=exclude_completed)
    except PlanPersistenceError as exc:
        return GenerationOutcome(
            success=False,
            message=str(exc),
            generation_id=generation_id,
            warnings=warnings,
        )

    return GenerationOutcome(
        success=True,
        message=f"Plan generated with {len(entries)} entries",
        entries=entries,
        generation_id=generation_id,
        version_count=version_count,
        skipped_work_item_ids=skipped,
        warnings=warnings,
    )


def _drop_completed(
    entries: list[PlannedEntry],
    completed_ids: set[int],
    warnings: list[str],
) -> list[PlannedEntry]:
    """Completed entries survive, so a supplied plan must not duplicate them."""
    kept = [e for e in entries if e.work_item_id not in completed_ids]
    dropped = len(entries) - len(kept)
    if dropped:
        logger.warning("Dropped %d supplied entries for completed work items", dropped)
        warnings.append(f"{dropped} entries for completed work items were ignored")
    return kept
