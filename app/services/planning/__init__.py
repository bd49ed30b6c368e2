"""
Plan generation and versioning package.

Usage:
    from app.services.planning import generate_plan

    # Build, diff and persist in one call
    outcome = generate_plan(db, exclude_completed=True)

    # Or build from a context for inspection/testing
    from app.services.planning import load_plan_context, generate_plan_from_context

    context = load_plan_context(db, today=date(2025, 1, 20))
    result = generate_plan_from_context(context)
"""

from .types import (
    Absence,
    StaffMember,
    WorkItem,
    PlannedEntry,
    ExistingEntry,
    DelayOverride,
    BlackoutWindow,
    RejectedOverride,
    PlanContext,
    PlanResult,
    VersionChange,
    GenerationOutcome,
)
from .errors import (
    PlanningError,
    PlanPersistenceError,
    EntryNotFoundError,
    EntryAlreadyCompletedError,
)
from .data_loader import load_plan_context
from .builder import build_plan
from .differ import diff_plans
from .persister import persist_plan
from .plan_checks import check_supplied_plan
from .generator import (
    generate_plan,
    generate_plan_from_context,
    run_simulation,
    simulate_plan_from_context,
)
from .completion import mark_complete
from .recalculation import needs_recalculation

__all__ = [
    # Types
    "Absence",
    "StaffMember",
    "WorkItem",
    "PlannedEntry",
    "ExistingEntry",
    "DelayOverride",
    "BlackoutWindow",
    "RejectedOverride",
    "PlanContext",
    "PlanResult",
    "VersionChange",
    "GenerationOutcome",
    # Errors
    "PlanningError",
    "PlanPersistenceError",
    "EntryNotFoundError",
    "EntryAlreadyCompletedError",
    # Main entry points
    "generate_plan",
    "generate_plan_from_context",
    "run_simulation",
    "simulate_plan_from_context",
    "mark_complete",
    "needs_recalculation",
    # Lower-level functions
    "load_plan_context",
    "build_plan",
    "diff_plans",
    "persist_plan",
    "check_supplied_plan",
]
