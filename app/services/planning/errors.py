class PlanningError(Exception):
    pass


class PlanPersistenceError(PlanningError):
    """Deleting or inserting schedule entries failed; the replace was rolled back."""


class EntryNotFoundError(PlanningError):
    pass


class EntryAlreadyCompletedError(PlanningError):
    pass
