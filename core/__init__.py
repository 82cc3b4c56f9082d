from .task import Task, new_task_id
from .date_resolver import (
    ABSENT,
    DEFAULT_DEFER_HOUR,
    DEFAULT_DUE_HOUR,
    DateResolver,
    Resolution,
    resolve_date,
)
from .urgency import Urgency, classify_urgency

__all__ = [
    "Task",
    "new_task_id",
    # Dates
    "ABSENT",
    "DEFAULT_DEFER_HOUR",
    "DEFAULT_DUE_HOUR",
    "DateResolver",
    "Resolution",
    "resolve_date",
    # Highlighting
    "Urgency",
    "classify_urgency",
]
