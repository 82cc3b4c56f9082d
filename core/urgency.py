from datetime import datetime, timedelta
from enum import Enum

from .task import Task

DUE_NOW_WINDOW = timedelta(hours=1)
DUE_SOON_WINDOW = timedelta(hours=24)


class Urgency(Enum):
    DEFERRED = ("deferred", "class:urgency.deferred")
    OVERDUE = ("overdue", "class:urgency.overdue")
    DUE_NOW = ("due-now", "class:urgency.now")
    DUE_SOON = ("due-soon", "class:urgency.soon")
    NORMAL = ("normal", "")

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def style(self) -> str:
        return self.value[1]


def classify_urgency(task: Task, now: datetime) -> Urgency:
    """Classify ``task`` at ``now``. Rules are checked in order; the first hit wins."""
    if task.defer_until is not None and now < task.defer_until:
        return Urgency.DEFERRED
    if task.due is None:
        return Urgency.NORMAL
    remaining = task.due - now
    if remaining <= timedelta(0):
        return Urgency.OVERDUE
    if remaining < DUE_NOW_WINDOW:
        return Urgency.DUE_NOW
    if remaining <= DUE_SOON_WINDOW:
        return Urgency.DUE_SOON
    return Urgency.NORMAL


__all__ = ["Urgency", "classify_urgency", "DUE_NOW_WINDOW", "DUE_SOON_WINDOW"]
