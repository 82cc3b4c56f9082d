"""Human-readable timestamps for the task table and the edit buffer."""

from datetime import datetime
from typing import Optional

EDIT_FORMAT = "%Y-%m-%d %H:%M"


def _span(seconds: int) -> str:
    days, rest = divmod(seconds, 86400)
    hours, rest = divmod(rest, 3600)
    minutes = rest // 60
    if days > 0:
        return f"{days}d"
    if hours > 0:
        return f"{hours}h"
    if minutes > 0:
        return f"{minutes}m"
    return ""


def format_relative(value: Optional[datetime], now: datetime) -> str:
    """``in 3d`` / ``2h ago`` / ``now``; ``-`` when there is no date."""
    if value is None:
        return "-"
    delta = int((value - now).total_seconds())
    span = _span(abs(delta))
    if not span:
        return "now"
    return f"in {span}" if delta > 0 else f"{span} ago"


def format_created(value: datetime, now: datetime) -> str:
    """Relative while younger than a day, the calendar date afterwards."""
    age = int((now - value).total_seconds())
    if 0 <= age < 86400:
        span = _span(age)
        return f"{span} ago" if span else "now"
    return value.strftime("%Y-%m-%d")


def format_for_editing(value: Optional[datetime]) -> str:
    return value.strftime(EDIT_FORMAT) if value is not None else ""
