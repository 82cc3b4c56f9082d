"""Natural-language, relative and absolute date resolution for task fields.

Resolution order (first match wins):

1. empty text (or ``-``)               -> absent, the date is cleared
2. keywords: today / tomorrow / yesterday, ``friday``, ``next friday``
3. relative offsets: ``30m``, ``4h``, ``2d``, ``1w`` -> now + offset
4. absolute dates: ``YYYY-MM-DD [HH:MM]`` or ``MM-DD`` (current year, never rolled)

Date-only forms land on the caller-supplied default hour; relative offsets keep
the time of ``now``. Nothing here raises: failures come back as a
:class:`Resolution` carrying an error message.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Callable, Dict, Optional, Tuple

DEFAULT_DUE_HOUR = 17
DEFAULT_DEFER_HOUR = 8

CLEAR_TOKENS = frozenset({"", "-"})

WEEKDAYS: Dict[str, int] = {
    "monday": 0,
    "mon": 0,
    "tuesday": 1,
    "tue": 1,
    "wednesday": 2,
    "wed": 2,
    "thursday": 3,
    "thu": 3,
    "friday": 4,
    "fri": 4,
    "saturday": 5,
    "sat": 5,
    "sunday": 6,
    "sun": 6,
}

DAY_OFFSETS: Dict[str, int] = {"yesterday": -1, "today": 0, "tomorrow": 1}

RELATIVE_UNITS: Dict[str, timedelta] = {
    "m": timedelta(minutes=1),
    "h": timedelta(hours=1),
    "d": timedelta(days=1),
    "w": timedelta(weeks=1),
}

RELATIVE_PATTERN = re.compile(r"^(\d+)\s*([mhdw])$")
FULL_DATE_PATTERN = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})(?:\s+(\d{1,2}):(\d{2}))?$")
SHORT_DATE_PATTERN = re.compile(r"^(\d{1,2})-(\d{1,2})$")


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving one raw date string."""

    value: Optional[datetime] = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return not self.error

    @property
    def cleared(self) -> bool:
        return self.ok and self.value is None


ABSENT = Resolution()


def _at_hour(day: date, hour: int) -> datetime:
    return datetime.combine(day, time(hour=hour))


def _resolve_keyword(token: str, now: datetime, default_hour: int) -> Optional[datetime]:
    today = now.date()
    if token in DAY_OFFSETS:
        return _at_hour(today + timedelta(days=DAY_OFFSETS[token]), default_hour)

    if token in WEEKDAYS:
        ahead = (WEEKDAYS[token] - today.weekday()) % 7
        # Same weekday counts as today only until the default hour has passed.
        if ahead == 0 and now >= _at_hour(today, default_hour):
            ahead = 7
        return _at_hour(today + timedelta(days=ahead), default_hour)

    if token.startswith("next "):
        name = token[len("next "):].strip()
        if name in WEEKDAYS:
            ahead = (WEEKDAYS[name] - today.weekday()) % 7 + 7
            return _at_hour(today + timedelta(days=ahead), default_hour)
    return None


def _resolve_relative(token: str, now: datetime, default_hour: int) -> Optional[datetime]:
    match = RELATIVE_PATTERN.match(token)
    if not match:
        return None
    amount, unit = match.groups()
    return now + int(amount) * RELATIVE_UNITS[unit]


def _resolve_absolute(token: str, now: datetime, default_hour: int) -> Optional[datetime]:
    match = FULL_DATE_PATTERN.match(token)
    if match:
        year, month, day, hour, minute = match.groups()
        when = date(int(year), int(month), int(day))
        if hour is None:
            return _at_hour(when, default_hour)
        return datetime.combine(when, time(hour=int(hour), minute=int(minute)))

    match = SHORT_DATE_PATTERN.match(token)
    if match:
        month, day = match.groups()
        return _at_hour(date(now.year, int(month), int(day)), default_hour)
    return None


RESOLVERS: Tuple[Callable[[str, datetime, int], Optional[datetime]], ...] = (
    _resolve_keyword,
    _resolve_relative,
    _resolve_absolute,
)


def resolve_date(text: str, now: datetime, default_hour: int) -> Resolution:
    """Resolve ``text`` relative to ``now``; date-only forms use ``default_hour``."""
    raw = (text or "").strip()
    token = raw.lower()
    if token in CLEAR_TOKENS:
        return ABSENT
    for resolver in RESOLVERS:
        try:
            value = resolver(token, now, default_hour)
        except (ValueError, OverflowError):
            # Pattern matched but the calendar rejected it (2025-02-30, 99999w, hour 25).
            return Resolution(error=f"Invalid date: {raw!r}")
        if value is not None:
            return Resolution(value=value)
    return Resolution(error=f"Unrecognized date: {raw!r}")


class DateResolver:
    """Binds the configured default hours for the Due and Defer Until fields."""

    def __init__(self, due_hour: int = DEFAULT_DUE_HOUR, defer_hour: int = DEFAULT_DEFER_HOUR):
        self.due_hour = due_hour
        self.defer_hour = defer_hour

    def resolve_due(self, text: str, now: datetime) -> Resolution:
        return resolve_date(text, now, self.due_hour)

    def resolve_defer(self, text: str, now: datetime) -> Resolution:
        return resolve_date(text, now, self.defer_hour)


__all__ = [
    "ABSENT",
    "DEFAULT_DEFER_HOUR",
    "DEFAULT_DUE_HOUR",
    "DateResolver",
    "Resolution",
    "resolve_date",
]
