"""Per-field edit buffer for the task being created or edited."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from core import DateResolver, Resolution, Task
from util.time_format import format_for_editing


class EditField(Enum):
    TITLE = ("title", "Title")
    DESCRIPTION = ("description", "Description")
    DUE = ("due", "Due Date")
    DEFER_UNTIL = ("defer_until", "Defer Until")

    @property
    def key(self) -> str:
        return self.value[0]

    @property
    def label(self) -> str:
        return self.value[1]

    @property
    def is_date(self) -> bool:
        return self in (EditField.DUE, EditField.DEFER_UNTIL)


FIELD_ORDER: Tuple[EditField, ...] = (
    EditField.TITLE,
    EditField.DESCRIPTION,
    EditField.DUE,
    EditField.DEFER_UNTIL,
)


@dataclass(frozen=True)
class CommitValues:
    title: str
    description: str
    due: Optional[datetime]
    defer_until: Optional[datetime]


class EditBuffer:
    """Raw text for each field plus the focused field.

    Text is only interpreted at commit time (:meth:`resolve`); moving focus
    never validates. A failed resolve leaves every raw string untouched and
    records an error per offending field.
    """

    def __init__(self, task: Task, *, is_new: bool = False, return_cursor: int = 0):
        self.task_id = task.id
        self.is_new = is_new
        # Cursor row to restore when a new task is discarded.
        self.return_cursor = return_cursor
        self.focus: EditField = EditField.TITLE
        self.fields: Dict[EditField, str] = {
            EditField.TITLE: task.title,
            EditField.DESCRIPTION: task.description,
            EditField.DUE: format_for_editing(task.due),
            EditField.DEFER_UNTIL: format_for_editing(task.defer_until),
        }
        self.errors: Dict[EditField, str] = {}
        self._seed_text = dict(self.fields)
        self._seed_dates: Dict[EditField, Optional[datetime]] = {
            field: getattr(task, field.key) for field in FIELD_ORDER if field.is_date
        }

    # -------------------- text editing --------------------
    def text(self, field: Optional[EditField] = None) -> str:
        return self.fields[field or self.focus]

    def insert(self, chars: str) -> None:
        if not chars:
            return
        self.fields[self.focus] += chars
        self.errors.pop(self.focus, None)

    def backspace(self) -> None:
        current = self.fields[self.focus]
        if current:
            self.fields[self.focus] = current[:-1]
            self.errors.pop(self.focus, None)

    # -------------------- focus --------------------
    def _step_focus(self, delta: int) -> EditField:
        index = FIELD_ORDER.index(self.focus)
        self.focus = FIELD_ORDER[(index + delta) % len(FIELD_ORDER)]
        return self.focus

    def next_field(self) -> EditField:
        return self._step_focus(1)

    def previous_field(self) -> EditField:
        return self._step_focus(-1)

    # -------------------- commit --------------------
    def _resolve_date_field(
        self,
        field: EditField,
        resolve: Callable[[str, datetime], Resolution],
        now: datetime,
    ) -> Resolution:
        raw = self.fields[field]
        if raw == self._seed_text[field] and self._seed_dates[field] is not None:
            # Untouched: keep the stored timestamp to the second.
            return Resolution(value=self._seed_dates[field])
        return resolve(raw, now)

    def resolve(self, resolver: DateResolver, now: datetime) -> Optional[CommitValues]:
        """Resolve all fields; ``None`` (with :attr:`errors` filled) when any date fails."""
        due = self._resolve_date_field(EditField.DUE, resolver.resolve_due, now)
        defer = self._resolve_date_field(EditField.DEFER_UNTIL, resolver.resolve_defer, now)
        errors: Dict[EditField, str] = {}
        for field, outcome in ((EditField.DUE, due), (EditField.DEFER_UNTIL, defer)):
            if not outcome.ok:
                errors[field] = outcome.error
        self.errors = errors
        if errors:
            return None
        return CommitValues(
            title=self.fields[EditField.TITLE],
            description=self.fields[EditField.DESCRIPTION],
            due=due.value,
            defer_until=defer.value,
        )

    def error_summary(self) -> str:
        return "; ".join(f"{field.label}: {message}" for field, message in self.errors.items())


__all__ = ["CommitValues", "EditBuffer", "EditField", "FIELD_ORDER"]
