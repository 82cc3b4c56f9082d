"""Task entity."""

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional


def new_task_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Task:
    id: str
    title: str = ""
    description: str = ""
    completed: bool = False
    created: datetime = field(default_factory=datetime.now)
    due: Optional[datetime] = None
    defer_until: Optional[datetime] = None

    @classmethod
    def create(cls, title: str = "", now: Optional[datetime] = None) -> "Task":
        """Build a fresh task with a generated id and creation timestamp."""
        return cls(id=new_task_id(), title=title, created=now or datetime.now())

    def with_fields(
        self,
        *,
        title: str,
        description: str,
        due: Optional[datetime],
        defer_until: Optional[datetime],
    ) -> "Task":
        """Return a copy carrying edited fields; id and created stay put."""
        return replace(self, title=title, description=description, due=due, defer_until=defer_until)

    def toggled(self) -> "Task":
        return replace(self, completed=not self.completed)


__all__ = ["Task", "new_task_id"]
