from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from core import Task
from application.ports import TaskNotFoundError, TaskStorage


class MemoryStorage(TaskStorage):
    """Process-local storage; everything is gone when the editor exits."""

    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        self._tasks: Dict[str, Task] = {}
        for task in tasks or ():
            self._tasks[task.id] = replace(task)

    def load_tasks(self) -> List[Task]:
        return sorted((replace(t) for t in self._tasks.values()), key=lambda t: t.created)

    def save_task(self, task: Task) -> None:
        self._tasks[task.id] = replace(task)

    def delete_task(self, task_id: str) -> None:
        if self._tasks.pop(task_id, None) is None:
            raise TaskNotFoundError(task_id)

    def clear(self) -> None:
        self._tasks.clear()

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._tasks
