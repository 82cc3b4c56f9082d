from typing import List, Protocol

from core import Task


class StorageError(Exception):
    """Backend failure while reading or writing tasks."""


class TaskNotFoundError(StorageError):
    def __init__(self, task_id: str):
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class InvalidTaskIdError(StorageError, ValueError):
    """Id that cannot be stored, e.g. one containing path separators."""

    def __init__(self, task_id: str):
        super().__init__(f"Invalid task_id: {task_id!r}")
        self.task_id = task_id


class TaskStorage(Protocol):
    def load_tasks(self) -> List[Task]:
        ...

    def save_task(self, task: Task) -> None:
        ...

    def delete_task(self, task_id: str) -> None:
        ...

    def clear(self) -> None:
        ...
