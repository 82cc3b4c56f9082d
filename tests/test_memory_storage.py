from datetime import datetime

import pytest

from application.ports import TaskNotFoundError
from core import Task
from infrastructure.memory_storage import MemoryStorage


def _task(task_id: str, day: int) -> Task:
    return Task(id=task_id, title=task_id, created=datetime(2025, 3, day))


def test_save_and_load_in_created_order():
    storage = MemoryStorage()
    storage.save_task(_task("b", 5))
    storage.save_task(_task("a", 9))
    storage.save_task(_task("c", 1))
    assert [t.id for t in storage.load_tasks()] == ["c", "b", "a"]
    assert len(storage) == 3
    assert "a" in storage


def test_stored_copies_are_isolated():
    task = _task("a", 1)
    storage = MemoryStorage([task])
    task.title = "mutated"
    loaded = storage.load_tasks()[0]
    assert loaded.title == "a"
    loaded.title = "also mutated"
    assert storage.load_tasks()[0].title == "a"


def test_delete_and_clear():
    storage = MemoryStorage([_task("a", 1), _task("b", 2)])
    storage.delete_task("a")
    assert "a" not in storage
    with pytest.raises(TaskNotFoundError):
        storage.delete_task("a")
    storage.clear()
    assert storage.load_tasks() == []
