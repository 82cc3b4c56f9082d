import logging
import os
import shutil
import uuid
from pathlib import Path
from typing import List, Set, Tuple

import yaml

from core import Task
from application.ports import InvalidTaskIdError, StorageError, TaskNotFoundError, TaskStorage
from infrastructure.memory_storage import MemoryStorage
from infrastructure.task_file_parser import TaskFileParser

logger = logging.getLogger("wimm.storage")


class FileTaskStorage(TaskStorage):
    """One ``<id>.task`` file per task under ``tasks_dir``."""

    def __init__(self, tasks_dir: Path):
        self.tasks_dir = Path(tasks_dir).expanduser()
        try:
            self.tasks_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot open task directory {self.tasks_dir}: {exc}") from exc

    def _resolve_path(self, task_id: str) -> Path:
        # SEC: ids become file names, keep them inside tasks_dir
        TaskFileParser.validate_id(task_id)
        resolved = (self.tasks_dir / f"{task_id}.task").resolve()
        if not resolved.is_relative_to(self.tasks_dir.resolve()):
            raise InvalidTaskIdError(task_id)
        return resolved

    def load_tasks(self) -> List[Task]:
        parsed_files: List[Tuple[Path, Task]] = []
        try:
            files = sorted(self.tasks_dir.glob("*.task"))
        except OSError as exc:
            raise StorageError(f"Cannot list {self.tasks_dir}: {exc}") from exc
        for file in files:
            try:
                parsed = TaskFileParser.parse(file)
            except (OSError, ValueError, yaml.YAMLError) as exc:
                logger.warning("Skipping unreadable task file %s: %s", file, exc)
                continue
            if parsed is None:
                logger.warning("Skipping task file without header: %s", file)
                continue
            parsed_files.append((file, parsed))

        # One task per id: the file named after the id wins, then file name order.
        parsed_files.sort(key=lambda item: (item[1].id != item[0].stem, item[0].name))
        tasks: List[Task] = []
        seen: Set[str] = set()
        for file, task in parsed_files:
            if task.id in seen:
                logger.warning("Skipping task file with duplicate id %s: %s", task.id, file)
                continue
            seen.add(task.id)
            tasks.append(task)
        tasks.sort(key=lambda t: t.created)
        return tasks

    def save_task(self, task: Task) -> None:
        path = self._resolve_path(task.id)
        tmp_path = path.with_suffix(".task.tmp")
        try:
            tmp_path.write_text(TaskFileParser.to_file_content(task), encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as exc:
            raise StorageError(f"Cannot write task {task.id}: {exc}") from exc

    def delete_task(self, task_id: str) -> None:
        path = self._resolve_path(task_id)
        try:
            path.unlink()
        except FileNotFoundError:
            raise TaskNotFoundError(task_id) from None
        except OSError as exc:
            raise StorageError(f"Cannot delete task {task_id}: {exc}") from exc

    def clear(self) -> None:
        # Swap in an empty directory, then drop the old one.
        trash = self.tasks_dir.with_name(f".{self.tasks_dir.name}-trash-{uuid.uuid4().hex[:8]}")
        try:
            if self.tasks_dir.exists():
                self.tasks_dir.rename(trash)
            self.tasks_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot clear {self.tasks_dir}: {exc}") from exc
        shutil.rmtree(trash, ignore_errors=True)


def open_storage(data_dir: Path, kind: str = "file") -> TaskStorage:
    """Open the configured backend, falling back to memory when the disk is unusable."""
    if kind == "memory":
        return MemoryStorage()
    try:
        return FileTaskStorage(Path(data_dir).expanduser() / "tasks")
    except StorageError as exc:
        logger.warning("Falling back to in-memory storage: %s", exc)
        return MemoryStorage()


__all__ = ["FileTaskStorage", "open_storage"]
