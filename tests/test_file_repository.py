from datetime import datetime, timezone
from pathlib import Path

import pytest

from application.ports import InvalidTaskIdError, StorageError, TaskNotFoundError
from core import Task
from infrastructure.file_repository import FileTaskStorage, open_storage
from infrastructure.memory_storage import MemoryStorage
from infrastructure.task_file_parser import TaskFileParser
from interface.tui_controller import ModeController


def _sample_task(task_id: str = "task-001", created: datetime = datetime(2025, 3, 10, 9, 15, 30)) -> Task:
    return Task(
        id=task_id,
        title="Repository roundtrip: sample task",
        description="First line\n\n---\nnot a header",
        completed=True,
        created=created,
        due=datetime(2025, 3, 14, 17, 0),
        defer_until=None,
    )


def test_file_storage_roundtrip(tmp_path: Path):
    storage = FileTaskStorage(tmp_path / "tasks")
    task = _sample_task()

    storage.save_task(task)
    loaded = storage.load_tasks()

    assert loaded == [task]
    assert (tmp_path / "tasks" / "task-001.task").exists()


def test_save_overwrites_existing_file(tmp_path: Path):
    storage = FileTaskStorage(tmp_path / "tasks")
    task = _sample_task()
    storage.save_task(task)

    task.title = "Renamed"
    task.due = None
    storage.save_task(task)

    [loaded] = storage.load_tasks()
    assert loaded.title == "Renamed"
    assert loaded.due is None
    assert not list((tmp_path / "tasks").glob("*.tmp"))


def test_load_orders_by_created(tmp_path: Path):
    storage = FileTaskStorage(tmp_path / "tasks")
    late = _sample_task("aaa", created=datetime(2025, 3, 11))
    early = _sample_task("zzz", created=datetime(2025, 3, 1))
    storage.save_task(late)
    storage.save_task(early)

    assert [t.id for t in storage.load_tasks()] == ["zzz", "aaa"]


def test_corrupt_files_are_skipped(tmp_path: Path, caplog):
    storage = FileTaskStorage(tmp_path / "tasks")
    storage.save_task(_sample_task())
    (tmp_path / "tasks" / "broken.task").write_text("---\ncreated: [oops\n---\n", encoding="utf-8")
    (tmp_path / "tasks" / "bad-date.task").write_text("---\nid: x\ncreated: 'not a date'\n---\n", encoding="utf-8")
    (tmp_path / "tasks" / "plain.task").write_text("no header here", encoding="utf-8")

    with caplog.at_level("WARNING", logger="wimm.storage"):
        loaded = storage.load_tasks()

    assert [t.id for t in loaded] == ["task-001"]
    assert "Skipping" in caplog.text


def test_hand_written_yaml_timestamps_are_accepted(tmp_path: Path):
    content = "---\nid: manual\ntitle: From editor\ncreated: 2025-03-01 08:00:00\ndue: 2025-03-02\n---\nbody"
    task = TaskFileParser.parse_text(content)
    assert task is not None
    assert task.created == datetime(2025, 3, 1, 8, 0)
    assert task.due == datetime(2025, 3, 2, 0, 0)
    assert task.description == "body"


def _local(year, month, day, hour, minute, offset_hours):
    """Naive local time for a wall-clock reading at a fixed UTC offset."""
    utc = datetime(year, month, day, hour - offset_hours, minute, tzinfo=timezone.utc)
    return utc.astimezone().replace(tzinfo=None)


def test_offset_timestamps_become_naive_local_time():
    content = (
        "---\nid: zoned\ncreated: 2025-03-01T08:00:00+02:00\n"
        "due: '2025-03-20T10:00:00+02:00'\ndefer_until: 2025-03-19 09:30:00Z\n---\n"
    )
    task = TaskFileParser.parse_text(content)
    assert task.created == _local(2025, 3, 1, 8, 0, 2)
    assert task.due == _local(2025, 3, 20, 10, 0, 2)
    assert task.defer_until == _local(2025, 3, 19, 9, 30, 0)
    assert all(value.tzinfo is None for value in (task.created, task.due, task.defer_until))


def test_offset_timestamps_load_and_render_next_to_naive_ones(tmp_path: Path):
    storage = FileTaskStorage(tmp_path / "tasks")
    storage.save_task(_sample_task("plain"))
    (tmp_path / "tasks" / "zoned.task").write_text(
        "---\nid: zoned\ncreated: '2025-03-11T08:00:00+02:00'\ndue: '2025-03-20T10:00:00+02:00'\n---\n",
        encoding="utf-8",
    )

    controller = ModeController(storage, clock=lambda: datetime(2025, 3, 15, 10, 0))
    view = controller.view()

    assert [t.id for t in controller.tasks] == ["plain", "zoned"]
    assert [row.urgency.label for row in view.rows] == ["overdue", "normal"]
    assert controller.state.error is None


@pytest.mark.parametrize("task_id", ["../evil", "a/b", "x\\y"])
def test_files_with_unsafe_ids_are_skipped(tmp_path: Path, caplog, task_id: str):
    storage = FileTaskStorage(tmp_path / "tasks")
    storage.save_task(_sample_task("good"))
    (tmp_path / "tasks" / "evil.task").write_text(f"---\nid: '{task_id}'\n---\n", encoding="utf-8")

    with caplog.at_level("WARNING", logger="wimm.storage"):
        loaded = storage.load_tasks()

    assert [t.id for t in loaded] == ["good"]
    assert "Invalid task_id" in caplog.text


def test_unsafe_id_is_a_storage_error(tmp_path: Path):
    storage = FileTaskStorage(tmp_path / "tasks")
    with pytest.raises(InvalidTaskIdError) as exc:
        storage.delete_task("../evil")
    assert isinstance(exc.value, StorageError)
    assert exc.value.task_id == "../evil"


def test_unsafe_id_in_editor_is_reported_not_raised(tmp_path: Path):
    storage = FileTaskStorage(tmp_path / "tasks")
    controller = ModeController(storage, tasks=[Task(id="../evil", created=datetime(2025, 3, 1))])

    controller.handle_key("!")
    assert controller.state.error.startswith("Error saving task: Invalid task_id")
    controller.handle_key("D")
    assert controller.tasks == []
    assert controller.state.error.startswith("Error deleting task: Invalid task_id")


def test_duplicate_ids_load_once(tmp_path: Path, caplog):
    tasks_dir = tmp_path / "tasks"
    storage = FileTaskStorage(tasks_dir)
    (tasks_dir / "a.task").write_text("---\nid: same\ntitle: copy\n---\n", encoding="utf-8")
    (tasks_dir / "same.task").write_text("---\nid: same\ntitle: original\n---\n", encoding="utf-8")
    (tasks_dir / "b.task").write_text("---\nid: same\ntitle: other copy\n---\n", encoding="utf-8")

    with caplog.at_level("WARNING", logger="wimm.storage"):
        loaded = storage.load_tasks()

    assert [(t.id, t.title) for t in loaded] == [("same", "original")]
    assert caplog.text.count("duplicate id") == 2


def test_duplicate_ids_without_matching_file_keep_first_by_name(tmp_path: Path):
    tasks_dir = tmp_path / "tasks"
    storage = FileTaskStorage(tasks_dir)
    (tasks_dir / "b.task").write_text("---\nid: same\ntitle: from b\n---\n", encoding="utf-8")
    (tasks_dir / "a.task").write_text("---\nid: same\ntitle: from a\n---\n", encoding="utf-8")

    controller = ModeController(storage)
    assert [(t.id, t.title) for t in controller.tasks] == [("same", "from a")]


def test_delete_task(tmp_path: Path):
    storage = FileTaskStorage(tmp_path / "tasks")
    storage.save_task(_sample_task())
    storage.delete_task("task-001")
    assert storage.load_tasks() == []


def test_delete_missing_task_raises_not_found(tmp_path: Path):
    storage = FileTaskStorage(tmp_path / "tasks")
    with pytest.raises(TaskNotFoundError) as exc:
        storage.delete_task("ghost")
    assert exc.value.task_id == "ghost"
    assert isinstance(exc.value, StorageError)


@pytest.mark.parametrize("task_id", ["../escape", "a/b", "..", "", "a\\b"])
def test_rejects_path_traversal(tmp_path: Path, task_id: str):
    storage = FileTaskStorage(tmp_path / "tasks")
    with pytest.raises(ValueError):
        storage.save_task(Task(id=task_id))


def test_clear_removes_everything(tmp_path: Path):
    storage = FileTaskStorage(tmp_path / "tasks")
    storage.save_task(_sample_task("one"))
    storage.save_task(_sample_task("two"))

    storage.clear()

    assert storage.load_tasks() == []
    assert (tmp_path / "tasks").is_dir()
    assert [p.name for p in tmp_path.iterdir()] == ["tasks"]


def test_unusable_directory_raises_storage_error(tmp_path: Path):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(StorageError):
        FileTaskStorage(blocker / "tasks")


def test_open_storage_file_backend(tmp_path: Path):
    storage = open_storage(tmp_path, "file")
    assert isinstance(storage, FileTaskStorage)
    assert storage.tasks_dir == tmp_path / "tasks"


def test_open_storage_memory_backend(tmp_path: Path):
    assert isinstance(open_storage(tmp_path, "memory"), MemoryStorage)
    assert not (tmp_path / "tasks").exists()


def test_open_storage_falls_back_to_memory(tmp_path: Path, caplog):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    with caplog.at_level("WARNING", logger="wimm.storage"):
        storage = open_storage(blocker, "file")
    assert isinstance(storage, MemoryStorage)
    assert "Falling back" in caplog.text
