"""Mode state machine: turns decoded key events into task list mutations."""

import logging
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional

from core import DateResolver, Task
from application.ports import StorageError, TaskNotFoundError, TaskStorage
from interface.constants import KEY_BACKSPACE, KEY_BACKTAB, KEY_ENTER, KEY_ESCAPE, KEY_TAB
from interface.tui_editing import EditBuffer
from interface.tui_render import RenderView, build_view
from interface.tui_selection import (
    clamp_cursor,
    first_row,
    last_row,
    move_cursor,
    shift_for_insert,
    shift_for_remove,
    target_rows,
    toggle_membership,
)
from interface.tui_state import AppState, Mode

logger = logging.getLogger("wimm.tui")


class ModeController:
    """Sole owner of :class:`AppState` and the in-memory task list.

    Storage is written through after every change; a failing write is reported
    in ``state.error`` and never rolls back the in-memory list.
    """

    def __init__(
        self,
        storage: TaskStorage,
        resolver: Optional[DateResolver] = None,
        *,
        tasks: Optional[Iterable[Task]] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.storage = storage
        self.resolver = resolver or DateResolver()
        self.clock = clock
        self.state = AppState()
        self.tasks: List[Task] = list(tasks) if tasks is not None else self._load_tasks()
        self._normal_keys: Dict[str, Callable[[], None]] = {
            "q": self.quit,
            "h": self.toggle_help,
            "o": self.open_task_below,
            "O": self.open_task_above,
            "i": self.edit_current_task,
            "j": lambda: self.move_cursor(1),
            "k": lambda: self.move_cursor(-1),
            "g": self.cursor_first,
            "G": self.cursor_last,
            "x": self.toggle_selection,
            "!": self.toggle_completion,
            "D": self.delete_tasks,
        }
        self._insert_keys: Dict[str, Callable[[], None]] = {
            KEY_ENTER: self.commit_edit,
            KEY_ESCAPE: self.cancel_edit,
            KEY_TAB: self.next_field,
            KEY_BACKTAB: self.previous_field,
            KEY_BACKSPACE: self.backspace,
        }

    def _load_tasks(self) -> List[Task]:
        try:
            return list(self.storage.load_tasks() or [])
        except StorageError as exc:
            logger.warning("Could not load tasks, starting empty: %s", exc)
            self.state.set_error(f"Error loading tasks: {exc}")
            return []

    # -------------------- dispatch --------------------
    def handle_key(self, key: str) -> None:
        """Process one decoded key event to completion."""
        if self.state.mode is Mode.INSERT:
            handler = self._insert_keys.get(key)
            if handler:
                handler()
            elif len(key) == 1 and key.isprintable():
                self.type_text(key)
            return
        handler = self._normal_keys.get(key)
        if handler:
            handler()

    def view(self, now: Optional[datetime] = None) -> RenderView:
        return build_view(self.tasks, self.state, now or self.clock())

    # -------------------- normal mode --------------------
    def quit(self) -> None:
        self.state.should_quit = True

    def toggle_help(self) -> None:
        self.state.show_help = not self.state.show_help

    def move_cursor(self, delta: int) -> None:
        self.state.cursor = move_cursor(self.state.cursor, delta, len(self.tasks))

    def cursor_first(self) -> None:
        self.state.cursor = first_row(len(self.tasks))

    def cursor_last(self) -> None:
        self.state.cursor = last_row(len(self.tasks))

    def toggle_selection(self) -> None:
        self.state.selection = toggle_membership(self.state.selection, self.state.cursor, len(self.tasks))

    def toggle_completion(self) -> None:
        changed: List[Task] = []
        for row in target_rows(self.state.cursor, self.state.selection, len(self.tasks)):
            if 0 <= row < len(self.tasks):
                self.tasks[row] = self.tasks[row].toggled()
                changed.append(self.tasks[row])
        self.state.selection = set()
        self.state.clear_error()
        for task in changed:
            self._save(task)

    def delete_tasks(self) -> None:
        rows = sorted(
            {row for row in target_rows(self.state.cursor, self.state.selection, len(self.tasks)) if 0 <= row < len(self.tasks)},
            reverse=True,
        )
        removed: List[Task] = []
        for row in rows:
            removed.append(self.tasks.pop(row))
            self.state.selection = shift_for_remove(self.state.selection, row)
        self.state.cursor = clamp_cursor(self.state.cursor, len(self.tasks))
        self.state.clear_error()
        for task in removed:
            self._delete(task.id)

    def open_task_below(self) -> None:
        index = 0 if not self.tasks else min(self.state.cursor + 1, len(self.tasks))
        self._open_new_task(index)

    def open_task_above(self) -> None:
        self._open_new_task(clamp_cursor(self.state.cursor, len(self.tasks)))

    def _open_new_task(self, index: int) -> None:
        previous_cursor = self.state.cursor
        task = Task.create(now=self.clock())
        self.tasks.insert(index, task)
        self.state.selection = shift_for_insert(self.state.selection, index)
        self.state.cursor = index
        self._enter_insert(EditBuffer(task, is_new=True, return_cursor=previous_cursor))

    def edit_current_task(self) -> None:
        if not self.tasks:
            return
        self.state.cursor = clamp_cursor(self.state.cursor, len(self.tasks))
        self._enter_insert(EditBuffer(self.tasks[self.state.cursor]))

    def _enter_insert(self, buffer: EditBuffer) -> None:
        self.state.editing = buffer
        self.state.mode = Mode.INSERT
        self.state.clear_error()

    # -------------------- insert mode --------------------
    def type_text(self, chars: str) -> None:
        if self.state.editing:
            self.state.editing.insert(chars)

    def backspace(self) -> None:
        if self.state.editing:
            self.state.editing.backspace()

    def next_field(self) -> None:
        if self.state.editing:
            self.state.editing.next_field()

    def previous_field(self) -> None:
        if self.state.editing:
            self.state.editing.previous_field()

    def commit_edit(self) -> None:
        buffer = self.state.editing
        if buffer is None:
            self._leave_insert()
            return
        values = buffer.resolve(self.resolver, self.clock())
        if values is None:
            message = buffer.error_summary()
            logger.info("Commit rejected for %s: %s", buffer.task_id, message)
            self.state.set_error(f"Cannot save task: {message}")
            return
        index = self._index_of(buffer.task_id)
        self._leave_insert()
        self.state.clear_error()
        if index is None:
            return
        current = self.tasks[index]
        updated = current.with_fields(
            title=values.title,
            description=values.description,
            due=values.due,
            defer_until=values.defer_until,
        )
        if updated == current and not buffer.is_new:
            return
        self.tasks[index] = updated
        self._save(updated)

    def cancel_edit(self) -> None:
        buffer = self.state.editing
        if buffer is not None and buffer.is_new:
            index = self._index_of(buffer.task_id)
            if index is not None:
                del self.tasks[index]
                self.state.selection = shift_for_remove(self.state.selection, index)
                self.state.cursor = clamp_cursor(buffer.return_cursor, len(self.tasks))
        self._leave_insert()

    def _leave_insert(self) -> None:
        self.state.editing = None
        self.state.mode = Mode.NORMAL

    # -------------------- storage --------------------
    def _index_of(self, task_id: str) -> Optional[int]:
        for index, task in enumerate(self.tasks):
            if task.id == task_id:
                return index
        return None

    def _save(self, task: Task) -> None:
        try:
            self.storage.save_task(task)
        except StorageError as exc:
            logger.warning("Saving task %s failed: %s", task.id, exc)
            self.state.set_error(f"Error saving task: {exc}")

    def _delete(self, task_id: str) -> None:
        try:
            self.storage.delete_task(task_id)
        except TaskNotFoundError:
            logger.debug("Task %s already absent from storage", task_id)
        except StorageError as exc:
            logger.warning("Deleting task %s failed: %s", task_id, exc)
            self.state.set_error(f"Error deleting task: {exc}")


__all__ = ["ModeController"]
