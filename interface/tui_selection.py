"""Cursor and multi-selection helpers for the task list.

Everything here works on plain values (cursor index, selected indices, row
count) and returns new values; the controller decides what to store.
"""

from typing import AbstractSet, Iterator, Set


class SelectionTargets(Iterator[int]):
    """One-shot sequence of row indices a bulk operation applies to."""

    def __iter__(self) -> "SelectionTargets":
        return self

    def __next__(self) -> int:  # pragma: no cover - overridden
        raise StopIteration


class MultipleTargets(SelectionTargets):
    def __init__(self, selection: AbstractSet[int]):
        # Snapshot: callers may edit the selection while iterating.
        self._rows = iter(sorted(selection))

    def __next__(self) -> int:
        return next(self._rows)


class SingleTarget(SelectionTargets):
    def __init__(self, index: int):
        self._index = index
        self._done = False

    def __next__(self) -> int:
        if self._done:
            raise StopIteration
        self._done = True
        return self._index


class EmptyTargets(SelectionTargets):
    def __next__(self) -> int:
        raise StopIteration


def target_rows(cursor: int, selection: AbstractSet[int], total: int) -> SelectionTargets:
    """Selection wins when non-empty; otherwise just the cursor row."""
    if selection:
        return MultipleTargets(selection)
    if total > 0:
        return SingleTarget(clamp_cursor(cursor, total))
    return EmptyTargets()


def clamp_cursor(cursor: int, total: int) -> int:
    if total <= 0:
        return 0
    return max(0, min(cursor, total - 1))


def move_cursor(cursor: int, delta: int, total: int) -> int:
    """Move by ``delta`` rows, clamping to the available items."""
    return clamp_cursor(cursor + delta, total)


def first_row(total: int) -> int:
    return 0


def last_row(total: int) -> int:
    return max(0, total - 1)


def toggle_membership(selection: AbstractSet[int], cursor: int, total: int) -> Set[int]:
    updated = set(selection)
    if total <= 0:
        return updated
    if cursor in updated:
        updated.remove(cursor)
    else:
        updated.add(cursor)
    return updated


def shift_for_insert(selection: AbstractSet[int], index: int) -> Set[int]:
    """Keep selected rows pointing at the same tasks after a row is inserted at ``index``."""
    return {row + 1 if row >= index else row for row in selection}


def shift_for_remove(selection: AbstractSet[int], index: int) -> Set[int]:
    """Inverse of :func:`shift_for_insert`; the removed row drops out."""
    return {row - 1 if row > index else row for row in selection if row != index}


__all__ = [
    "EmptyTargets",
    "MultipleTargets",
    "SelectionTargets",
    "SingleTarget",
    "clamp_cursor",
    "first_row",
    "last_row",
    "move_cursor",
    "shift_for_insert",
    "shift_for_remove",
    "target_rows",
    "toggle_membership",
]
