"""Render snapshot and formatted-text builders for the editor screen."""

from dataclasses import dataclass
from datetime import datetime
from typing import FrozenSet, List, Optional, Sequence, Tuple

from prompt_toolkit.formatted_text import FormattedText

from core import Task, Urgency, classify_urgency
from interface.constants import APP_TITLE, HELP_SECTIONS
from interface.tui_display import pad_display
from interface.tui_editing import EditBuffer, EditField
from interface.tui_state import AppState, Mode
from util.time_format import format_created, format_relative

Fragments = List[Tuple[str, str]]

CURSOR_MARK = "> "
STATUS_WIDTH = 3
CREATED_WIDTH = 10
DUE_WIDTH = 10
DEFER_WIDTH = 12
MIN_TEXT_WIDTH = 8


@dataclass(frozen=True)
class RenderRow:
    index: int
    task: Task
    urgency: Urgency
    is_cursor: bool
    is_selected: bool
    is_editing: bool


@dataclass(frozen=True)
class RenderView:
    """Everything the screen needs for one pass; nothing here is mutable state."""

    rows: Tuple[RenderRow, ...]
    mode: Mode
    cursor: int
    selection: FrozenSet[int]
    editing: Optional[EditBuffer]
    show_help: bool
    error: Optional[str]
    now: datetime


def build_view(tasks: Sequence[Task], state: AppState, now: datetime) -> RenderView:
    editing_id = state.editing.task_id if state.editing else None
    rows = tuple(
        RenderRow(
            index=index,
            task=task,
            urgency=classify_urgency(task, now),
            is_cursor=bool(tasks) and index == state.cursor,
            is_selected=index in state.selection,
            is_editing=task.id == editing_id,
        )
        for index, task in enumerate(tasks)
    )
    return RenderView(
        rows=rows,
        mode=state.mode,
        cursor=state.cursor,
        selection=frozenset(state.selection),
        editing=state.editing,
        show_help=state.show_help,
        error=state.error,
        now=now,
    )


def _merge_style(*parts: str) -> str:
    return " ".join(p for p in parts if p).strip()


def row_style(row: RenderRow) -> str:
    """Urgency first, then completion, selection and cursor layered on top."""
    return _merge_style(
        "class:row",
        row.urgency.style,
        "class:completed" if row.task.completed else "",
        "class:selected" if row.is_selected else "",
        "class:cursor" if row.is_cursor else "",
    )


def column_widths(total_width: int) -> Tuple[int, int]:
    fixed = len(CURSOR_MARK) + STATUS_WIDTH + CREATED_WIDTH + DUE_WIDTH + DEFER_WIDTH + 5
    free = max(2 * MIN_TEXT_WIDTH, total_width - fixed)
    title = max(MIN_TEXT_WIDTH, free * 9 // 20)
    return title, max(MIN_TEXT_WIDTH, free - title)


def _header_fragments(width: int) -> Fragments:
    title_w, desc_w = column_widths(width)
    cells = [
        pad_display("", len(CURSOR_MARK)),
        pad_display("", STATUS_WIDTH),
        pad_display("Title", title_w),
        pad_display("Description", desc_w),
        pad_display("Created", CREATED_WIDTH),
        pad_display("Due", DUE_WIDTH),
        pad_display("Defer Until", DEFER_WIDTH),
    ]
    return [("class:header", " ".join(cells)), ("", "\n")]


def _edit_cell(buffer: EditBuffer, field: EditField, width: int, base: str) -> Tuple[str, str]:
    text = buffer.text(field)
    if buffer.focus is field:
        text += "▏"
        style = _merge_style(base, "class:field.focus")
    else:
        style = base
    if field in buffer.errors:
        style = _merge_style(style, "class:field.error")
    return style, pad_display(text, width)


def _row_fragments(row: RenderRow, view: RenderView, width: int) -> Fragments:
    title_w, desc_w = column_widths(width)
    task = row.task
    base = row_style(row)
    sep = (base, " ")
    fragments: Fragments = [
        (base, CURSOR_MARK if row.is_cursor else " " * len(CURSOR_MARK)),
        (base, pad_display("[x]" if task.completed else "[ ]", STATUS_WIDTH)),
        sep,
    ]
    if row.is_editing and view.editing is not None:
        buffer = view.editing
        fragments += [
            _edit_cell(buffer, EditField.TITLE, title_w, base),
            sep,
            _edit_cell(buffer, EditField.DESCRIPTION, desc_w, base),
            sep,
            (base, pad_display(format_created(task.created, view.now), CREATED_WIDTH)),
            sep,
            _edit_cell(buffer, EditField.DUE, DUE_WIDTH, base),
            sep,
            _edit_cell(buffer, EditField.DEFER_UNTIL, DEFER_WIDTH, base),
        ]
    else:
        fragments += [
            (base, pad_display(task.title, title_w)),
            sep,
            (base, pad_display(task.description.replace("\n", " "), desc_w)),
            sep,
            (base, pad_display(format_created(task.created, view.now), CREATED_WIDTH)),
            sep,
            (base, pad_display(format_relative(task.due, view.now), DUE_WIDTH)),
            sep,
            (base, pad_display(format_relative(task.defer_until, view.now), DEFER_WIDTH)),
        ]
    fragments.append(("", "\n"))
    return fragments


def render_task_list_text(view: RenderView, width: int = 100) -> FormattedText:
    if not view.rows:
        return FormattedText([
            ("class:header", " Tasks (0)\n\n"),
            ("class:text.dim", "  No tasks yet. Press 'o' to create one, 'h' for help.\n"),
        ])
    fragments: Fragments = [("class:header", f" Tasks ({len(view.rows)})\n")]
    fragments += _header_fragments(width)
    for row in view.rows:
        fragments += _row_fragments(row, view, width)
    return FormattedText(fragments)


def render_title_text() -> FormattedText:
    return FormattedText([("class:title", f" {APP_TITLE} - Press 'q' to quit, 'h' for help")])


def status_mode_text(view: RenderView) -> str:
    if view.mode is Mode.INSERT and view.editing is not None:
        return f"INSERT - Editing: {view.editing.focus.label}"
    return view.mode.value


def render_status_text(view: RenderView) -> FormattedText:
    fragments: Fragments = [
        ("class:status.mode", f" Mode: {status_mode_text(view)} "),
        ("class:border", " │ "),
        ("class:text.dim", f"{len(view.rows)} tasks"),
    ]
    if view.selection:
        fragments += [("class:border", " │ "), ("class:text.dim", f"{len(view.selection)} selected")]
    if view.error:
        fragments += [("class:border", " │ "), ("class:error", view.error)]
    return FormattedText(fragments)


def render_help_text() -> FormattedText:
    fragments: Fragments = [("class:header", " Help\n")]
    for section, entries in HELP_SECTIONS:
        fragments.append(("", "\n"))
        fragments.append(("class:help.section", f" {section}\n"))
        for keys, text in entries:
            fragments.append(("class:help.key", f"   {pad_display(keys, 8)}"))
            fragments.append(("class:help", f" {text}\n"))
    return FormattedText(fragments)


__all__ = [
    "RenderRow",
    "RenderView",
    "build_view",
    "column_widths",
    "render_help_text",
    "render_status_text",
    "render_task_list_text",
    "render_title_text",
    "row_style",
    "status_mode_text",
]
