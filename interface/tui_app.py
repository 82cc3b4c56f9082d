#!/usr/bin/env python3
"""TUI application - WimmTUI class and cmd_tui command."""

import logging
import os
from pathlib import Path
from typing import Optional

from prompt_toolkit.application import Application
from prompt_toolkit.filters import Condition
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import HSplit, Layout, Window
from prompt_toolkit.layout.containers import ConditionalContainer
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.layout.dimension import Dimension
from prompt_toolkit.styles import Style

from config import load_settings
from core import DateResolver
from infrastructure.file_repository import open_storage
from interface.constants import KEY_BACKSPACE, KEY_BACKTAB, KEY_ENTER, KEY_ESCAPE, KEY_TAB
from interface.tui_controller import ModeController
from interface.tui_render import (
    render_help_text,
    render_status_text,
    render_task_list_text,
    render_title_text,
)
from interface.tui_state import Mode
from interface.tui_themes import DEFAULT_THEME, build_style

logger = logging.getLogger("wimm.tui")


class WimmTUI:
    """prompt_toolkit shell around a :class:`ModeController`.

    Key bindings only decode keys and forward them; all decisions live in the
    controller, and every repaint asks it for a fresh render view.
    """

    @classmethod
    def build_style(cls, theme: str) -> Style:
        return build_style(theme)

    def __init__(self, controller: ModeController, theme: str = DEFAULT_THEME, *, input=None, output=None):
        self.controller = controller
        self.theme_name = theme
        self.style = self.build_style(theme)

        kb = KeyBindings()
        insert_mode = Condition(lambda: self.controller.state.mode is Mode.INSERT)
        normal_mode = ~insert_mode

        @kb.add("c-c")
        def _(event):
            event.app.exit()

        @kb.add("enter")
        def _(event):
            self.dispatch(KEY_ENTER)

        @kb.add("escape", eager=True)
        def _(event):
            self.dispatch(KEY_ESCAPE)

        @kb.add("tab")
        def _(event):
            self.dispatch(KEY_TAB)

        @kb.add("s-tab")
        def _(event):
            self.dispatch(KEY_BACKTAB)

        @kb.add("backspace")
        def _(event):
            self.dispatch(KEY_BACKSPACE)

        @kb.add("down", filter=normal_mode)
        def _(event):
            self.dispatch("j")

        @kb.add("up", filter=normal_mode)
        def _(event):
            self.dispatch("k")

        @kb.add(Keys.Any)
        def _(event):
            self.dispatch(event.data)

        self.title_bar = Window(content=FormattedTextControl(self.get_title_text), height=1, always_hide_cursor=True)
        self.status_bar = Window(content=FormattedTextControl(self.get_status_text), height=1, always_hide_cursor=True)
        self.task_list = Window(
            content=FormattedTextControl(self.get_task_list_text),
            always_hide_cursor=True,
            wrap_lines=False,
        )
        self.help_panel = ConditionalContainer(
            Window(
                content=FormattedTextControl(self.get_help_text),
                always_hide_cursor=True,
                height=Dimension(min=6, max=24),
            ),
            filter=Condition(lambda: self.controller.state.show_help),
        )
        root = HSplit([self.title_bar, self.task_list, self.help_panel, self.status_bar])

        self.app = Application(
            layout=Layout(root),
            key_bindings=kb,
            style=self.style,
            full_screen=True,
            refresh_interval=1.0,
            input=input,
            output=output,
        )
        # Esc must not wait for a possible escape sequence.
        try:
            self.app.ttimeoutlen = max(0.0, float(os.getenv("WIMM_TUI_TTIMEOUTLEN", "0.05")))
        except ValueError:
            self.app.ttimeoutlen = 0.05

    @staticmethod
    def get_terminal_width() -> int:
        """Get current terminal width, default to 100 if unavailable."""
        try:
            return os.get_terminal_size().columns
        except (AttributeError, ValueError, OSError):
            return 100

    def dispatch(self, key: str) -> None:
        self.controller.handle_key(key)
        if self.controller.state.should_quit:
            self.app.exit()
            return
        self.app.invalidate()

    # -------------------- text callbacks --------------------
    def get_title_text(self) -> FormattedText:
        return render_title_text()

    def get_status_text(self) -> FormattedText:
        return render_status_text(self.controller.view())

    def get_task_list_text(self) -> FormattedText:
        return render_task_list_text(self.controller.view(), self.get_terminal_width())

    def get_help_text(self) -> FormattedText:
        return render_help_text()

    def run(self) -> None:
        self.app.run()


def build_controller(settings) -> ModeController:
    storage = open_storage(settings.data_path, settings.storage)
    resolver = DateResolver(due_hour=settings.due_hour, defer_hour=settings.defer_hour)
    return ModeController(storage, resolver)


def cmd_tui(args) -> int:
    settings = load_settings(getattr(args, "config", None))
    if getattr(args, "memory", False):
        settings.storage = "memory"
    data_dir: Optional[Path] = getattr(args, "data_dir", None)
    if data_dir:
        settings.data_dir = str(data_dir)
    theme = getattr(args, "theme", None) or settings.theme
    controller = build_controller(settings)
    logger.info("Starting editor with %d tasks (storage=%s)", len(controller.tasks), settings.storage)
    tui = WimmTUI(controller, theme=theme)
    tui.run()
    return 0


__all__ = ["WimmTUI", "build_controller", "cmd_tui"]
