"""Key names and static texts shared by the editor layers."""

from typing import List, Tuple

# Decoded key names delivered to the ModeController (prompt_toolkit spelling).
KEY_ENTER = "enter"
KEY_ESCAPE = "escape"
KEY_TAB = "tab"
KEY_BACKTAB = "s-tab"
KEY_BACKSPACE = "backspace"

APP_TITLE = "wimm - where is my mind"

HELP_SECTIONS: List[Tuple[str, List[Tuple[str, str]]]] = [
    (
        "Normal Mode",
        [
            ("j/k", "Move down/up"),
            ("g/G", "Go to first/last"),
            ("!", "Toggle completion"),
            ("x", "Toggle selection"),
            ("D", "Delete task(s)"),
            ("o", "Open new task below"),
            ("O", "Open new task above"),
            ("i", "Edit task"),
            ("h", "Toggle help"),
            ("q", "Quit"),
        ],
    ),
    (
        "Insert Mode",
        [
            ("Tab", "Next field"),
            ("S-Tab", "Previous field"),
            ("Enter", "Save task"),
            ("Esc", "Cancel"),
        ],
    ),
    (
        "Dates",
        [
            ("today", "tomorrow, yesterday"),
            ("fri", "friday, next friday"),
            ("3d", "30m, 4h, 3d, 2w from now"),
            ("12-24", "2025-12-24, 2025-12-24 09:30"),
            ("-", "empty clears the date"),
        ],
    ),
]
