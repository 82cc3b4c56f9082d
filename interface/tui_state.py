"""Transient editor state owned by the ModeController."""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional, Set

if TYPE_CHECKING:
    from interface.tui_editing import EditBuffer


class Mode(Enum):
    NORMAL = "NORMAL"
    INSERT = "INSERT"


@dataclass
class AppState:
    mode: Mode = Mode.NORMAL
    cursor: int = 0
    selection: Set[int] = field(default_factory=set)
    editing: Optional["EditBuffer"] = None
    error: Optional[str] = None
    show_help: bool = False
    should_quit: bool = False

    def set_error(self, message: str) -> None:
        self.error = message

    def clear_error(self) -> None:
        self.error = None


__all__ = ["AppState", "Mode"]
