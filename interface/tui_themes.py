#!/usr/bin/env python3
"""TUI colour schemes and styling."""

from typing import Dict

from prompt_toolkit.styles import Style


THEMES: Dict[str, Dict[str, str]] = {
    "default": {
        "": "#ffffff",
        "text": "#ffffff",
        "text.dim": "#cccccc",
        "title": "#00ff00 bold",
        "header": "#ffffff bold",
        "border": "#444444",
        "row": "",
        "urgency.deferred": "#888888",
        "urgency.overdue": "#ff0000 bold",
        "urgency.now": "#ff0000 bold",
        "urgency.soon": "#ffff00 bold",
        "completed": "#888888 strike",
        "selected": "bg:#444444",
        "cursor": "reverse",
        "field.focus": "bg:#ffff00 #000000 noreverse",
        "field.error": "bg:#ff0000 #ffffff noreverse",
        "status.mode": "#00ff00 bold",
        "error": "#ff0000 bold",
        "help": "#cccccc",
        "help.key": "#ffff00 bold",
        "help.section": "#00ff00 bold",
    },
    "dark": {
        "": "#e0e0e0",  # no forced background
        "text": "#e0e0e0",
        "text.dim": "#b0b0b0",
        "title": "#4a90e2 bold",
        "header": "#e0e0e0 bold",
        "border": "#333333",
        "row": "",
        "urgency.deferred": "#666666",
        "urgency.overdue": "#d32f2f bold",
        "urgency.now": "#d32f2f bold",
        "urgency.soon": "#ffa726 bold",
        "completed": "#666666 strike",
        "selected": "bg:#333333",
        "cursor": "bg:#4a90e2 #1a1a1a",
        "field.focus": "bg:#ffa726 #1a1a1a",
        "field.error": "bg:#d32f2f #e0e0e0",
        "status.mode": "#4a90e2 bold",
        "error": "#d32f2f bold",
        "help": "#b0b0b0",
        "help.key": "#ffa726 bold",
        "help.section": "#4a90e2 bold",
    },
    "light": {
        "": "#333333",
        "text": "#333333",
        "text.dim": "#666666",
        "title": "#1976d2 bold",
        "header": "#333333 bold",
        "border": "#cccccc",
        "row": "",
        "urgency.deferred": "#999999",
        "urgency.overdue": "#c62828 bold",
        "urgency.now": "#c62828 bold",
        "urgency.soon": "#ef6c00 bold",
        "completed": "#999999 strike",
        "selected": "bg:#e0e0e0",
        "cursor": "bg:#1976d2 #ffffff",
        "field.focus": "bg:#ef6c00 #ffffff",
        "field.error": "bg:#c62828 #ffffff",
        "status.mode": "#1976d2 bold",
        "error": "#c62828 bold",
        "help": "#666666",
        "help.key": "#ef6c00 bold",
        "help.section": "#1976d2 bold",
    },
}

DEFAULT_THEME = "default"


def get_theme_palette(theme: str) -> Dict[str, str]:
    """Get theme palette, falling back to default if theme not found."""
    base = THEMES.get(theme)
    if not base:
        base = THEMES[DEFAULT_THEME]
    return dict(base)


def build_style(theme: str) -> Style:
    """Build Style object from theme name."""
    palette = get_theme_palette(theme)
    return Style.from_dict(palette)
