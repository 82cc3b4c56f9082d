#!/usr/bin/env python3
"""Unit tests for colour schemes."""

import pytest
from prompt_toolkit.styles import Style

from config import THEME_NAMES
from interface.tui_themes import DEFAULT_THEME, THEMES, build_style, get_theme_palette


def test_theme_names_match_config():
    assert tuple(THEMES) == THEME_NAMES
    assert DEFAULT_THEME in THEMES


@pytest.mark.parametrize("name", list(THEMES))
def test_every_theme_defines_the_same_classes(name):
    assert set(THEMES[name]) == set(THEMES[DEFAULT_THEME])


@pytest.mark.parametrize(
    "key",
    ["urgency.deferred", "urgency.overdue", "urgency.now", "urgency.soon", "completed", "selected", "cursor"],
)
def test_highlight_classes_present(key):
    assert key in THEMES[DEFAULT_THEME]


def test_unknown_theme_falls_back():
    assert get_theme_palette("neon") == get_theme_palette(DEFAULT_THEME)


def test_palette_is_a_copy():
    palette = get_theme_palette("dark")
    palette["title"] = "#000000"
    assert THEMES["dark"]["title"] != "#000000"


@pytest.mark.parametrize("name", list(THEMES))
def test_build_style(name):
    assert isinstance(build_style(name), Style)
