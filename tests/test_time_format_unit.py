from datetime import datetime, timedelta

import pytest

from interface.tui_display import display_width, pad_display, trim_display
from util.time_format import format_created, format_for_editing, format_relative

NOW = datetime(2025, 3, 12, 10, 0)


@pytest.mark.parametrize(
    "offset, expected",
    [
        (timedelta(days=3, hours=2), "in 3d"),
        (timedelta(hours=-2), "2h ago"),
        (timedelta(minutes=45), "in 45m"),
        (timedelta(seconds=20), "now"),
    ],
)
def test_format_relative(offset, expected):
    assert format_relative(NOW + offset, NOW) == expected


def test_format_relative_absent():
    assert format_relative(None, NOW) == "-"


def test_format_created():
    assert format_created(NOW - timedelta(hours=5), NOW) == "5h ago"
    assert format_created(NOW, NOW) == "now"
    assert format_created(datetime(2025, 1, 2, 8, 0), NOW) == "2025-01-02"


def test_format_for_editing():
    assert format_for_editing(datetime(2025, 3, 14, 17, 0, 59)) == "2025-03-14 17:00"
    assert format_for_editing(None) == ""


def test_display_width_counts_wide_characters():
    assert display_width("abc") == 3
    assert display_width("日本") == 4


def test_trim_and_pad():
    assert trim_display("abcdef", 4) == "abc…"
    assert trim_display("abc", 4) == "abc"
    assert trim_display("abc", 0) == ""
    assert pad_display("ab", 4) == "ab  "
    assert display_width(pad_display("日本語テキスト", 5)) == 5
