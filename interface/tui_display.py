"""Display width helpers with proper Unicode width handling."""

from wcwidth import wcwidth


def _char_width(ch: str) -> int:
    w = wcwidth(ch)
    if w is None or w < 0:
        return 0
    return w


def display_width(text: str) -> int:
    """Return visual width of text accounting for wide/narrow characters."""
    return sum(_char_width(ch) for ch in text)


def trim_display(text: str, width: int, ellipsis: str = "…") -> str:
    """Trim text so visible width doesn't exceed ``width``; mark the cut with ``ellipsis``."""
    if width <= 0:
        return ""
    if display_width(text) <= width:
        return text
    budget = width - display_width(ellipsis)
    acc = []
    used = 0
    for ch in text:
        w = _char_width(ch)
        if used + w > budget:
            break
        acc.append(ch)
        used += w
    return "".join(acc) + ellipsis if budget >= 0 else ""


def pad_display(text: str, width: int) -> str:
    """Trim and pad with spaces to exact visible width."""
    trimmed = trim_display(text, width)
    return trimmed + " " * max(0, width - display_width(trimmed))


__all__ = ["display_width", "pad_display", "trim_display"]
