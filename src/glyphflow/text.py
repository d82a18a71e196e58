"""Text measurement and word wrapping for monospace output."""

from __future__ import annotations

import unicodedata

from wcwidth import wcswidth, wcwidth


def char_width(ch: str) -> int:
    """Display columns occupied by a single character (wide glyphs take 2)."""
    w = wcwidth(ch)
    return w if w > 0 else (0 if w == 0 else 1)


def printable(text: str) -> str:
    """``text`` with control characters such as tabs and newlines turned into spaces."""
    return "".join(" " if unicodedata.category(ch) == "Cc" else ch for ch in text)


def display_width(text: str) -> int:
    """Display columns occupied by ``text``, wide/CJK aware."""
    w = wcswidth(text)
    if w >= 0:
        return w
    return sum(char_width(ch) for ch in text)


def wrap_label(label: str, max_width: int) -> list[str]:
    """Wrap ``label`` on whitespace so each line fits ``max_width`` columns.

    Words are never split, so a single word wider than ``max_width`` sits on
    its own line. A zero ``max_width`` or a label that already fits returns
    the label as a single line. Control characters become spaces.

    >>> wrap_label("This is a long label", 10)
    ['This is a', 'long label']
    """
    label = printable(label)
    if max_width == 0 or display_width(label) <= max_width:
        return [label]

    lines: list[str] = []
    current = ""
    current_width = 0
    for word in label.split():
        word_width = display_width(word)
        if current_width == 0:
            current = word
            current_width = word_width
        elif current_width + 1 + word_width <= max_width:
            current += " " + word
            current_width += 1 + word_width
        else:
            lines.append(current)
            current = word
            current_width = word_width

    if current:
        lines.append(current)

    return lines or [label]
