"""ANSI-aware text measurement for fixed-width table cells.

Escape sequences are carried through untouched and never counted toward the
visible width; East Asian wide characters count as two columns.
"""

from __future__ import annotations

import re
import unicodedata

from .theme import RESET

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


def char_display_width(ch: str) -> int:
    """Return the number of terminal columns ``ch`` occupies."""
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    if ch < " " or ch == "\x7f":
        return 0
    return 1


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    """Visible column count of ``text`` with escape sequences removed."""
    return sum(char_display_width(ch) for ch in strip_ansi(text))


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled string to at most ``max_cols`` display columns.

    A wide character that would straddle the limit is dropped rather than
    split.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        w = char_display_width(text[i])
        if col + w > max_cols:
            break
        out.append(text[i])
        col += w
        i += 1
    return "".join(out)


def fit_ansi_cell(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` columns and right-pad it with spaces.

    A styled cell cut short loses its trailing reset, so one is appended to
    keep the style out of the padding.
    """
    clipped = clip_ansi_line(text, width)
    if clipped != text and ANSI_ESCAPE_RE.search(clipped):
        clipped += RESET
    return clipped + " " * max(0, width - display_width(clipped))
