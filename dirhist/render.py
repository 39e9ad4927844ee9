"""Screen composition for list views.

Turns a :class:`~dirhist.listview.ListFrame` into one ANSI string that
clears the screen and repaints the header, table rows, and search line.
"""

from __future__ import annotations

from .ansi import fit_ansi_cell
from .listview import ListFrame
from .theme import RESET, Palette

FIRST_COLUMN_WIDTH = 20
COLUMN_SPACING = 1
HIGHLIGHT_SYMBOL = "> "
SEARCH_PROMPT = "> "
EMPTY_BADGE = "no entry"
SEARCH_WIDTH_PERCENT = 90


def _row_text(cells: tuple[str, ...], width: int) -> str:
    """Lay cells out as a fixed first column and a filling second column."""
    first = cells[0] if cells else ""
    rest = " ".join(cells[1:])
    second_width = max(0, width - FIRST_COLUMN_WIDTH - COLUMN_SPACING)
    return fit_ansi_cell(first, FIRST_COLUMN_WIDTH) + " " * COLUMN_SPACING + fit_ansi_cell(rest, second_width)


def _styled_line(style: str, text: str) -> str:
    """Apply ``style`` to a whole line, re-applying it after inner resets."""
    return style + text.replace(RESET, RESET + style) + RESET


def build_table_lines(frame: ListFrame, width: int, palette: Palette) -> list[str]:
    symbol_width = len(HIGHLIGHT_SYMBOL)
    body_width = max(0, width - symbol_width)
    lines = [_styled_line(palette.header, " " * symbol_width + _row_text(frame.column_names, body_width))]
    for idx in range(frame.visible_rows):
        if idx >= len(frame.rows):
            lines.append("")
            continue
        text = _row_text(frame.rows[idx], body_width)
        if idx == frame.selected:
            lines.append(_styled_line(palette.selected, HIGHLIGHT_SYMBOL + text))
        else:
            lines.append(" " * symbol_width + text)
    return lines


def build_search_line(frame: ListFrame, width: int, palette: Palette) -> str:
    left_width = width * SEARCH_WIDTH_PERCENT // 100
    right_width = width - left_width
    left = palette.path.fg() + fit_ansi_cell(SEARCH_PROMPT + frame.search, left_width) + RESET
    if not frame.empty:
        return left + " " * right_width
    badge = EMPTY_BADGE[:right_width].center(right_width)
    return left + palette.badge + badge + RESET


def build_list_screen(frame: ListFrame, width: int, height: int, palette: Palette) -> str:
    """Compose the full screen for ``frame`` at ``width`` x ``height`` cells."""
    out = ["\033[H\033[J"]
    if width <= 0 or height <= 0:
        return "".join(out)
    lines = build_table_lines(frame, width, palette)[: max(0, height - 1)]
    lines.append(build_search_line(frame, width, palette))
    out.append("\r\n".join(lines))
    return "".join(out)
