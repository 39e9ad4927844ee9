"""Color-string parsing and the ANSI palette used by the list renderer.

Config colors are user-facing strings (``#RRGGBB``, a 256-color index, or a
name such as ``Green``); they are resolved once into SGR parameter strings.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

RESET = "\033[0m"
BOLD = "\033[1m"

_HEX_RE = re.compile(r"^#([0-9a-fA-F]{6})$")

# Foreground SGR parameters; background is the same code + 10.
NAMED_COLORS: dict[str, int] = {
    "black": 30,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "magenta": 35,
    "cyan": 36,
    "gray": 37,
    "darkgray": 90,
    "lightred": 91,
    "lightgreen": 92,
    "lightyellow": 93,
    "lightblue": 94,
    "lightmagenta": 95,
    "lightcyan": 96,
    "white": 97,
}


class ColorError(ValueError):
    """Raised for a color string that names no known color."""


@dataclass(frozen=True)
class Color:
    """A parsed terminal color able to emit foreground/background SGR codes."""

    spec: str
    named: int | None = None
    index: int | None = None
    rgb: tuple[int, int, int] | None = None

    def fg(self) -> str:
        if self.rgb is not None:
            r, g, b = self.rgb
            return f"\033[38;2;{r};{g};{b}m"
        if self.index is not None:
            return f"\033[38;5;{self.index}m"
        if self.named is not None:
            return f"\033[{self.named}m"
        return "\033[39m"

    def bg(self) -> str:
        if self.rgb is not None:
            r, g, b = self.rgb
            return f"\033[48;2;{r};{g};{b}m"
        if self.index is not None:
            return f"\033[48;5;{self.index}m"
        if self.named is not None:
            return f"\033[{self.named + 10}m"
        return "\033[49m"


def parse_color(value: str) -> Color:
    """Parse a config color string.

    Names are matched case-insensitively with ``-``, ``_`` and spaces removed,
    so ``Light-Red`` and ``light_red`` both resolve. ``reset`` means the
    terminal default.
    """
    if not isinstance(value, str):
        raise ColorError(f"invalid color: {value!r}")
    stripped = value.strip()
    match = _HEX_RE.match(stripped)
    if match:
        raw = match.group(1)
        return Color(spec=value, rgb=(int(raw[0:2], 16), int(raw[2:4], 16), int(raw[4:6], 16)))
    if stripped.isdigit():
        index = int(stripped)
        if 0 <= index <= 255:
            return Color(spec=value, index=index)
        raise ColorError(f"color index out of range: {value!r}")
    key = re.sub(r"[-_\s]", "", stripped).lower()
    if key == "reset":
        return Color(spec=value)
    if key == "grey":
        key = "gray"
    elif key == "darkgrey":
        key = "darkgray"
    if key in NAMED_COLORS:
        return Color(spec=value, named=NAMED_COLORS[key])
    raise ColorError(f"invalid color: {value!r}")


HEADER_BG = Color(spec="#003366", rgb=(0, 0x33, 0x66))
HEADER_FG = parse_color("white")
BLACK = parse_color("black")
BADGE_BG = parse_color("red")
HOME_MARKER = parse_color("darkgray")


@dataclass(frozen=True)
class Palette:
    """Resolved colors for one session."""

    date: Color
    path: Color
    highlight: Color
    shortcut_name: Color

    @property
    def header(self) -> str:
        return BOLD + HEADER_FG.fg() + HEADER_BG.bg()

    @property
    def selected(self) -> str:
        return BOLD + BLACK.fg() + self.highlight.bg()

    @property
    def badge(self) -> str:
        return BLACK.fg() + BADGE_BG.bg()
