"""Per-dataset data sources and presenters for the list views.

A view is composed from a :class:`DataSource` (how to page through rows) and
a :class:`Presenter` (how rows look and what a committed row yields). The
history presenter also substitutes shortcut names for path prefixes while the
shared :class:`~dirhist.state.ToggleFlag` is on.
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable, Sequence
from typing import Protocol, TypeVar

from ..store import PathEntry, Shortcut, Store, StoreError
from ..state import ToggleFlag
from ..theme import HOME_MARKER, RESET, Palette

logger = logging.getLogger(__name__)

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)

Row = tuple[str, ...]


class DataSource(Protocol[T_co]):
    def list(self, offset: int, limit: int, text: str) -> Sequence[T_co]: ...


class Presenter(Protocol[T]):
    column_names: tuple[str, ...]

    def format(self, entries: Sequence[T], toggle: ToggleFlag) -> list[Row]: ...

    def stringify(self, entry: T) -> str: ...


class HistorySource:
    def __init__(self, store: Store) -> None:
        self._store = store

    def list(self, offset: int, limit: int, text: str) -> list[PathEntry]:
        return self._store.list_paths(offset, limit, text)


class ShortcutSource:
    def __init__(self, store: Store) -> None:
        self._store = store

    def list(self, offset: int, limit: int, text: str) -> list[Shortcut]:
        return self._store.list_shortcuts(offset, limit, text)


def _paint(color: str, text: str) -> str:
    return f"{color}{text}{RESET}"


def match_shortcut(path: str, shortcuts: Sequence[Shortcut], sep: str = os.sep) -> Shortcut | None:
    """Return the shortcut whose target is the longest prefix of ``path``.

    A target matches when it equals ``path`` or ``path`` continues it after a
    separator. On equal target lengths the first shortcut in ``shortcuts``
    wins; an empty target never matches.
    """
    best: Shortcut | None = None
    for shortcut in shortcuts:
        target = shortcut.path
        if path != target and not path.startswith(target + sep):
            continue
        if len(target) > (len(best.path) if best is not None else 0):
            best = shortcut
    return best


def reduce_home(path: str, home: str | None, sep: str = os.sep) -> tuple[str, str] | None:
    """Split ``path`` into ``("~", rest)`` when it lies under ``home``."""
    if not home:
        return None
    if path == home or path.startswith(home + sep):
        return "~", path[len(home) :]
    return None


class HistoryPresenter:
    """Date + path rows for the visit history."""

    column_names = ("date", "path")

    def __init__(
        self,
        palette: Palette,
        date_format: str,
        list_shortcuts: Callable[[], Sequence[Shortcut]],
        home: str | None = None,
    ) -> None:
        self.palette = palette
        self.date_format = date_format
        self._list_shortcuts = list_shortcuts
        self._home = home if home is not None else os.environ.get("HOME")

    def _shortcuts(self) -> Sequence[Shortcut]:
        try:
            return self._list_shortcuts()
        except StoreError as exc:
            logger.error("listing shortcuts for path shortening failed: %s", exc)
            return ()

    def format_date(self, epoch: int) -> str:
        return time.strftime(self.date_format, time.localtime(epoch))

    def format_path(self, path: str, shortcuts: Sequence[Shortcut] | None) -> str:
        """Render ``path`` with a ``[name]`` prefix, a ``~`` prefix, or as is."""
        path_color = self.palette.path.fg()
        if shortcuts:
            shortcut = match_shortcut(path, shortcuts)
            if shortcut is not None:
                name_color = self.palette.shortcut_name.fg()
                rest = path[len(shortcut.path) :]
                return _paint(name_color, f"[{shortcut.name}]") + _paint(path_color, rest)
        reduced = reduce_home(path, self._home)
        if reduced is not None:
            marker, rest = reduced
            return _paint(HOME_MARKER.fg(), marker) + _paint(path_color, rest)
        return _paint(path_color, path)

    def format(self, entries: Sequence[PathEntry], toggle: ToggleFlag) -> list[Row]:
        shortcuts = self._shortcuts() if toggle.value else None
        date_color = self.palette.date.fg()
        return [
            (_paint(date_color, self.format_date(entry.date)), self.format_path(entry.path, shortcuts))
            for entry in entries
        ]

    def stringify(self, entry: PathEntry) -> str:
        return entry.path


class ShortcutPresenter:
    """Name + target rows for the shortcut table."""

    column_names = ("shortcut", "path")

    def __init__(self, palette: Palette) -> None:
        self.palette = palette

    def format(self, entries: Sequence[Shortcut], toggle: ToggleFlag) -> list[Row]:
        name_color = self.palette.shortcut_name.fg()
        path_color = self.palette.path.fg()
        return [(_paint(name_color, entry.name), _paint(path_color, entry.path)) for entry in entries]

    def stringify(self, entry: Shortcut) -> str:
        return entry.path
