"""Keyboard-driven list view over one paged dataset.

The controller is a small state machine over ``(cache, selection, search)``.
Each key token either mutates that state or ends the view's loop with a
:class:`ListResult`. Rendering is delegated: the controller only produces a
:class:`ListFrame` and keeps the cached window the same height as the
viewport before doing so.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, auto
from typing import Generic, Protocol, TypeVar

from ..input import KeyComboBinding, KeyComboRegistry
from ..input import reader as keys
from ..model import PagedDataCache
from ..state import ToggleFlag
from .presenters import DataSource, Presenter, Row

logger = logging.getLogger(__name__)

T = TypeVar("T")

JUMP_OFFSET = 10
TABLE_HEADER_ROWS = 1
FOOTER_ROWS = 1


class Outcome(Enum):
    QUIT = auto()
    PRINT = auto()
    NEXT = auto()


@dataclass(frozen=True)
class ListResult:
    """Terminal outcome of one controller loop."""

    outcome: Outcome
    value: str | None = None

    @classmethod
    def printed(cls, value: str) -> ListResult:
        return cls(Outcome.PRINT, value)


QUIT = ListResult(Outcome.QUIT)
NEXT = ListResult(Outcome.NEXT)


@dataclass(frozen=True)
class ListFrame:
    """Everything the renderer needs for one screen of a list view."""

    column_names: tuple[str, ...]
    rows: list[Row]
    selected: int | None
    search: str
    visible_rows: int
    empty: bool


class ListScreen(Protocol):
    """Input/output surface a controller loop runs against."""

    def read_key(self) -> str: ...

    def size(self) -> tuple[int, int]: ...

    def draw(self, frame: ListFrame, width: int, height: int) -> None: ...


def viewport_rows(height: int) -> int:
    """Number of table rows that fit under the header and above the search line."""
    return max(0, height - TABLE_HEADER_ROWS - FOOTER_ROWS)


def is_text_key(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


class InteractiveListController(Generic[T]):
    """Search, scroll, and select within one dataset."""

    def __init__(
        self,
        name: str,
        source: DataSource[T],
        presenter: Presenter[T],
        toggle: ToggleFlag,
    ) -> None:
        self.name = name
        self.cache: PagedDataCache[T] = PagedDataCache(source.list)
        self.presenter = presenter
        self.toggle = toggle
        self.visible_rows = 0
        self.selected = 0
        self.search = ""
        self._keys: KeyComboRegistry[ListResult | None] = KeyComboRegistry().register_bindings(
            KeyComboBinding((keys.ENTER,), self.commit),
            KeyComboBinding((keys.HOME,), self.home),
            KeyComboBinding((keys.DOWN,), lambda: self.move_down(1)),
            KeyComboBinding((keys.SHIFT_DOWN,), lambda: self.move_down(JUMP_OFFSET)),
            KeyComboBinding((keys.PAGE_DOWN,), lambda: self.move_down(self.visible_rows, page=True)),
            KeyComboBinding((keys.UP,), lambda: self.move_up(1)),
            KeyComboBinding((keys.SHIFT_UP,), lambda: self.move_up(JUMP_OFFSET)),
            KeyComboBinding((keys.PAGE_UP,), lambda: self.move_up(self.visible_rows, page=True)),
            KeyComboBinding((keys.TAB,), lambda: NEXT),
            KeyComboBinding((keys.ESC, keys.CTRL_Q), lambda: QUIT),
            KeyComboBinding((keys.BACKSPACE,), self.delete_char),
            KeyComboBinding((keys.CTRL_A,), self.toggle_shortening),
        )

    @property
    def entries(self) -> Sequence[T]:
        return self.cache.entries or ()

    @property
    def cached_length(self) -> int:
        return len(self.entries)

    @property
    def selected_row(self) -> int | None:
        """Active row index, or ``None`` when nothing is cached."""
        return self.selected if self.cached_length else None

    def _clamp_selection(self) -> None:
        self.selected = max(0, min(self.selected, self.cached_length - 1))

    def _reset_to_top(self) -> None:
        self.cache.update(0, self.visible_rows, self.search, force=True)
        self.selected = 0

    # --- Transitions ---

    def commit(self) -> ListResult:
        row = self.selected_row
        if row is None:
            logger.warning("no data to select")
            return QUIT
        return ListResult.printed(self.presenter.stringify(self.entries[row]))

    def home(self) -> None:
        self._reset_to_top()

    def move_down(self, step: int, page: bool = False) -> None:
        """Move the selection down, scrolling the window when at its bottom edge."""
        if not self.cached_length:
            logger.debug("no data")
            return
        if page or self.selected == self.cached_length - 1:
            self.cache.update_by_offset(step, self.visible_rows, self.search)
        self.selected = min(self.selected + step, self.cached_length - 1)

    def move_up(self, step: int, page: bool = False) -> None:
        """Move the selection up, scrolling the window when at its top edge."""
        if not self.cached_length:
            logger.debug("no data")
            return
        if page or self.selected == 0:
            self.cache.update_by_offset(-step, self.visible_rows, self.search)
        self.selected = max(self.selected - step, 0)

    def append_char(self, ch: str) -> None:
        self.search += ch
        self._reset_to_top()

    def delete_char(self) -> None:
        self.search = self.search[:-1]
        self._reset_to_top()

    def toggle_shortening(self) -> None:
        self.toggle.toggle()

    def handle_key(self, key: str) -> ListResult | None:
        """Apply one key token; return a result when the loop must end."""
        handler = self._keys.lookup(key)
        result: ListResult | None = None
        if handler is not None:
            result = handler()
        elif is_text_key(key):
            self.append_char(key)
        elif key.startswith(keys.MOUSE):
            logger.debug("mouse event %s", key)
        else:
            logger.warning("unknown action key=%s", key)
        self._clamp_selection()
        return result

    # --- Rendering ---

    def prepare_frame(self, height: int) -> ListFrame:
        """Fit the cached window to the viewport and build a frame.

        When the viewport height differs from the window length the window is
        re-requested at its current start with ``force``, so the cache always
        matches the screen capacity.
        """
        self.visible_rows = viewport_rows(height)
        if self.visible_rows != self.cache.window.length:
            self.cache.update(self.cache.window.first, self.visible_rows, self.search, force=True)
        self._clamp_selection()
        entries = self.entries
        return ListFrame(
            column_names=self.presenter.column_names,
            rows=self.presenter.format(entries, self.toggle) if entries else [],
            selected=self.selected_row,
            search=self.search,
            visible_rows=self.visible_rows,
            empty=self.cache.window.length == 0,
        )

    def render(self, screen: ListScreen) -> tuple[int, int]:
        width, height = screen.size()
        screen.draw(self.prepare_frame(height), width, height)
        return width, height

    def run(self, screen: ListScreen) -> ListResult:
        """Process keys until one yields Quit, Print, or Next.

        An empty read is a poll tick: the terminal size is rechecked and the
        view is redrawn only when it changed.
        """
        logger.debug("running view %s", self.name)
        last_size = self.render(screen)
        while True:
            key = screen.read_key()
            if not key:
                if screen.size() != last_size:
                    logger.debug("resize event: %s -> %s", last_size, screen.size())
                    last_size = self.render(screen)
                continue
            result = self.handle_key(key)
            if result is not None:
                return result
            last_size = self.render(screen)
