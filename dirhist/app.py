"""Session wiring for the interactive browser.

Builds the history and shortcut views over one store, shares a single
toggle between them, and runs the router on the controlling terminal.
"""

from __future__ import annotations

import logging

from .config import Settings
from .input import read_key
from .listview import (
    HistoryPresenter,
    HistorySource,
    InteractiveListController,
    ListFrame,
    ShortcutPresenter,
    ShortcutSource,
)
from .render import build_list_screen
from .router import ViewRouter
from .state import ToggleFlag
from .store import Store
from .terminal import TerminalController
from .theme import Palette

logger = logging.getLogger(__name__)

HISTORY_VIEW = "History"
SHORTCUTS_VIEW = "Shortcuts"
RESIZE_POLL_MS = 200


class TerminalScreen:
    """``ListScreen`` backed by a raw-mode terminal."""

    def __init__(self, terminal: TerminalController, palette: Palette, poll_ms: int = RESIZE_POLL_MS) -> None:
        self.terminal = terminal
        self.palette = palette
        self.poll_ms = poll_ms

    def read_key(self) -> str:
        return read_key(self.terminal.stdin_fd, timeout_ms=self.poll_ms)

    def size(self) -> tuple[int, int]:
        return self.terminal.size()

    def draw(self, frame: ListFrame, width: int, height: int) -> None:
        self.terminal.write(build_list_screen(frame, width, height, self.palette))


def build_router(store: Store, settings: Settings, palette: Palette, home: str | None = None) -> ViewRouter:
    """Compose the two dataset views around one shared toggle."""
    toggle = ToggleFlag(settings.shorten_paths)
    history = InteractiveListController(
        HISTORY_VIEW,
        HistorySource(store),
        HistoryPresenter(palette, settings.date_format, store.list_all_shortcuts, home=home),
        toggle,
    )
    shortcuts = InteractiveListController(
        SHORTCUTS_VIEW,
        ShortcutSource(store),
        ShortcutPresenter(palette),
        toggle,
    )
    return ViewRouter([history, shortcuts], toggle)


def run_browser(store: Store, settings: Settings, tty_path: str = "/dev/tty") -> str | None:
    """Run an interactive session and return the selected string, if any."""
    palette = settings.colors.palette()
    router = build_router(store, settings, palette)
    with TerminalController.open_tty(tty_path) as terminal:
        screen = TerminalScreen(terminal, palette)
        with terminal.raw_mode():
            result = router.run(screen)
    logger.debug("session result=%r", result)
    return result
