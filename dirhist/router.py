"""Focus routing between named list views.

Exactly one controller owns input at a time. ``Next`` hands focus to the
following view in cyclic order; the view being left keeps its cache,
selection, and search untouched so coming back resumes where it was.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .listview import InteractiveListController, ListScreen, Outcome
from .state import ToggleFlag

logger = logging.getLogger(__name__)


class ViewRouter:
    """Cyclic set of named controllers sharing one :class:`ToggleFlag`."""

    def __init__(
        self,
        controllers: Sequence[InteractiveListController],
        toggle: ToggleFlag,
        start: str | None = None,
    ) -> None:
        if not controllers:
            raise ValueError("at least one view is required")
        names = [controller.name for controller in controllers]
        if len(set(names)) != len(names):
            raise ValueError(f"view names must be unique: {names}")
        for controller in controllers:
            if controller.toggle is not toggle:
                raise ValueError(f"view {controller.name!r} does not share the session toggle")
        self.controllers = list(controllers)
        self.toggle = toggle
        self.current_index = 0
        if start is not None:
            self.focus(start)

    @property
    def current(self) -> InteractiveListController:
        return self.controllers[self.current_index]

    @property
    def names(self) -> list[str]:
        return [controller.name for controller in self.controllers]

    def focus(self, name: str) -> None:
        try:
            self.current_index = self.names.index(name)
        except ValueError:
            raise KeyError(name) from None

    def advance(self) -> None:
        self.current_index = (self.current_index + 1) % len(self.controllers)
        logger.debug("focus -> %s", self.current.name)

    def run(self, screen: ListScreen) -> str | None:
        """Run focused views until one quits or commits a value."""
        while True:
            result = self.current.run(screen)
            if result.outcome is Outcome.QUIT:
                return None
            if result.outcome is Outcome.PRINT:
                return result.value
            self.advance()
