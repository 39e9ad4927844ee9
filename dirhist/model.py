"""Windowed result cache over a paginated, filterable data source.

The cache keeps exactly one contiguous window of an ordered result set and
decides, on every request, whether the held rows already answer it or a new
page has to be listed. Store failures are absorbed here and reported as
"no change" so navigation never breaks on a transient error.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from .store import StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")

ListFunction = Callable[[int, int, str], Sequence[T]]


@dataclass(frozen=True)
class Window:
    """Half-open range ``[first, first + length)`` fetched under ``filter``."""

    first: int = 0
    length: int = 0
    filter: str = ""

    @property
    def end(self) -> int:
        return self.first + self.length

    def contains(self, first: int, length: int, text: str) -> bool:
        """Return whether the requested range lies inside this window."""
        return first >= self.first and first + length <= self.end and text == self.filter


class PagedDataCache(Generic[T]):
    """Sliding window of entries that re-lists only when it has to."""

    def __init__(self, list_fn: ListFunction[T]) -> None:
        self._list_fn = list_fn
        self.entries: list[T] | None = None
        self.window = Window()

    def __len__(self) -> int:
        return self.window.length

    @property
    def is_empty(self) -> bool:
        return self.entries is None

    def is_subset(self, first: int, length: int, text: str) -> bool:
        """Return whether ``[first, first + length)`` under ``text`` is already held."""
        return self.entries is not None and self.window.contains(first, length, text)

    def _narrow(self, first: int, length: int, text: str) -> None:
        offset = first - self.window.first
        self.entries = (self.entries or [])[offset : offset + length]
        self.window = Window(first, length, text)

    def update(self, first: int, length: int, text: str, force: bool = False) -> bool:
        """Bring the cache to the requested window.

        Returns ``True`` when the held rows changed. A subset request is
        served by slicing. A short page that adds nothing to what is held is
        ignored. An empty page only clears the cache when ``force`` is set,
        which is how "no results" becomes visible after a reset action.
        """
        logger.debug("update first=%d length=%d text=%r force=%s", first, length, text, force)
        if self.is_subset(first, length, text):
            self._narrow(first, length, text)
            logger.debug("subset of cached window %s", self.window)
            return False

        try:
            new_entries = list(self._list_fn(first, length, text))
        except StoreError as exc:
            logger.error("listing first=%d length=%d text=%r failed: %s", first, length, text, exc)
            return False

        new_length = len(new_entries)
        if new_length != length and self.is_subset(first, new_length, text):
            logger.debug("short page of %d rows already cached, no update", new_length)
            return False

        if new_entries:
            self.entries = new_entries
            self.window = Window(first, new_length, text)
            logger.debug("updated to %s", self.window)
            return True

        logger.debug("no data found")
        if force:
            self.entries = None
            self.window = Window(0, 0, text)
            return True
        return False

    def update_by_offset(self, offset: int, length: int, text: str) -> bool:
        """Shift the window start by ``offset`` rows, clamping at zero."""
        first = max(0, self.window.first + offset)
        logger.debug("update_by_offset window.first=%d first=%d", self.window.first, first)
        return self.update(first, length, text, force=False)
