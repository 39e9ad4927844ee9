"""List views: the paged, searchable controller and its per-dataset parts."""

from .controller import (
    NEXT,
    QUIT,
    InteractiveListController,
    ListFrame,
    ListResult,
    ListScreen,
    Outcome,
)
from .presenters import (
    DataSource,
    HistoryPresenter,
    HistorySource,
    Presenter,
    ShortcutPresenter,
    ShortcutSource,
)

__all__ = [
    "InteractiveListController",
    "ListFrame",
    "ListResult",
    "ListScreen",
    "Outcome",
    "QUIT",
    "NEXT",
    "DataSource",
    "Presenter",
    "HistorySource",
    "HistoryPresenter",
    "ShortcutSource",
    "ShortcutPresenter",
]
