"""Tests for focus routing between named list views."""

from __future__ import annotations

import unittest

from dirhist.input import reader as keys
from dirhist.listview import InteractiveListController
from dirhist.router import ViewRouter
from dirhist.state import ToggleFlag


class ListSource:
    def __init__(self, items: list[str]) -> None:
        self.items = items

    def list(self, offset: int, limit: int, text: str) -> list[str]:
        return [item for item in self.items if text in item][offset : offset + limit]


class PlainPresenter:
    column_names = ("a", "b")

    def __init__(self) -> None:
        self.seen_toggles: list[ToggleFlag] = []

    def format(self, entries, toggle):
        self.seen_toggles.append(toggle)
        return [(entry, "") for entry in entries]

    def stringify(self, entry: str) -> str:
        return entry


class KeyScreen:
    def __init__(self, keys_to_send: list[str]) -> None:
        self.keys = list(keys_to_send)

    def read_key(self) -> str:
        if not self.keys:
            raise AssertionError("screen ran out of keys")
        return self.keys.pop(0)

    def size(self) -> tuple[int, int]:
        return 40, 8

    def draw(self, frame, width: int, height: int) -> None:
        pass


def make_router(*names: str, toggle: ToggleFlag | None = None) -> ViewRouter:
    shared = toggle or ToggleFlag(True)
    controllers = [
        InteractiveListController(
            name,
            ListSource([f"{name.lower()}-{idx}" for idx in range(20)]),
            PlainPresenter(),
            shared,
        )
        for name in names
    ]
    return ViewRouter(controllers, shared)


class ViewRouterTests(unittest.TestCase):
    def test_tab_cycles_and_preserves_view_state(self) -> None:
        router = make_router("History", "Shortcuts")
        history = router.current
        self.assertEqual(history.name, "History")

        screen = KeyScreen(["1", keys.DOWN, keys.TAB, "x", keys.TAB, keys.ESC])
        self.assertIsNone(router.run(screen))

        shortcuts = router.controllers[1]
        self.assertEqual(router.current.name, "History")
        self.assertEqual(history.search, "1")
        self.assertEqual(history.selected, 1)
        self.assertEqual(history.cache.window.filter, "1")
        self.assertEqual(shortcuts.search, "x")
        self.assertIsNone(shortcuts.cache.entries)

    def test_tab_twice_returns_to_first_view(self) -> None:
        router = make_router("History", "Shortcuts")

        router.advance()
        self.assertEqual(router.current.name, "Shortcuts")
        router.advance()
        self.assertEqual(router.current.name, "History")

    def test_print_propagates_value(self) -> None:
        router = make_router("History", "Shortcuts")

        result = router.run(KeyScreen([keys.TAB, keys.DOWN, keys.DOWN, keys.ENTER]))

        self.assertEqual(result, "shortcuts-2")

    def test_quit_from_empty_view_yields_none(self) -> None:
        router = make_router("History", "Shortcuts")

        self.assertIsNone(router.run(KeyScreen(["z", keys.ENTER])))

    def test_cycles_through_n_views(self) -> None:
        router = make_router("One", "Two", "Three")

        seen = []
        for _ in range(4):
            seen.append(router.current.name)
            router.advance()

        self.assertEqual(seen, ["One", "Two", "Three", "One"])

    def test_focus_by_name(self) -> None:
        router = make_router("History", "Shortcuts")
        router.focus("Shortcuts")
        self.assertEqual(router.current.name, "Shortcuts")
        with self.assertRaises(KeyError):
            router.focus("Missing")

    def test_toggle_is_shared_across_views(self) -> None:
        toggle = ToggleFlag(True)
        router = make_router("History", "Shortcuts", toggle=toggle)

        router.run(KeyScreen([keys.CTRL_A, keys.TAB, keys.ESC]))

        self.assertFalse(toggle.value)
        second_presenter = router.controllers[1].presenter
        self.assertTrue(all(seen is toggle for seen in second_presenter.seen_toggles))
        self.assertFalse(second_presenter.seen_toggles[-1].value)

    def test_rejects_views_with_private_toggles(self) -> None:
        shared = ToggleFlag()
        controllers = [
            InteractiveListController("A", ListSource([]), PlainPresenter(), shared),
            InteractiveListController("B", ListSource([]), PlainPresenter(), ToggleFlag()),
        ]
        with self.assertRaises(ValueError):
            ViewRouter(controllers, shared)

    def test_rejects_empty_and_duplicate_views(self) -> None:
        shared = ToggleFlag()
        with self.assertRaises(ValueError):
            ViewRouter([], shared)
        duplicate = [
            InteractiveListController("A", ListSource([]), PlainPresenter(), shared),
            InteractiveListController("A", ListSource([]), PlainPresenter(), shared),
        ]
        with self.assertRaises(ValueError):
            ViewRouter(duplicate, shared)


if __name__ == "__main__":
    unittest.main()
