"""Tests for the windowed result cache.

Covers subset reuse, exact-filter invalidation, short-page stability at the
end of a result set, forced clearing, and store failures.
"""

from __future__ import annotations

import unittest

from dirhist.model import PagedDataCache, Window
from dirhist.store import StoreError


class RecordingSource:
    """List function over an in-memory sequence that records every call."""

    def __init__(self, items: list[str]) -> None:
        self.items = items
        self.calls: list[tuple[int, int, str]] = []
        self.fail = False

    def __call__(self, offset: int, limit: int, text: str) -> list[str]:
        self.calls.append((offset, limit, text))
        if self.fail:
            raise StoreError("database is locked")
        matching = [item for item in self.items if text in item]
        return matching[offset : offset + limit]


def letters(count: int) -> list[str]:
    return [chr(ord("a") + idx) for idx in range(count)]


class PagedDataCacheTests(unittest.TestCase):
    def test_new_cache_is_empty(self) -> None:
        cache = PagedDataCache(RecordingSource(letters(3)))

        self.assertTrue(cache.is_empty)
        self.assertIsNone(cache.entries)
        self.assertEqual(cache.window, Window(0, 0, ""))
        self.assertFalse(cache.is_subset(0, 0, ""))

    def test_first_fetch_then_subset_narrows_without_store_call(self) -> None:
        source = RecordingSource(["a", "b", "c"])
        cache = PagedDataCache(source)

        self.assertTrue(cache.update(0, 3, "", False))
        self.assertEqual(cache.entries, ["a", "b", "c"])
        self.assertEqual(cache.window, Window(0, 3, ""))

        self.assertFalse(cache.update(1, 2, "", False))
        self.assertEqual(source.calls, [(0, 3, "")])
        self.assertEqual(cache.entries, ["b", "c"])
        self.assertEqual(cache.window, Window(1, 2, ""))

    def test_subset_narrowing_slices_by_offset_from_window_start(self) -> None:
        source = RecordingSource(letters(20))
        cache = PagedDataCache(source)
        cache.update(5, 10, "", False)

        self.assertFalse(cache.update(8, 4, "", False))

        self.assertEqual(cache.entries, ["i", "j", "k", "l"])
        self.assertEqual(cache.window, Window(8, 4, ""))
        self.assertEqual(len(source.calls), 1)

    def test_is_subset_requires_containment_and_identical_filter(self) -> None:
        cache = PagedDataCache(RecordingSource(["ab", "abc", "abd", "abe"]))
        cache.update(1, 2, "ab", False)

        self.assertTrue(cache.is_subset(1, 2, "ab"))
        self.assertTrue(cache.is_subset(2, 1, "ab"))
        self.assertFalse(cache.is_subset(0, 2, "ab"))
        self.assertFalse(cache.is_subset(2, 2, "ab"))
        self.assertFalse(cache.is_subset(1, 2, "ab "))
        self.assertFalse(cache.is_subset(1, 2, "AB"))

    def test_filter_change_forces_store_call_even_inside_window(self) -> None:
        source = RecordingSource(["x1", "x2", "y1", "x3"])
        cache = PagedDataCache(source)
        cache.update(0, 4, "", False)

        changed = cache.update(0, 2, "x", False)

        self.assertTrue(changed)
        self.assertEqual(source.calls[-1], (0, 2, "x"))
        self.assertEqual(cache.entries, ["x1", "x2"])
        self.assertEqual(cache.window, Window(0, 2, "x"))

    def test_repeated_update_is_idempotent(self) -> None:
        source = RecordingSource(letters(10))
        cache = PagedDataCache(source)

        self.assertTrue(cache.update(2, 5, "", False))
        self.assertFalse(cache.update(2, 5, "", False))
        self.assertEqual(len(source.calls), 1)

    def test_short_page_already_cached_leaves_cache_untouched(self) -> None:
        source = RecordingSource(letters(12))
        cache = PagedDataCache(source)
        cache.update(2, 10, "", False)

        changed = cache.update_by_offset(1, 10, "")

        self.assertFalse(changed)
        self.assertEqual(source.calls[-1], (3, 10, ""))
        self.assertEqual(cache.window, Window(2, 10, ""))
        self.assertEqual(cache.entries, letters(12)[2:])

    def test_short_page_with_new_rows_is_accepted(self) -> None:
        source = RecordingSource(letters(15))
        cache = PagedDataCache(source)
        cache.update(0, 10, "", False)

        changed = cache.update_by_offset(10, 10, "")

        self.assertTrue(changed)
        self.assertEqual(cache.window, Window(10, 5, ""))
        self.assertEqual(cache.entries, letters(15)[10:])

    def test_last_page_of_filtered_result_set(self) -> None:
        items = [f"/src/{name}" for name in letters(8)] + ["/tmp/x", "/tmp/y"]
        source = RecordingSource(items)
        cache = PagedDataCache(source)
        cache.update(0, 3, "/src", False)
        self.assertTrue(cache.update_by_offset(3, 3, "/src"))
        self.assertTrue(cache.update_by_offset(3, 3, "/src"))
        self.assertEqual(cache.window, Window(6, 2, "/src"))
        self.assertEqual(cache.entries, ["/src/g", "/src/h"])

        # Scrolling past the end returns rows that are all held already.
        self.assertFalse(cache.update_by_offset(1, 3, "/src"))
        self.assertEqual(cache.window, Window(6, 2, "/src"))

    def test_empty_page_without_force_keeps_cache(self) -> None:
        source = RecordingSource(letters(5))
        cache = PagedDataCache(source)
        cache.update(0, 5, "", False)

        self.assertFalse(cache.update(0, 5, "zzz", False))
        self.assertEqual(cache.entries, letters(5))
        self.assertEqual(cache.window, Window(0, 5, ""))

    def test_empty_page_with_force_clears_cache(self) -> None:
        source = RecordingSource(letters(5))
        cache = PagedDataCache(source)
        cache.update(0, 5, "", False)

        self.assertTrue(cache.update(0, 5, "zzz", True))
        self.assertIsNone(cache.entries)
        self.assertEqual(cache.window, Window(0, 0, "zzz"))
        self.assertEqual(len(cache), 0)

    def test_force_on_empty_store_from_empty_cache(self) -> None:
        cache = PagedDataCache(RecordingSource([]))

        self.assertTrue(cache.update(0, 10, "", True))
        self.assertIsNone(cache.entries)

    def test_store_failure_is_absorbed(self) -> None:
        source = RecordingSource(letters(10))
        cache = PagedDataCache(source)
        cache.update(0, 4, "", False)
        source.fail = True

        with self.assertLogs("dirhist.model", level="ERROR") as logs:
            changed = cache.update(4, 4, "", True)

        self.assertFalse(changed)
        self.assertEqual(cache.entries, letters(4))
        self.assertEqual(cache.window, Window(0, 4, ""))
        self.assertIn("database is locked", logs.output[0])

    def test_negative_offset_clamps_to_zero(self) -> None:
        source = RecordingSource(letters(30))
        cache = PagedDataCache(source)
        cache.update(3, 5, "", False)

        cache.update_by_offset(-10, 5, "")

        self.assertEqual(source.calls[-1], (0, 5, ""))
        self.assertEqual(cache.window, Window(0, 5, ""))
        self.assertTrue(all(offset >= 0 for offset, _, _ in source.calls))

    def test_offset_from_zero_at_top_is_a_subset(self) -> None:
        source = RecordingSource(letters(30))
        cache = PagedDataCache(source)
        cache.update(0, 5, "", False)

        self.assertFalse(cache.update_by_offset(-1, 5, ""))
        self.assertEqual(len(source.calls), 1)


if __name__ == "__main__":
    unittest.main()
