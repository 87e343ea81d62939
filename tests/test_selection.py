# tests/test_selection.py

"""Tests for the bulk-edit SelectionSet."""

import unittest

from src.models.product import Product
from src.services.selection import SelectionSet


def _view(*ids: int) -> list[Product]:
    """Build a derived view containing the given ids."""
    return [Product(id=i, title=f"P{i}", price=1.0) for i in ids]


class TestToggle(unittest.TestCase):
    """toggle() flips membership."""

    def test_toggle_adds_then_removes(self) -> None:
        selection = SelectionSet()
        self.assertTrue(selection.toggle(3))
        self.assertIn(3, selection)
        self.assertFalse(selection.toggle(3))
        self.assertNotIn(3, selection)

    def test_len_and_iteration(self) -> None:
        selection = SelectionSet([5, 1])
        selection.toggle(3)
        self.assertEqual(len(selection), 3)
        self.assertEqual(list(selection), [1, 3, 5])

    def test_empty_is_falsy(self) -> None:
        self.assertFalse(SelectionSet())
        self.assertTrue(SelectionSet([1]))


class TestSelectAll(unittest.TestCase):
    """select_all() toggles between all-visible and none."""

    def test_selects_exactly_the_view(self) -> None:
        selection = SelectionSet([99])
        selection.select_all(_view(1, 2, 3))
        self.assertEqual(selection.ids, frozenset({1, 2, 3}))

    def test_twice_returns_to_empty(self) -> None:
        selection = SelectionSet()
        view = _view(1, 2, 3)
        selection.select_all(view)
        selection.select_all(view)
        self.assertEqual(len(selection), 0)

    def test_partial_selection_becomes_full(self) -> None:
        selection = SelectionSet([2])
        selection.select_all(_view(1, 2))
        self.assertEqual(selection.ids, frozenset({1, 2}))

    def test_covers(self) -> None:
        selection = SelectionSet([1, 2])
        self.assertTrue(selection.covers(_view(2, 1)))
        self.assertFalse(selection.covers(_view(1)))

    def test_clear_and_discard(self) -> None:
        selection = SelectionSet([1, 2])
        selection.discard(1)
        selection.discard(42)
        self.assertEqual(selection.ids, frozenset({2}))
        selection.clear()
        self.assertEqual(len(selection), 0)


if __name__ == "__main__":
    unittest.main()
