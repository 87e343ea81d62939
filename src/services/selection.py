# src/services/selection.py

"""Identifier set backing bulk edits."""

from collections.abc import Iterable, Iterator

from src.models.product import Product


class SelectionSet:
    """Set of selected product identifiers, independent of any widget."""

    def __init__(self, ids: Iterable[int] = ()) -> None:
        self._ids: set[int] = set(ids)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._ids))

    @property
    def ids(self) -> frozenset[int]:
        return frozenset(self._ids)

    def add(self, product_id: int) -> None:
        self._ids.add(product_id)

    def discard(self, product_id: int) -> None:
        self._ids.discard(product_id)

    def clear(self) -> None:
        self._ids.clear()

    def toggle(self, product_id: int) -> bool:
        """Flip membership of *product_id*; returns the new state."""
        if product_id in self._ids:
            self._ids.remove(product_id)
            return False
        self._ids.add(product_id)
        return True

    def covers(self, view: list[Product]) -> bool:
        """True when the selection is exactly the ids in *view*."""
        return self._ids == {p.id for p in view}

    def select_all(self, view: list[Product]) -> None:
        """Toggle between 'everything in view' and 'nothing'."""
        if self.covers(view):
            self._ids.clear()
        else:
            self._ids = {p.id for p in view}
