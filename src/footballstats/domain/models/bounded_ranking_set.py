"""Fixed-capacity ordered container retaining only the best ranked items."""
from __future__ import annotations

from bisect import bisect_left
from typing import Any, Callable, Generic, Iterator, List, TypeVar

T = TypeVar("T")


class BoundedRankingSet(Generic[T]):
    """Keep at most ``capacity`` items in ascending order of ``key``.

    Items are unique by key rather than by identity: adding an item whose key
    compares equal to a held item's key leaves the set untouched, so the first
    of several equally ranked items is the one retained. Capacity-1 sets rely
    on this to track a single "key result" such as a team's biggest win.

    When the set is full, an item ranked no better than the current last
    element is discarded; a better one is inserted and the last element is
    evicted.
    """

    def __init__(self, capacity: int, key: Callable[[T], Any]) -> None:
        """Create an empty set holding up to ``capacity`` items ordered by ``key``."""

        if capacity < 1:
            raise ValueError("The capacity of a ranking set must be at least 1.")
        self._capacity = capacity
        self._key = key
        self._keys: List[Any] = []
        self._items: List[T] = []

    @property
    def capacity(self) -> int:
        """Return the maximum number of retained items."""

        return self._capacity

    def add(self, item: T) -> bool:
        """Insert ``item`` if it ranks within capacity, returning ``True`` on change."""

        item_key = self._key(item)
        index = bisect_left(self._keys, item_key)
        if index < len(self._keys) and self._keys[index] == item_key:
            return False
        if len(self._items) >= self._capacity and index >= len(self._items):
            return False

        self._keys.insert(index, item_key)
        self._items.insert(index, item)
        if len(self._items) > self._capacity:
            self._keys.pop()
            self._items.pop()
        return True

    def first(self) -> T:
        """Return the best ranked item."""

        if not self._items:
            raise IndexError("The ranking set is empty.")
        return self._items[0]

    def last(self) -> T:
        """Return the worst ranked item still retained."""

        if not self._items:
            raise IndexError("The ranking set is empty.")
        return self._items[-1]

    def to_list(self) -> List[T]:
        """Return the retained items in ascending order."""

        return list(self._items)

    def __contains__(self, item: object) -> bool:
        item_key = self._key(item)  # type: ignore[arg-type]
        index = bisect_left(self._keys, item_key)
        return index < len(self._keys) and self._keys[index] == item_key

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"BoundedRankingSet(capacity={self._capacity}, items={self._items!r})"


__all__ = ["BoundedRankingSet"]
