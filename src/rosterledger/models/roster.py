"""Ordered roster container with O(1) ends and fail-fast iteration."""

from __future__ import annotations

from collections import deque
from typing import Callable, Deque, Generic, Iterator, Optional, TypeVar

from rosterledger.errors import ConcurrentModificationError


T = TypeVar("T")


class RosterList(Generic[T]):
    """Insertion-ordered sequence backed by a deque.

    Every structural change bumps a modification counter. Iterators capture the
    counter when created and raise ``ConcurrentModificationError`` if it moves
    while they are still in use.
    """

    def __init__(self) -> None:
        self._items: Deque[T] = deque()
        self._mod_count = 0

    def __len__(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def add_first(self, item: T) -> None:
        self._items.appendleft(item)
        self._mod_count += 1

    def add_last(self, item: T) -> None:
        self._items.append(item)
        self._mod_count += 1

    def peek_first(self) -> Optional[T]:
        return self._items[0] if self._items else None

    def peek_last(self) -> Optional[T]:
        return self._items[-1] if self._items else None

    def remove_first(self) -> T:
        if not self._items:
            raise IndexError("remove_first from empty roster list")
        item = self._items.popleft()
        self._mod_count += 1
        return item

    def remove_last(self) -> T:
        if not self._items:
            raise IndexError("remove_last from empty roster list")
        item = self._items.pop()
        self._mod_count += 1
        return item

    def remove_first_occurrence(self, predicate: Callable[[T], bool]) -> bool:
        """Remove the first item matching ``predicate``; survivors keep their order."""

        for index, item in enumerate(self._items):
            if predicate(item):
                del self._items[index]
                self._mod_count += 1
                return True
        return False

    def contains(self, predicate: Callable[[T], bool]) -> bool:
        return any(predicate(item) for item in self)

    def __iter__(self) -> Iterator[T]:
        expected = self._mod_count
        for item in self._items:
            yield item
            # must run before the deque iterator advances
            if self._mod_count != expected:
                raise ConcurrentModificationError("roster list modified during iteration")

    def to_list(self) -> list[T]:
        return list(self)

    def __repr__(self) -> str:
        return f"RosterList({list(self._items)!r})"
