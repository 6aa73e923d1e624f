"""A list where items go in at the head and come out at the tail."""

from __future__ import annotations

from collections import deque
from typing import Any, Callable, Iterator, Optional

Dealloc = Optional[Callable[[Any], None]]


class LinkedListError(Exception):
    """Base error for list operations."""


class ListEmptyError(LinkedListError):
    """Raised when an item is asked of an empty list."""


class LinkedList:
    """First-in first-out list with optional per-item release callbacks.

    Items are added at the head and removed from the tail.  Each item may
    carry a ``dealloc`` callback that :meth:`flush` calls on it.
    """

    def __init__(self) -> None:
        # Left end is the head, right end the tail.
        self._items: deque[tuple[Any, Dealloc]] = deque()

    def add(self, data: Any, dealloc: Dealloc = None) -> None:
        """Add an item at the head of the list."""
        if data is None:
            raise ValueError("cannot add None to the list")
        self._items.appendleft((data, dealloc))

    def remove(self) -> Any:
        """Remove and return the item at the tail (the oldest one)."""
        if not self._items:
            raise ListEmptyError("list is empty")
        data, _ = self._items.pop()
        return data

    def is_empty(self) -> bool:
        """Tell whether the list holds no items."""
        return not self._items

    def flush(self) -> None:
        """Remove every item, calling its release callback from head to tail."""
        while self._items:
            data, dealloc = self._items.popleft()
            if dealloc is not None:
                dealloc(data)

    def search(
        self,
        equal: Callable[[Any, Any], bool],
        key: Any,
        remove: bool = False,
    ) -> Any:
        """Return the first item, from the head, for which ``equal(key, item)``.

        Returns None when nothing matches.  With ``remove`` the match is taken
        out of the list; it is handed back, so its release callback is not run.
        """
        if equal is None:
            raise ValueError("an equality function is required")
        if not self._items:
            raise ListEmptyError("list is empty")
        for position, (data, _) in enumerate(self._items):
            if equal(key, data):
                if remove:
                    del self._items[position]
                return data
        return None

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        """Iterate from head (newest) to tail (oldest)."""
        return (data for data, _ in self._items)