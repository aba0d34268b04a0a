"""
Corpus Store

Thread-safe container for the items of one ranking pass. Created fresh per
search from the fetched records and discarded once results are extracted.
"""

import threading
from typing import Generic, Iterable, Optional, TypeVar

T = TypeVar("T")


class Store(Generic[T]):
    """Ordered item collection guarded by a single lock."""

    def __init__(self, items: Optional[Iterable[T]] = None):
        self._lock = threading.Lock()
        self._items: list[T] = list(items) if items is not None else []

    def get(self, index: int) -> Optional[T]:
        with self._lock:
            if -len(self._items) <= index < len(self._items):
                return self._items[index]
            return None

    def append(self, item: T) -> None:
        with self._lock:
            self._items.append(item)

    def items(self) -> list[T]:
        """Snapshot of the items, safe to hand to a ranker."""
        with self._lock:
            return list(self._items)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __repr__(self) -> str:
        return f"Store({len(self)} items)"
