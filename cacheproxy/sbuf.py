"""Bounded, blocking FIFO buffer shared between threads."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any


class SharedBuffer:
    """Producer/consumer queue holding at most ``capacity`` items."""

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._items: deque[Any] = deque()
        self._lock = threading.Lock()
        self._not_full = threading.Condition(self._lock)
        self._not_empty = threading.Condition(self._lock)

    def insert(self, item: Any) -> None:
        """Append an item, waiting while the buffer is full."""
        with self._not_full:
            while len(self._items) >= self.capacity:
                self._not_full.wait()
            self._items.append(item)
            self._not_empty.notify_all()

    def remove(self) -> Any:
        """Take the oldest item, waiting while the buffer is empty."""
        with self._not_empty:
            while not self._items:
                self._not_empty.wait()
            item = self._items.popleft()
            self._not_full.notify_all()
            return item

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)