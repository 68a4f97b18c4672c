"""Thread-safe web object cache with LRU or LFU replacement."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum

MAX_CACHE_SIZE = 1049000
MAX_OBJECT_SIZE = 102400


class CachePolicy(Enum):
    """Replacement policy used when the cache grows past its limit."""

    LRU = "LRU"
    LFU = "LFU"

    @classmethod
    def from_name(cls, name: str) -> "CachePolicy":
        """Return LFU for a case-insensitive 'LFU', LRU for anything else."""
        return cls.LFU if name.upper() == "LFU" else cls.LRU


@dataclass
class CacheEntry:
    """One cached response, keyed by host, path and port."""

    hostname: str
    path: str
    port: int
    content: bytes
    freq: int = field(default=0)

    @property
    def size(self) -> int:
        return len(self.content)

    def matches(self, hostname: str, path: str, port: int) -> bool:
        return self.hostname == hostname and self.path == path and self.port == port


class ObjectCache:
    """Cache of response objects, most recently inserted or used first."""

    def __init__(self, policy: CachePolicy = CachePolicy.LRU, max_size: int = MAX_CACHE_SIZE):
        self.policy = CachePolicy(policy)
        self.max_size = max_size
        self._entries: list[CacheEntry] = []
        self._total = 0
        self._lock = threading.RLock()

    @property
    def total_size(self) -> int:
        """Sum of the sizes of all cached objects."""
        with self._lock:
            return self._total

    def find(self, hostname: str, path: str, port: int) -> CacheEntry | None:
        """Look up an object and record the access; None on a miss."""
        with self._lock:
            for index, entry in enumerate(self._entries):
                if entry.matches(hostname, path, port):
                    entry.freq += 1
                    if self.policy is CachePolicy.LRU:
                        del self._entries[index]
                        self._entries.insert(0, entry)
                    return entry
            return None

    def insert(self, hostname: str, path: str, port: int, content: bytes) -> CacheEntry:
        """Add an object at the front, evicting until the cache fits."""
        entry = CacheEntry(hostname, path, port, bytes(content))
        with self._lock:
            self._entries.insert(0, entry)
            self._total += entry.size
            while self._total > self.max_size and self._entries:
                self.evict()
            return entry

    def evict(self) -> CacheEntry | None:
        """Remove one object chosen by the policy; None if the cache is empty."""
        with self._lock:
            if not self._entries:
                return None
            if self.policy is CachePolicy.LRU:
                victim = self._entries.pop()
            else:
                victim = min(self._entries, key=lambda e: e.freq)
                self._entries.remove(victim)
            self._total -= victim.size
            return victim

    def entries(self) -> list[CacheEntry]:
        """Snapshot of the cached objects, front to back."""
        with self._lock:
            return list(self._entries)

    def describe(self) -> str:
        """One line per cached object, front to back."""
        return "\n".join(
            f"! hostname: {e.hostname}, path: {e.path}, port: {e.port}, "
            f"size: {e.size}, freq: {e.freq}"
            for e in self.entries()
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)