"""
Per-key in-process locks.

Used by the platform so that propose / accept / reject against one
driver run their check-and-mutate as a unit, while requests against
unrelated drivers don't wait on each other.

Locks are created lazily, one per key, and never discarded: the key
space is the set of registered drivers, which only grows.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class KeyedLock:
    def __init__(self, namespace: str):
        self.namespace = namespace
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def _lock_for(self, key: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    def acquire(self, key: str, timeout: float = -1) -> bool:
        """Try to acquire the lock for *key*.  Returns True on success."""
        return self._lock_for(key).acquire(timeout=timeout)

    def release(self, key: str) -> None:
        self._lock_for(key).release()

    # context-manager support
    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        if not self.acquire(key):
            raise RuntimeError(f"Could not acquire lock: {self.namespace}:{key}")
        try:
            yield
        finally:
            self.release(key)
