"""
Per-key locks for serializing read-modify-write sequences in process.
"""
from contextlib import contextmanager
from threading import Lock
from typing import Dict, Hashable, Iterator


class KeyedLock:
    """Hands out one lock per key, so work on different keys never waits."""

    def __init__(self):
        self._locks: Dict[Hashable, Lock] = {}
        self._guard = Lock()

    def _lock_for(self, key: Hashable) -> Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = Lock()
            return lock

    @contextmanager
    def hold(self, key: Hashable, timeout: float) -> Iterator[None]:
        """Hold the lock for ``key``; raise ``TimeoutError`` if it can't be had in time."""
        lock = self._lock_for(key)
        if not lock.acquire(timeout=timeout):
            raise TimeoutError(f"Timed out after {timeout}s waiting for lock on {key!r}")
        try:
            yield
        finally:
            lock.release()

    def discard(self, key: Hashable) -> None:
        """Forget the lock of a key that will not be used again."""
        with self._guard:
            self._locks.pop(key, None)

    def __len__(self) -> int:
        return len(self._locks)


# Serializes membership changes per topic id
membership_locks = KeyedLock()
