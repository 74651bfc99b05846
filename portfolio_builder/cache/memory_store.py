import copy
import threading
import time
from collections import deque
from collections.abc import Callable
from typing import Any

from portfolio_builder.cache.base import BaseKeyValueStore


class MemoryKeyValueStore(BaseKeyValueStore):
    """In-process key-value store.

    Good for single-instance deployments and local development. For
    distributed setups, use Redis. Expired values and idle windows are
    swept at most once per *sweep_interval_seconds*.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sweep_interval_seconds: float = 60.0,
    ) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._values: dict[str, tuple[Any, float]] = {}
        self._windows: dict[str, deque[float]] = {}
        self._window_expiry: dict[str, float] = {}
        self._sweep_interval_seconds = sweep_interval_seconds
        self._next_sweep = clock() + sweep_interval_seconds

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._values.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if self._clock() >= expires_at:
                del self._values[key]
                return None
            return copy.deepcopy(value)

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        now = self._clock()
        with self._lock:
            self._sweep(now)
            self._values[key] = (copy.deepcopy(value), now + ttl_seconds)

    def ttl(self, key: str) -> float | None:
        """Seconds until *key* expires, or None if it is absent."""
        with self._lock:
            entry = self._values.get(key)
            if entry is None:
                return None
            return max(0.0, entry[1] - self._clock())

    def hit_window(self, key: str, window_seconds: int, limit: int) -> bool:
        now = self._clock()
        with self._lock:
            self._sweep(now)
            hits = self._windows.get(key, deque())
            while hits and hits[0] <= now - window_seconds:
                hits.popleft()
            if len(hits) >= limit:
                return False
            hits.append(now)
            self._windows[key] = hits
            self._window_expiry[key] = now + window_seconds
            return True

    def _sweep(self, now: float) -> None:
        # Caller holds the lock.
        if now < self._next_sweep:
            return
        self._next_sweep = now + self._sweep_interval_seconds
        for key in [k for k, (_, expires_at) in self._values.items() if expires_at <= now]:
            del self._values[key]
        for key in [k for k, expires_at in self._window_expiry.items() if expires_at <= now]:
            del self._window_expiry[key]
            del self._windows[key]
