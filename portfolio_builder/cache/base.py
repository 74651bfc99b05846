from abc import ABC, abstractmethod
from typing import Any


class BaseKeyValueStore(ABC):
    """Contract for the remote key-value store behind history and rate limiting."""

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the JSON value stored under *key*, or None if absent or expired."""

    @abstractmethod
    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        """Store a JSON-serializable *value*, replacing any previous value and TTL."""

    @abstractmethod
    def hit_window(self, key: str, window_seconds: int, limit: int) -> bool:
        """Record a hit under *key* if fewer than *limit* fall in the last *window_seconds*.

        Returns whether the hit was recorded. Rejected hits leave the window untouched.
        """
