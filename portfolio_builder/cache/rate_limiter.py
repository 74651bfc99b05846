from portfolio_builder.cache.base import BaseKeyValueStore


class RateLimiter:
    """Rolling-window request limiter keyed by client identifier."""

    KEY_PREFIX = "ratelimit:"

    def __init__(
        self,
        store: BaseKeyValueStore,
        limit: int = 5,
        window_seconds: int = 60,
    ) -> None:
        self._store = store
        self._limit = limit
        self._window_seconds = window_seconds

    @property
    def window_seconds(self) -> int:
        return self._window_seconds

    def allow(self, client_id: str) -> bool:
        """Admit this request if the client has room left in its window."""
        return self._store.hit_window(
            f"{self.KEY_PREFIX}{client_id}", self._window_seconds, self._limit
        )
