from typing import Any

from portfolio_builder.cache.base import BaseKeyValueStore
from portfolio_builder.logging.logger import Log
from portfolio_builder.processor.models import HistoryRecord


class HistoryStore:
    """Per-client list of recent portfolios, newest first."""

    KEY_PREFIX = "history:"

    def __init__(
        self,
        store: BaseKeyValueStore,
        max_entries: int = 10,
        ttl_seconds: int = 30 * 24 * 60 * 60,
    ) -> None:
        self._store = store
        self._max_entries = max_entries
        self._ttl_seconds = ttl_seconds

    def key_for(self, client_id: str) -> str:
        return f"{self.KEY_PREFIX}{client_id}"

    def get_history(self, client_id: str) -> list[dict[str, Any]]:
        """Return the stored history for *client_id*, or an empty list."""
        history = self._store.get(self.key_for(client_id))
        if not isinstance(history, list):
            return []
        return history

    def append(self, client_id: str, record: HistoryRecord) -> list[dict[str, Any]]:
        """Prepend *record*, keep the newest entries and reset the key's TTL."""
        history = [record.to_dict(), *self.get_history(client_id)][: self._max_entries]
        self._store.set(self.key_for(client_id), history, self._ttl_seconds)
        Log.info(f"History for {client_id} now holds {len(history)} portfolios")
        return history
