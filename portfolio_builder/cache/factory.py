from portfolio_builder.cache.base import BaseKeyValueStore
from portfolio_builder.cache.memory_store import MemoryKeyValueStore
from portfolio_builder.cache.redis_store import RedisKeyValueStore
from portfolio_builder.config.settings import Settings


class KeyValueStoreFactory:
    """Creates the configured key-value store."""

    SUPPORTED = ("redis", "memory")

    @classmethod
    def create(cls, settings: Settings) -> BaseKeyValueStore:
        backend = settings.kv_backend.lower()
        if backend == "redis":
            if not settings.redis_url:
                raise ValueError("redis_url is required for kv_backend=redis")
            return RedisKeyValueStore.from_url(settings.redis_url)
        if backend == "memory":
            return MemoryKeyValueStore()
        raise ValueError(
            f"Unknown key-value backend '{backend}'. Choose from: {list(cls.SUPPORTED)}"
        )
