import json
import time
import uuid
from typing import Any

import redis

from portfolio_builder.cache.base import BaseKeyValueStore
from portfolio_builder.cache.exceptions import KeyValueStoreError

# Trims, checks and records atomically on the server.
# KEYS[1] = window key; ARGV = now, window, limit, member.
_HIT_WINDOW_SCRIPT = """
local now = tonumber(ARGV[1])
local window = tonumber(ARGV[2])
redis.call("ZREMRANGEBYSCORE", KEYS[1], 0, now - window)
if redis.call("ZCARD", KEYS[1]) >= tonumber(ARGV[3]) then
    return 0
end
redis.call("ZADD", KEYS[1], now, ARGV[4])
redis.call("EXPIRE", KEYS[1], window)
return 1
"""


class RedisKeyValueStore(BaseKeyValueStore):
    """Key-value store backed by Redis.

    Values are JSON strings. The rolling window is a sorted set of hit
    timestamps, trimmed and checked by a Lua script on every hit.
    """

    def __init__(self, client: redis.Redis) -> None:
        self._client = client
        self._hit_window_script = client.register_script(_HIT_WINDOW_SCRIPT)

    @classmethod
    def from_url(cls, url: str) -> "RedisKeyValueStore":
        return cls(redis.Redis.from_url(url, decode_responses=True))

    def get(self, key: str) -> Any | None:
        try:
            raw = self._client.get(key)
        except redis.RedisError as exc:
            raise KeyValueStoreError(f"Redis GET {key} failed: {exc}") from exc
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise KeyValueStoreError(f"Value under {key} is not valid JSON: {exc}") from exc

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        try:
            self._client.set(key, json.dumps(value), ex=ttl_seconds)
        except redis.RedisError as exc:
            raise KeyValueStoreError(f"Redis SET {key} failed: {exc}") from exc

    def hit_window(self, key: str, window_seconds: int, limit: int) -> bool:
        now = time.time()
        member = f"{now:.6f}-{uuid.uuid4().hex}"
        try:
            recorded = self._hit_window_script(
                keys=[key], args=[now, window_seconds, limit, member]
            )
        except redis.RedisError as exc:
            raise KeyValueStoreError(f"Redis window hit on {key} failed: {exc}") from exc
        return int(recorded) == 1
