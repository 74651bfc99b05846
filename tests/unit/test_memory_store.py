import pytest

from portfolio_builder.cache.memory_store import MemoryKeyValueStore


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


class TestMemoryKeyValueStore:
    def test_get_missing_returns_none(self, clock: FakeClock) -> None:
        assert MemoryKeyValueStore(clock).get("nope") is None

    def test_set_then_get(self, clock: FakeClock) -> None:
        store = MemoryKeyValueStore(clock)
        store.set("k", [{"id": "1"}], ttl_seconds=10)
        assert store.get("k") == [{"id": "1"}]

    def test_values_are_copied(self, clock: FakeClock) -> None:
        store = MemoryKeyValueStore(clock)
        value = [{"id": "1"}]
        store.set("k", value, ttl_seconds=10)
        value.append({"id": "2"})
        store.get("k").append({"id": "3"})
        assert store.get("k") == [{"id": "1"}]

    def test_value_expires(self, clock: FakeClock) -> None:
        store = MemoryKeyValueStore(clock)
        store.set("k", "v", ttl_seconds=10)
        clock.now += 10
        assert store.get("k") is None
        assert store.ttl("k") is None

    def test_set_resets_ttl(self, clock: FakeClock) -> None:
        store = MemoryKeyValueStore(clock)
        store.set("k", "v", ttl_seconds=10)
        clock.now += 8
        store.set("k", "v2", ttl_seconds=10)
        assert store.ttl("k") == 10
        clock.now += 8
        assert store.get("k") == "v2"

    def test_hit_window_admits_up_to_limit(self, clock: FakeClock) -> None:
        store = MemoryKeyValueStore(clock)
        assert [store.hit_window("w", 60, 3) for _ in range(4)] == [True, True, True, False]

    def test_hit_window_drops_old_hits(self, clock: FakeClock) -> None:
        store = MemoryKeyValueStore(clock)
        store.hit_window("w", 60, 2)
        clock.now += 30
        store.hit_window("w", 60, 2)
        clock.now += 31
        assert store.hit_window("w", 60, 2) is True
        assert store.hit_window("w", 60, 2) is False

    def test_rejected_hits_do_not_fill_window(self, clock: FakeClock) -> None:
        store = MemoryKeyValueStore(clock)
        for _ in range(2):
            store.hit_window("w", 60, 2)
        clock.now += 50
        assert not any(store.hit_window("w", 60, 2) for _ in range(10))
        clock.now += 15
        assert store.hit_window("w", 60, 2) is True

    def test_windows_are_per_key(self, clock: FakeClock) -> None:
        store = MemoryKeyValueStore(clock)
        store.hit_window("a", 60, 1)
        assert store.hit_window("b", 60, 1) is True


class TestMemoryKeyValueStoreSweep:
    def test_idle_windows_are_dropped(self, clock: FakeClock) -> None:
        store = MemoryKeyValueStore(clock, sweep_interval_seconds=60)
        for index in range(1000):
            store.hit_window(f"ratelimit:{index}", 60, 5)
        clock.now += 10_000
        store.hit_window("ratelimit:new", 60, 5)
        assert list(store._windows) == ["ratelimit:new"]
        assert list(store._window_expiry) == ["ratelimit:new"]

    def test_expired_values_are_dropped_on_set(self, clock: FakeClock) -> None:
        store = MemoryKeyValueStore(clock, sweep_interval_seconds=60)
        for index in range(1000):
            store.set(f"history:{index}", [], ttl_seconds=100)
        clock.now += 10_000
        store.set("history:new", [], ttl_seconds=100)
        assert list(store._values) == ["history:new"]

    def test_live_entries_survive_sweep(self, clock: FakeClock) -> None:
        store = MemoryKeyValueStore(clock, sweep_interval_seconds=60)
        store.set("history:a", ["kept"], ttl_seconds=1000)
        store.hit_window("ratelimit:a", 600, 1)
        clock.now += 120
        store.set("history:b", [], ttl_seconds=10)
        assert store.get("history:a") == ["kept"]
        assert store.hit_window("ratelimit:a", 600, 1) is False
