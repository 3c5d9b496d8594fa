from __future__ import annotations

from classroom_attendance.common.cache import TTLCache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_value_expires_after_ttl():
    clock = FakeClock()
    cache = TTLCache(10, clock=clock)
    cache.set("k", 1)

    clock.now += 9.9
    assert cache.get("k") == 1
    clock.now += 0.1
    assert cache.get("k") is None


def test_get_or_load_reloads_after_invalidate():
    cache = TTLCache(60, clock=FakeClock())
    calls = []

    def loader():
        calls.append(1)
        return len(calls)

    assert cache.get_or_load("k", loader) == 1
    assert cache.get_or_load("k", loader) == 1
    cache.invalidate("k")
    assert cache.get_or_load("k", loader) == 2


def test_zero_ttl_disables_caching():
    cache = TTLCache(0)
    cache.set("k", "v")

    assert cache.get("k") is None
    assert len(cache) == 0


def test_instances_are_independent():
    a, b = TTLCache(60), TTLCache(60)
    a.set("k", "v")

    assert b.get("k") is None
    a.clear()
    assert a.get("k") is None
