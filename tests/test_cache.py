"""
Response cache tests.

The fake clock drives TTL expiry, so nothing here sleeps.
"""
from __future__ import annotations

from flight_proxy.cache import CacheKey, ResponseCache
from flight_proxy.models import SOURCE_MOCK, FlightSnapshot


def snapshot(tag: str) -> FlightSnapshot:
    return FlightSnapshot(source=SOURCE_MOCK, generated_at=tag)


class TestCacheKey:
    def test_quantizes_to_three_decimals(self):
        a = CacheKey.from_query('opensky', 35.6801, 139.7601, 2.0)
        b = CacheKey.from_query('opensky', 35.6804, 139.7604, 2.0)
        assert a == b
        assert str(a) == 'opensky|35.680,139.760|2.0'

    def test_distinguishes_provider_and_radius(self):
        base = CacheKey.from_query('opensky', 35.68, 139.76, 2.0)
        assert base != CacheKey.from_query('mock', 35.68, 139.76, 2.0)
        assert base != CacheKey.from_query('opensky', 35.68, 139.76, 3.0)
        assert base != CacheKey.from_query('opensky', 35.69, 139.76, 2.0)


class TestTtl:
    def test_hit_within_ttl(self, cache, clock):
        key = CacheKey.from_query('mock', 1, 2, 3)
        cache.set(key, snapshot('one'))
        clock.advance_ms(4999)
        assert cache.get(key) == snapshot('one')

    def test_miss_at_ttl_boundary(self, cache, clock):
        key = CacheKey.from_query('mock', 1, 2, 3)
        cache.set(key, snapshot('one'))
        clock.advance_ms(5000)
        assert cache.get(key) is None

    def test_expired_entry_is_ignored_not_removed(self, cache, clock):
        key = CacheKey.from_query('mock', 1, 2, 3)
        cache.set(key, snapshot('one'))
        clock.advance_ms(10000)
        assert cache.get(key) is None
        assert len(cache) == 1

    def test_set_replaces_and_restarts_ttl(self, cache, clock):
        key = CacheKey.from_query('mock', 1, 2, 3)
        cache.set(key, snapshot('one'))
        clock.advance_ms(4000)
        cache.set(key, snapshot('two'))
        clock.advance_ms(4000)
        assert cache.get(key) == snapshot('two')

    def test_unknown_key_is_a_miss(self, cache):
        assert cache.get(CacheKey.from_query('mock', 0, 0, 1)) is None

    def test_custom_ttl(self, clock):
        cache = ResponseCache(ttl_ms=100, clock=clock)
        key = CacheKey.from_query('mock', 1, 2, 3)
        cache.set(key, snapshot('one'))
        clock.advance_ms(150)
        assert cache.get(key) is None


class TestStats:
    def test_counts_hits_and_misses(self, cache):
        key = CacheKey.from_query('mock', 1, 2, 3)
        cache.get(key)
        cache.set(key, snapshot('one'))
        cache.get(key)
        cache.get(key)

        stats = cache.stats
        assert stats['entries'] == 1
        assert stats['hits'] == 2
        assert stats['misses'] == 1
        assert stats['ttl_ms'] == 5000

    def test_clear(self, cache):
        cache.set(CacheKey.from_query('mock', 1, 2, 3), snapshot('one'))
        cache.clear()
        assert len(cache) == 0
