"""
Tests for the session build caches
"""
import redis
from cachetools import TTLCache

from conftest import make_item
from pickapart.build import operations
from pickapart.core import session_cache
from pickapart.core.session_cache import InMemorySessionCache, RedisSessionCache, new_memory_store


class FakeRedis:
    def __init__(self, broken=False):
        self.data = {}
        self.ttls = {}
        self.broken = broken

    def _check(self):
        if self.broken:
            raise redis.ConnectionError("Connection refused")

    def get(self, key):
        self._check()
        return self.data.get(key)

    def setex(self, key, ttl, value):
        self._check()
        self.data[key] = value
        self.ttls[key] = ttl

    def delete(self, key):
        self._check()
        self.data.pop(key, None)


def test_redis_cache_round_trip():
    client = FakeRedis()
    cache = RedisSessionCache(client, "sess-1", ttl=60)
    build = operations.upsert({}, "memory", make_item("mem-1"), quantity=2)

    cache.write(build)

    assert "currentBuild:sess-1" in client.data
    assert client.ttls["currentBuild:sess-1"].total_seconds() == 60
    assert cache.read() == build

    cache.clear()
    assert cache.read() == {}


def test_redis_cache_unreadable_value_reads_empty():
    client = FakeRedis()
    client.data["currentBuild:sess-1"] = "{not json"

    assert RedisSessionCache(client, "sess-1").read() == {}


def test_broken_redis_does_not_raise():
    cache = RedisSessionCache(FakeRedis(broken=True), "sess-1")

    cache.write(operations.upsert({}, "cpu", make_item("cpu-1")))
    cache.clear()
    assert cache.read() == {}


def test_in_memory_caches_are_per_session():
    shared = {}
    a = InMemorySessionCache("a", store=shared)
    b = InMemorySessionCache("b", store=shared)

    a.write(operations.upsert({}, "cpu", make_item("cpu-1")))

    assert "cpu" in a.read()
    assert b.read() == {}


def test_redis_cache_tracks_synced_user():
    client = FakeRedis()
    cache = RedisSessionCache(client, "sess-1", ttl=60)

    assert cache.synced_user() is None
    cache.mark_synced("user-1")

    assert cache.synced_user() == "user-1"
    assert client.ttls["currentBuild:sess-1:syncedUser"].total_seconds() == 60

    cache.clear()
    assert cache.synced_user() is None


def test_in_memory_cache_tracks_synced_user():
    cache = InMemorySessionCache("a", store={})
    cache.write(operations.upsert({}, "cpu", make_item("cpu-1")))
    cache.mark_synced("user-1")

    assert cache.synced_user() == "user-1"
    assert "cpu" in cache.read()

    cache.clear()
    assert cache.synced_user() is None
    assert cache.read() == {}


def test_in_memory_entries_expire():
    now = [0]
    store = TTLCache(maxsize=10, ttl=60, timer=lambda: now[0])
    cache = InMemorySessionCache("a", store=store)
    cache.write(operations.upsert({}, "cpu", make_item("cpu-1")))

    now[0] = 59
    assert "cpu" in cache.read()

    now[0] = 61
    assert cache.read() == {}


def test_in_memory_store_is_bounded():
    store = new_memory_store(maxsize=2, ttl=60)
    for session_id in ("a", "b", "c"):
        InMemorySessionCache(session_id, store=store).write(
            operations.upsert({}, "cpu", make_item("cpu-1"))
        )

    assert len(store) == 2
    assert InMemorySessionCache("a", store=store).read() == {}
    assert "cpu" in InMemorySessionCache("c", store=store).read()


def test_redis_is_retried_after_failed_connect(monkeypatch):
    attempts = []
    now = [1000.0]

    class Client:
        def __init__(self, up):
            self.up = up

        def ping(self):
            if not self.up:
                raise redis.ConnectionError("Connection refused")
            return True

        def close(self):
            pass

    def from_url(url, **kwargs):
        attempts.append(url)
        return Client(up=len(attempts) > 1)

    monkeypatch.setattr(session_cache.redis, "from_url", from_url)
    monkeypatch.setattr(session_cache.time, "monotonic", lambda: now[0])
    session_cache.close_redis_client()

    assert session_cache.get_redis_client() is None
    # within the retry interval, no new attempt
    now[0] += session_cache.settings.REDIS_RETRY_INTERVAL - 1
    assert session_cache.get_redis_client() is None
    assert len(attempts) == 1

    now[0] += 2
    assert session_cache.get_redis_client() is not None
    assert len(attempts) == 2
    assert isinstance(session_cache.get_session_cache("s"), RedisSessionCache)

    session_cache.close_redis_client()
