"""
Session Build Cache

Session-scoped mirror of the current build. Anonymous visitors only
have this copy; signed-in users have it alongside the server copy.
"""

import json
import time
from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Optional

import redis
from cachetools import TTLCache

from pickapart.build.models import Build, build_from_document, build_to_document
from pickapart.config import get_settings

settings = get_settings()

CACHE_KEY_PREFIX = "currentBuild"


class LocalCache(ABC):
    """
    read/write/clear of one session's current build

    The cache also remembers which signed-in user it was last synced
    with, so a new session for that user loads the server build first.
    """

    @abstractmethod
    def read(self) -> Build:
        ...

    @abstractmethod
    def write(self, build: Build) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...

    @abstractmethod
    def synced_user(self) -> Optional[str]:
        ...

    @abstractmethod
    def mark_synced(self, user_id: str) -> None:
        ...


class RedisSessionCache(LocalCache):
    """
    Current build stored in Redis under currentBuild:<session id>

    Redis errors are reported and swallowed: a broken cache reads as an
    empty build that was never synced.
    """

    def __init__(self, client: redis.Redis, session_id: str, ttl: int = settings.SESSION_CACHE_TTL):
        self.client = client
        self.key = f"{CACHE_KEY_PREFIX}:{session_id}"
        self.synced_key = f"{self.key}:syncedUser"
        self.ttl = ttl

    def read(self) -> Build:
        try:
            raw = self.client.get(self.key)
        except redis.RedisError as e:
            print(f"[SessionCache] Error loading {self.key}: {e}")
            return {}

        if not raw:
            return {}

        try:
            return build_from_document(json.loads(raw))
        except (json.JSONDecodeError, AttributeError) as e:
            print(f"[SessionCache] Discarding unreadable build at {self.key}: {e}")
            return {}

    def write(self, build: Build) -> None:
        try:
            self.client.setex(
                self.key,
                timedelta(seconds=self.ttl),
                json.dumps(build_to_document(build))
            )
        except redis.RedisError as e:
            print(f"[SessionCache] Error saving {self.key}: {e}")

    def clear(self) -> None:
        try:
            self.client.delete(self.key)
            self.client.delete(self.synced_key)
        except redis.RedisError as e:
            print(f"[SessionCache] Error clearing {self.key}: {e}")

    def synced_user(self) -> Optional[str]:
        try:
            return self.client.get(self.synced_key) or None
        except redis.RedisError as e:
            print(f"[SessionCache] Error loading {self.synced_key}: {e}")
            return None

    def mark_synced(self, user_id: str) -> None:
        try:
            self.client.setex(self.synced_key, timedelta(seconds=self.ttl), user_id)
        except redis.RedisError as e:
            print(f"[SessionCache] Error saving {self.synced_key}: {e}")


def new_memory_store(maxsize: int = settings.MEMORY_CACHE_MAX_SESSIONS, ttl: int = settings.SESSION_CACHE_TTL) -> TTLCache:
    """Bounded, expiring backing store for InMemorySessionCache"""
    return TTLCache(maxsize=maxsize, ttl=ttl)


class InMemorySessionCache(LocalCache):
    """
    Process-local cache, used when Redis isn't reachable

    Entries expire like the Redis keys do, and the least recently used
    sessions are evicted past MEMORY_CACHE_MAX_SESSIONS.
    """

    _builds: TTLCache = new_memory_store()

    def __init__(self, session_id: str, store=None):
        self.session_id = session_id
        self._store = store if store is not None else InMemorySessionCache._builds

    def _entry(self) -> dict:
        return self._store.get(self.session_id) or {}

    def read(self) -> Build:
        return build_from_document(self._entry().get("build"))

    def write(self, build: Build) -> None:
        entry = dict(self._entry())
        entry["build"] = build_to_document(build)
        self._store[self.session_id] = entry

    def clear(self) -> None:
        self._store.pop(self.session_id, None)

    def synced_user(self) -> Optional[str]:
        return self._entry().get("synced_user")

    def mark_synced(self, user_id: str) -> None:
        entry = dict(self._entry())
        entry["synced_user"] = user_id
        self._store[self.session_id] = entry


# Global Redis client
_redis_client: Optional[redis.Redis] = None
_redis_checked_at: Optional[float] = None


def get_redis_client() -> Optional[redis.Redis]:
    """
    Get the Redis client, or None if Redis isn't available

    After a failed connection check, Redis is tried again once
    REDIS_RETRY_INTERVAL seconds have passed.
    """
    global _redis_client, _redis_checked_at

    if _redis_client is not None:
        return _redis_client

    now = time.monotonic()
    if _redis_checked_at is not None and now - _redis_checked_at < settings.REDIS_RETRY_INTERVAL:
        return None

    _redis_checked_at = now
    try:
        client = redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=2
        )
        client.ping()
        _redis_client = client
        print("[Redis] Connected successfully")
    except redis.RedisError as e:
        print(f"[Redis] Connection failed: {e}")
        print("[Redis] Session builds will be kept in memory")
        _redis_client = None

    return _redis_client


def get_session_cache(session_id: str) -> LocalCache:
    client = get_redis_client()
    if client is None:
        return InMemorySessionCache(session_id)
    return RedisSessionCache(client, session_id)


def close_redis_client():
    """Close Redis client on shutdown"""
    global _redis_client, _redis_checked_at
    if _redis_client:
        _redis_client.close()
    _redis_client = None
    _redis_checked_at = None
