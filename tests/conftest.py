"""
Pytest configuration and fixtures
"""
import os

import asyncpg
import pytest

# No database work at app startup during tests
os.environ.setdefault("INIT_DB_ON_STARTUP", "false")
os.environ.setdefault("CATALOG_SOURCE_URL", "")

from fastapi import Depends
from fastapi.testclient import TestClient

from pickapart.api import deps
from pickapart.build.models import BuildItem, build_from_document, build_to_document
from pickapart.build.store import BuildStore, StoreError
from pickapart.catalog.source import PartCatalog
from pickapart.core.session_cache import InMemorySessionCache
from pickapart.main import app


class FakeBuildStore(BuildStore):
    """In-memory store; set fail=True to simulate the database being down"""

    def __init__(self):
        self.current = {}
        self.saved = {}
        self.replace_calls = []
        self.fail = False

    def _check(self):
        if self.fail:
            raise StoreError("connection refused")

    async def fetch_current_build(self, user_id):
        self._check()
        if user_id not in self.current:
            return None
        return build_from_document(self.current[user_id])

    async def replace_current_build(self, user_id, build):
        self.replace_calls.append((user_id, build))
        self._check()
        self.current[user_id] = build_to_document(build)

    async def append_saved_build(self, user_id, saved):
        self._check()
        self.saved.setdefault(user_id, []).append(saved)
        return saved

    async def list_saved_builds(self, user_id):
        self._check()
        return list(self.saved.get(user_id, []))

    async def get_saved_build(self, user_id, build_id):
        self._check()
        for saved in self.saved.get(user_id, []):
            if saved.id == build_id:
                return saved
        return None

    async def delete_saved_build(self, user_id, build_id):
        self._check()
        builds = self.saved.get(user_id, [])
        remaining = [b for b in builds if b.id != build_id]
        self.saved[user_id] = remaining
        return len(remaining) != len(builds)


class BrokenPool:
    """asyncpg pool stand-in whose connections have been lost"""

    def __init__(self, error=None):
        self.error = error or asyncpg.exceptions.ConnectionDoesNotExistError(
            "connection was closed in the middle of operation"
        )

    def acquire(self):
        return self

    async def __aenter__(self):
        raise self.error

    async def __aexit__(self, *exc):
        return False


def make_item(item_id, price="$100.00", name=None, **extra):
    return BuildItem(id=item_id, name=name or f"Part {item_id}", price=price, **extra)


@pytest.fixture
def store():
    return FakeBuildStore()


@pytest.fixture
def session_builds():
    """Backing dict for in-memory session caches"""
    return {}


@pytest.fixture
def cache(session_builds):
    return InMemorySessionCache("test-session", store=session_builds)


@pytest.fixture
def client(store, session_builds):
    """API client with store, session cache and catalog replaced by fakes"""
    def session_cache(session_id: str = Depends(deps.get_session_id)):
        return InMemorySessionCache(session_id, store=session_builds)

    app.dependency_overrides[deps.get_store] = lambda: store
    app.dependency_overrides[deps.get_cache] = session_cache
    app.dependency_overrides[deps.get_part_catalog] = lambda: PartCatalog(base_url="")

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
