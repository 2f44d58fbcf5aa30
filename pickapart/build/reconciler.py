"""
Build Reconciler

Keeps the session copy of the current build and the server copy in
agreement. Server writes are detached tasks: callers always get the
reconciled build back straight away, whatever happens to the write.
"""

import asyncio
from typing import Optional, Set

from pickapart.build.models import Build
from pickapart.build.operations import count_selected
from pickapart.build.store import BuildStore, StoreError
from pickapart.core.session_cache import LocalCache

# Pushes still in flight, across all reconcilers. The event loop only keeps
# weak references to tasks.
_background_tasks: Set[asyncio.Task] = set()


class BuildReconciler:
    """
    Merges the session build with the server build

    The side with more selected categories wins outright; the other side
    is overwritten. There is no per-category merge, so anything only the
    losing side had is dropped.
    """

    def __init__(self, cache: LocalCache, store: Optional[BuildStore] = None, user_id: Optional[str] = None):
        self.cache = cache
        self.store = store
        self.user_id = user_id
        self._pending: Set[asyncio.Task] = set()

    @property
    def authenticated(self) -> bool:
        return self.store is not None and bool(self.user_id)

    async def fetch_remote(self) -> Optional[Build]:
        """
        Server build for the current user

        A user without a build document has an empty build. None means
        the server couldn't be asked (anonymous session or store down).
        """
        if not self.authenticated:
            return None

        try:
            remote = await self.store.fetch_current_build(self.user_id)
        except StoreError as e:
            print(f"[BuildSync] Couldn't fetch build for user {self.user_id}: {e}")
            return None

        return remote if remote is not None else {}

    async def start_session(self) -> Build:
        """Reconcile the cached build with the server build"""
        local = self.cache.read()
        remote = await self.fetch_remote()
        build = self.reconcile(local, remote)
        if remote is not None:
            self.cache.mark_synced(self.user_id)
        return build

    async def load(self) -> Build:
        """
        Current working copy

        The first time a signed-in user touches a session, the session
        cache is reconciled with the server build before it is used.
        """
        if self.authenticated and self.cache.synced_user() != self.user_id:
            return await self.start_session()
        return self.cache.read()

    def reconcile(self, local: Build, remote: Optional[Build]) -> Build:
        local_count = count_selected(local)

        if remote is None:
            if local_count > 0:
                self.push(local)
            return local

        remote_count = count_selected(remote)

        if remote_count == 0 and local_count > 0:
            print(f"[BuildSync] Server build empty, keeping session build ({local_count} categories)")
            self.push(local)
            return local

        if remote_count >= local_count:
            print(f"[BuildSync] Using server build ({remote_count} >= {local_count} categories)")
            self.cache.write(remote)
            return remote

        print(f"[BuildSync] Session build wins ({local_count} > {remote_count} categories), overwriting server")
        self.push(local)
        return local

    def commit(self, build: Build) -> Build:
        """Write a changed build to the session cache and, if signed in, the server"""
        self.cache.write(build)
        if self.authenticated:
            self.cache.mark_synced(self.user_id)
        self.push(build)
        return build

    def push(self, build: Build) -> Optional[asyncio.Task]:
        """
        Overwrite the server build in the background

        One attempt, no retries. Does nothing for anonymous sessions.
        """
        if not self.authenticated:
            return None

        task = asyncio.get_running_loop().create_task(
            self.store.replace_current_build(self.user_id, build)
        )
        _background_tasks.add(task)
        self._pending.add(task)
        task.add_done_callback(self._push_done)
        return task

    def _push_done(self, task: asyncio.Task):
        _background_tasks.discard(task)
        self._pending.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            print(f"[BuildSync] Push for user {self.user_id} failed: {error}")

    async def drain(self):
        """Wait for background pushes still in flight"""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)


async def drain_background_pushes():
    """Wait for every background push, used on shutdown"""
    if _background_tasks:
        print(f"[BuildSync] Waiting for {len(_background_tasks)} pending pushes")
        await asyncio.gather(*list(_background_tasks), return_exceptions=True)
