"""
Request dependencies

Caller identity comes from the auth layer in front of this service:
X-User-Id is set for signed-in users, X-Session-Id identifies the
browser session.
"""

from typing import Optional

from fastapi import Depends, Header

from pickapart.build.reconciler import BuildReconciler
from pickapart.build.store import DATABASE_ERRORS, BuildStore, PostgresBuildStore
from pickapart.catalog.source import PartCatalog, get_catalog
from pickapart.core.database import get_db_pool
from pickapart.core.session_cache import LocalCache, get_session_cache


def get_user_id(x_user_id: Optional[str] = Header(None)) -> Optional[str]:
    return x_user_id or None


def get_session_id(x_session_id: Optional[str] = Header(None)) -> str:
    return x_session_id or "anonymous"


def get_cache(session_id: str = Depends(get_session_id)) -> LocalCache:
    return get_session_cache(session_id)


async def get_store() -> Optional[BuildStore]:
    """The build store, or None if the database can't be reached"""
    try:
        pool = await get_db_pool()
    except DATABASE_ERRORS as e:
        print(f"[Store] Database unavailable: {e}")
        return None
    return PostgresBuildStore(pool)


def get_reconciler(
    cache: LocalCache = Depends(get_cache),
    store: Optional[BuildStore] = Depends(get_store),
    user_id: Optional[str] = Depends(get_user_id),
) -> BuildReconciler:
    return BuildReconciler(cache=cache, store=store, user_id=user_id)


def get_part_catalog() -> PartCatalog:
    return get_catalog()
