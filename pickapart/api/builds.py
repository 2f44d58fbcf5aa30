"""
Build API Endpoints

Current build (session working copy, mirrored to the server for
signed-in users) and saved build snapshots
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field

from pickapart.api.deps import get_reconciler, get_store, get_user_id
from pickapart.build import operations
from pickapart.build.models import (
    Build,
    BuildItem,
    SavedBuild,
    build_from_document,
    build_to_document,
)
from pickapart.build.pricing import display, get_currency
from pickapart.build.reconciler import BuildReconciler
from pickapart.build.store import BuildStore, StoreError
from pickapart.config import get_settings

settings = get_settings()

router = APIRouter()


class CurrentBuildRequest(BaseModel):
    """Full current build, as sent by the client"""
    model_config = ConfigDict(populate_by_name=True)

    current_build: Dict[str, Any] = Field(default_factory=dict, alias="currentBuild")


class SyncRequest(BaseModel):
    """Build the client kept while signed out, if any"""
    model_config = ConfigDict(populate_by_name=True)

    local_build: Optional[Dict[str, Any]] = Field(None, alias="localBuild")


class AddPartRequest(BaseModel):
    item: BuildItem
    quantity: int = Field(1, ge=1)


class SaveBuildRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    current_build: Optional[Dict[str, Any]] = Field(None, alias="currentBuild")
    total_price: Optional[float] = Field(None, ge=0, alias="totalPrice")


def build_response(build: Build, currency_code: str = settings.DEFAULT_CURRENCY) -> Dict:
    currency = get_currency(currency_code)
    total = operations.compute_total(build)
    return {
        "currentBuild": build_to_document(build),
        "itemCount": operations.count_selected(build),
        "totalPrice": float(total),
        "total": display(total, currency),
        "currency": currency.code,
    }


def require_user(user_id: Optional[str]) -> str:
    if not user_id:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user_id


def require_store(store: Optional[BuildStore]) -> BuildStore:
    if store is None:
        raise HTTPException(status_code=503, detail="Build store unavailable")
    return store


# ============ Current build ============

@router.get("/build/current")
async def get_current_build(
    currency: str = Query(settings.DEFAULT_CURRENCY),
    reconciler: BuildReconciler = Depends(get_reconciler),
):
    return build_response(await reconciler.load(), currency)


@router.put("/build/current")
async def replace_current_build(
    payload: CurrentBuildRequest,
    reconciler: BuildReconciler = Depends(get_reconciler),
):
    """Overwrite the current build"""
    build = reconciler.commit(build_from_document(payload.current_build))
    return build_response(build)


@router.post("/build/sync")
async def sync_current_build(
    payload: Optional[SyncRequest] = None,
    reconciler: BuildReconciler = Depends(get_reconciler),
):
    """
    Reconcile the session build with the server build

    Called when a session starts or a user signs in. Whichever side has
    more categories filled in wins; the other side is overwritten.
    """
    if payload is not None and payload.local_build is not None:
        reconciler.cache.write(build_from_document(payload.local_build))

    build = await reconciler.start_session()
    return build_response(build)


@router.post("/build/current/{category}")
async def add_part(
    category: str,
    payload: AddPartRequest,
    reconciler: BuildReconciler = Depends(get_reconciler),
):
    """Add a part; multi-select categories merge quantities by part id"""
    build = operations.upsert(await reconciler.load(), category, payload.item, payload.quantity)
    return build_response(reconciler.commit(build))


@router.delete("/build/current/{category}/{item_id}")
async def remove_part(
    category: str,
    item_id: str,
    reconciler: BuildReconciler = Depends(get_reconciler),
):
    build = operations.remove_item(await reconciler.load(), category, item_id)
    return build_response(reconciler.commit(build))


@router.delete("/build/current/{category}")
async def remove_category(
    category: str,
    reconciler: BuildReconciler = Depends(get_reconciler),
):
    build = operations.remove_category(await reconciler.load(), category)
    return build_response(reconciler.commit(build))


@router.delete("/build/current")
async def clear_current_build(reconciler: BuildReconciler = Depends(get_reconciler)):
    build = operations.clear(await reconciler.load())
    return build_response(reconciler.commit(build))


@router.get("/build/total")
async def get_build_total(
    currency: str = Query(settings.DEFAULT_CURRENCY),
    reconciler: BuildReconciler = Depends(get_reconciler),
):
    build = await reconciler.load()
    selected = get_currency(currency)
    total = operations.compute_total(build)
    return {
        "totalPrice": float(total),
        "total": display(total, selected),
        "currency": selected.code,
        "lines": {
            key: display(amount, selected)
            for key, amount in operations.line_totals(build).items()
        },
    }


@router.post("/session/logout")
async def logout(reconciler: BuildReconciler = Depends(get_reconciler)):
    """Forget the session build"""
    reconciler.cache.clear()
    return {"message": "Logged out successfully"}


# ============ Saved builds ============

@router.post("/build/save")
async def save_build(
    payload: SaveBuildRequest,
    user_id: Optional[str] = Depends(get_user_id),
    store: Optional[BuildStore] = Depends(get_store),
    reconciler: BuildReconciler = Depends(get_reconciler),
):
    """
    Save a named snapshot of the current build

    Parts come from the request, or the current build if the request
    has none. The snapshot also becomes the current build.
    """
    user_id = require_user(user_id)
    store = require_store(store)

    try:
        build = build_from_document(payload.current_build)
        if not build:
            build = await reconciler.load()
        if not build:
            build = await store.fetch_current_build(user_id) or {}

        total = payload.total_price
        if total is None:
            total = float(operations.compute_total(build))

        saved = await store.append_saved_build(user_id, SavedBuild(
            name=payload.name or "My Build",
            parts=build_to_document(build),
            total_price=total,
        ))
        reconciler.commit(build)

        print(f"[Builds] Saved '{saved.name}' for user {user_id}")
        return {"build": saved.to_document()}

    except StoreError as e:
        print(f"[Builds] Error saving build: {e}")
        raise HTTPException(status_code=500, detail="Failed to save build")


@router.get("/build/saved")
async def list_saved_builds(
    user_id: Optional[str] = Depends(get_user_id),
    store: Optional[BuildStore] = Depends(get_store),
):
    user_id = require_user(user_id)
    store = require_store(store)

    try:
        builds: List[SavedBuild] = await store.list_saved_builds(user_id)
    except StoreError as e:
        print(f"[Builds] Error fetching saved builds: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch saved builds")

    return {"builds": [b.to_document() for b in builds]}


@router.get("/build/saved/{build_id}")
async def get_saved_build(
    build_id: str,
    user_id: Optional[str] = Depends(get_user_id),
    store: Optional[BuildStore] = Depends(get_store),
):
    user_id = require_user(user_id)
    store = require_store(store)

    try:
        saved = await store.get_saved_build(user_id, build_id)
    except StoreError as e:
        print(f"[Builds] Error fetching saved build {build_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch build")

    if not saved:
        raise HTTPException(status_code=404, detail="Build not found")

    return saved.to_document()


@router.delete("/build/saved/{build_id}")
async def delete_saved_build(
    build_id: str,
    user_id: Optional[str] = Depends(get_user_id),
    store: Optional[BuildStore] = Depends(get_store),
):
    user_id = require_user(user_id)
    store = require_store(store)

    try:
        deleted = await store.delete_saved_build(user_id, build_id)
    except StoreError as e:
        print(f"[Builds] Error deleting saved build {build_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete build")

    if not deleted:
        raise HTTPException(status_code=404, detail="Build not found")

    return {"success": True}
