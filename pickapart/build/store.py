"""
Build Store

Per-user persistence of the current build and saved builds
"""

import asyncio
import json
import uuid
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional

import asyncpg

from pickapart.build.models import Build, SavedBuild, build_from_document, build_to_document


# Server-side errors, client/connection state errors (closed pool, lost
# connection) and network failures.
DATABASE_ERRORS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)


class StoreError(Exception):
    """The build store couldn't be reached or refused the request"""


class BuildStore(ABC):

    @abstractmethod
    async def fetch_current_build(self, user_id: str) -> Optional[Build]:
        """The stored build, or None if the user has no build document"""

    @abstractmethod
    async def replace_current_build(self, user_id: str, build: Build) -> None:
        ...

    @abstractmethod
    async def append_saved_build(self, user_id: str, saved: SavedBuild) -> SavedBuild:
        ...

    @abstractmethod
    async def list_saved_builds(self, user_id: str) -> List[SavedBuild]:
        ...

    @abstractmethod
    async def get_saved_build(self, user_id: str, build_id: str) -> Optional[SavedBuild]:
        ...

    @abstractmethod
    async def delete_saved_build(self, user_id: str, build_id: str) -> bool:
        """False if there was no such build"""


def _valid_uuid(build_id: str) -> bool:
    try:
        uuid.UUID(str(build_id))
        return True
    except ValueError:
        return False


def _saved_from_row(row) -> SavedBuild:
    parts = row["parts"]
    return SavedBuild(
        id=str(row["id"]),
        name=row["name"],
        parts=json.loads(parts) if isinstance(parts, str) else (parts or {}),
        total_price=float(row["total_price"]),
        created_at=row["created_at"],
    )


class PostgresBuildStore(BuildStore):
    """
    PostgreSQL-backed store

    users_builds holds one JSONB current build per user, saved_builds one
    row per snapshot. Driver errors are raised as StoreError.
    """

    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool

    async def fetch_current_build(self, user_id: str) -> Optional[Build]:
        try:
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow(
                    "SELECT current_build FROM users_builds WHERE user_id = $1",
                    user_id
                )
        except DATABASE_ERRORS as e:
            raise StoreError(f"fetch current build failed: {e}") from e

        if not row:
            return None

        doc = row["current_build"]
        return build_from_document(json.loads(doc) if isinstance(doc, str) else doc)

    async def replace_current_build(self, user_id: str, build: Build) -> None:
        try:
            async with self.pool.acquire() as conn:
                await conn.execute("""
                    INSERT INTO users_builds (user_id, current_build, updated_at)
                    VALUES ($1, $2::jsonb, now())
                    ON CONFLICT (user_id) DO UPDATE
                    SET current_build = EXCLUDED.current_build,
                        updated_at = now()
                """, user_id, json.dumps(build_to_document(build)))
        except DATABASE_ERRORS as e:
            raise StoreError(f"replace current build failed: {e}") from e

    async def append_saved_build(self, user_id: str, saved: SavedBuild) -> SavedBuild:
        try:
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow("""
                    INSERT INTO saved_builds (id, user_id, name, parts, total_price, created_at)
                    VALUES ($1::uuid, $2, $3, $4::jsonb, $5, $6)
                    RETURNING id, name, parts, total_price, created_at
                """,
                    saved.id,
                    user_id,
                    saved.name,
                    json.dumps(saved.parts),
                    Decimal(str(saved.total_price)),
                    saved.created_at,
                )
        except DATABASE_ERRORS as e:
            raise StoreError(f"save build failed: {e}") from e

        return _saved_from_row(row)

    async def list_saved_builds(self, user_id: str) -> List[SavedBuild]:
        try:
            async with self.pool.acquire() as conn:
                rows = await conn.fetch("""
                    SELECT id, name, parts, total_price, created_at
                    FROM saved_builds
                    WHERE user_id = $1
                    ORDER BY created_at
                """, user_id)
        except DATABASE_ERRORS as e:
            raise StoreError(f"list saved builds failed: {e}") from e

        return [_saved_from_row(row) for row in rows]

    async def get_saved_build(self, user_id: str, build_id: str) -> Optional[SavedBuild]:
        if not _valid_uuid(build_id):
            return None

        try:
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow("""
                    SELECT id, name, parts, total_price, created_at
                    FROM saved_builds
                    WHERE id = $1::uuid AND user_id = $2
                """, build_id, user_id)
        except DATABASE_ERRORS as e:
            raise StoreError(f"fetch saved build failed: {e}") from e

        return _saved_from_row(row) if row else None

    async def delete_saved_build(self, user_id: str, build_id: str) -> bool:
        if not _valid_uuid(build_id):
            return False

        try:
            async with self.pool.acquire() as conn:
                deleted = await conn.fetchval("""
                    DELETE FROM saved_builds
                    WHERE id = $1::uuid AND user_id = $2
                    RETURNING id
                """, build_id, user_id)
        except DATABASE_ERRORS as e:
            raise StoreError(f"delete saved build failed: {e}") from e

        return deleted is not None
