"""
Database Connection Pool

Manages PostgreSQL connections and the build tables
"""

import asyncpg
from typing import Optional
from pickapart.config import get_settings

settings = get_settings()

# Global connection pool
_db_pool: Optional[asyncpg.Pool] = None


SCHEMA_SQL = """
    CREATE TABLE IF NOT EXISTS users_builds (
        user_id TEXT PRIMARY KEY,
        current_build JSONB NOT NULL DEFAULT '{}'::jsonb,
        updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
    );

    CREATE TABLE IF NOT EXISTS saved_builds (
        id UUID PRIMARY KEY,
        user_id TEXT NOT NULL,
        name TEXT NOT NULL,
        parts JSONB NOT NULL DEFAULT '{}'::jsonb,
        total_price NUMERIC NOT NULL DEFAULT 0,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now()
    );

    CREATE INDEX IF NOT EXISTS saved_builds_user_idx
        ON saved_builds (user_id, created_at);
"""


async def get_db_pool() -> asyncpg.Pool:
    """
    Get or create database connection pool
    """
    global _db_pool

    if _db_pool is None:
        # asyncpg wants a plain postgresql:// DSN
        db_url = settings.DATABASE_URL.replace("postgresql+asyncpg://", "postgresql://")

        _db_pool = await asyncpg.create_pool(
            db_url,
            min_size=settings.DB_POOL_MIN_SIZE,
            max_size=settings.DB_POOL_MAX_SIZE,
            command_timeout=60
        )

    return _db_pool


async def ensure_schema(pool: asyncpg.Pool):
    """Create the build tables if they don't exist yet"""
    async with pool.acquire() as conn:
        await conn.execute(SCHEMA_SQL)


async def close_db_pool():
    """Close database pool on shutdown"""
    global _db_pool
    if _db_pool:
        await _db_pool.close()
        _db_pool = None
