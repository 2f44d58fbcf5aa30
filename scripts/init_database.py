"""
Create the build tables in PostgreSQL
"""

import asyncio
import asyncpg

from pickapart.config import get_settings
from pickapart.core.database import SCHEMA_SQL

settings = get_settings()


async def main():
    print("=" * 60)
    print("🚀 Creating build tables")
    print("=" * 60)

    print("\n🔌 Connecting to PostgreSQL...")
    db_url = settings.DATABASE_URL.replace("postgresql+asyncpg://", "postgresql://")
    conn = await asyncpg.connect(db_url)

    try:
        await conn.execute(SCHEMA_SQL)

        tables = await conn.fetch("""
            SELECT tablename
            FROM pg_catalog.pg_tables
            WHERE schemaname = 'public'
            ORDER BY tablename
        """)
        print(f"  ✓ Tables: {', '.join(t['tablename'] for t in tables)}")

        users = await conn.fetchval("SELECT COUNT(*) FROM users_builds")
        saved = await conn.fetchval("SELECT COUNT(*) FROM saved_builds")
        print(f"  ✓ Users with a current build: {users}")
        print(f"  ✓ Saved builds: {saved}")

    finally:
        await conn.close()

    print("\n✅ Database ready")


if __name__ == "__main__":
    asyncio.run(main())
