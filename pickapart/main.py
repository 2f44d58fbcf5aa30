"""
FastAPI Application - PickAPart Build Service

Main entry point for the API
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from pickapart.config import get_settings
from pickapart.build.reconciler import drain_background_pushes
from pickapart.catalog.source import close_catalog
from pickapart.core.database import close_db_pool, ensure_schema, get_db_pool
from pickapart.core.session_cache import close_redis_client

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan events - startup and shutdown
    """
    # Startup
    print("🚀 Starting PickAPart Build Service...")
    print(f"   Environment: {settings.ENVIRONMENT}")
    print(f"   Debug: {settings.DEBUG}")

    if settings.INIT_DB_ON_STARTUP:
        try:
            await ensure_schema(await get_db_pool())
            print("✅ Build tables ready")
        except Exception as e:
            # The service still runs on session builds alone
            print(f"⚠️  Database not ready: {e}")

    yield

    # Shutdown
    print("\n🛑 Shutting down...")
    await drain_background_pushes()
    await close_catalog()
    await close_db_pool()
    close_redis_client()
    print("✅ Cleanup complete")


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Current build sync and saved builds for PC part planning",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "environment": settings.ENVIRONMENT
    }


@app.get("/health")
async def health_check():
    """
    Detailed health check

    Checks:
    - API is running
    - Database connection
    - Redis connection
    """
    from pickapart.core.session_cache import get_redis_client

    health = {
        "status": "healthy",
        "checks": {
            "api": "ok",
            "database": "unknown",
            "redis": "unknown"
        }
    }

    # Check database
    try:
        pool = await get_db_pool()
        async with pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
        health["checks"]["database"] = "ok"
    except Exception as e:
        health["checks"]["database"] = f"error: {str(e)}"
        health["status"] = "degraded"

    # Check Redis
    client = get_redis_client()
    if client is None:
        health["checks"]["redis"] = "unavailable, using in-memory session builds"
        health["status"] = "degraded"
    else:
        health["checks"]["redis"] = "ok"

    return health


# Import and include routers
from pickapart.api import builds, parts

app.include_router(builds.router, prefix=settings.API_V1_PREFIX, tags=["builds"])
app.include_router(parts.router, prefix=settings.API_V1_PREFIX, tags=["parts"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "pickapart.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
