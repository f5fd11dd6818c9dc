"""
FastAPI application for the Cart Uplift worker
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cart_uplift.core.config.settings import settings
from cart_uplift.core.database import close_database, get_engine
from cart_uplift.core.database.create_tables import create_all_tables
from cart_uplift.core.logging import get_logger
from cart_uplift.core.redis import check_redis_health, close_redis_client

from cart_uplift.api.v1.associations import router as associations_router
from cart_uplift.api.v1.health import router as health_router
from cart_uplift.api.v1.similarity_jobs import router as similarity_jobs_router
from cart_uplift.api.v1.tracking import router as tracking_router
from cart_uplift.api.v1.webhooks import router as webhooks_router

logger = get_logger(__name__)


async def initialize_services():
    """
    Database problems abort startup. Redis only backs the tracking
    counters, so an unreachable Redis is logged and startup continues.
    """
    await get_engine()
    logger.info("✅ Database reachable")

    if not await create_all_tables():
        logger.warning("⚠️ Schema bootstrap failed, continuing with existing tables")

    redis_report = await check_redis_health()
    if redis_report.is_healthy:
        logger.info("✅ Redis reachable")
    else:
        logger.warning(
            "⚠️ Redis unavailable, tracking counters disabled until it recovers",
            error=redis_report.error_message,
        )


async def cleanup_services():
    await close_redis_client()
    await close_database()
    logger.info("Connections closed")


@asynccontextmanager
async def lifespan(app: FastAPI):
    await initialize_services()
    try:
        yield
    finally:
        await cleanup_services()


app = FastAPI(
    title="Cart Uplift Worker",
    description="Product affinity and order attribution service",
    version=settings.VERSION,
    lifespan=lifespan,
)

for router in (
    health_router,
    similarity_jobs_router,
    webhooks_router,
    associations_router,
    tracking_router,
):
    app.include_router(router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
