"""
Liveness and dependency health endpoints
"""

import asyncio
import time
from typing import Dict, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from cart_uplift.core.config import settings
from cart_uplift.core.database import check_engine_health
from cart_uplift.core.logging import get_logger
from cart_uplift.core.redis import check_redis_health

logger = get_logger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


class ComponentHealth(BaseModel):
    status: str
    duration_ms: Optional[float] = None
    error: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    service: str = settings.PROJECT_NAME
    version: str = settings.VERSION
    timestamp: float = Field(default_factory=time.time)
    checks: Dict[str, ComponentHealth] = Field(default_factory=dict)


async def _database_health() -> ComponentHealth:
    started = time.perf_counter()
    try:
        healthy = await asyncio.wait_for(
            check_engine_health(), timeout=settings.HEALTH_CHECK_TIMEOUT
        )
    except asyncio.TimeoutError:
        return ComponentHealth(
            status="timeout", duration_ms=settings.HEALTH_CHECK_TIMEOUT * 1000
        )
    return ComponentHealth(
        status="healthy" if healthy else "unhealthy",
        duration_ms=round((time.perf_counter() - started) * 1000, 2),
    )


async def _redis_health() -> ComponentHealth:
    report = await check_redis_health()
    return ComponentHealth(
        status="healthy" if report.is_healthy else "unhealthy",
        duration_ms=report.response_time_ms,
        error=report.error_message,
    )


@router.get("/", response_model=HealthResponse)
async def health_check():
    return HealthResponse(status="healthy")


@router.get("/detailed", response_model=HealthResponse, response_model_exclude_none=True)
async def detailed_health_check():
    """Database and Redis status; 503 when either is down"""
    checks = {"database": await _database_health(), "redis": await _redis_health()}
    healthy = all(check.status == "healthy" for check in checks.values())
    response = HealthResponse(status="healthy" if healthy else "unhealthy", checks=checks)

    if not healthy:
        logger.warning(
            "Detailed health check failed",
            **{name: check.status for name, check in checks.items()},
        )
        raise HTTPException(status_code=503, detail=response.model_dump(exclude_none=True))

    return response
