"""
Redis health check
"""

import time
from typing import Optional

from cart_uplift.core.exceptions import RedisError
from cart_uplift.core.logging import get_logger
from cart_uplift.shared.helpers import now_utc
from .client import RedisClient, get_redis_client_instance
from .models import RedisHealthStatus

logger = get_logger(__name__)


async def check_redis_health(client: Optional[RedisClient] = None) -> RedisHealthStatus:
    """Ping Redis and report latency; never raises"""
    client = client or get_redis_client_instance()
    started = time.perf_counter()
    error: Optional[str] = None

    try:
        await client.ping()
    except RedisError as e:
        error = e.message
        logger.error("Redis health check failed", error=error)

    return RedisHealthStatus(
        is_healthy=error is None,
        connection_info=client.config.describe(),
        last_check=now_utc().isoformat(),
        error_message=error,
        response_time_ms=round((time.perf_counter() - started) * 1000, 2),
    )
