"""
Async Redis client used for the tracking counters
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Dict, Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError as RedisLibraryError
from redis.exceptions import TimeoutError as RedisLibraryTimeout

from cart_uplift.core.config.settings import settings
from cart_uplift.core.exceptions import RedisConnectionError, RedisTimeoutError
from cart_uplift.core.logging import get_logger
from .models import RedisConnectionConfig

logger = get_logger(__name__)


class RedisClient:
    """
    Lazily connected wrapper around redis.asyncio.Redis.

    Library errors surface as RedisConnectionError / RedisTimeoutError so
    callers only handle the worker's own exception types.
    """

    def __init__(self, config: Optional[RedisConnectionConfig] = None):
        self.config = config or RedisConnectionConfig.from_settings(settings.redis)
        self._client: Optional[Redis] = None
        self._lock = asyncio.Lock()

    @property
    def connected(self) -> bool:
        return self._client is not None

    async def _connect(self) -> Redis:
        async with self._lock:
            if self._client is not None:
                return self._client

            target = self.config.describe()
            client = Redis(**self.config.client_kwargs())
            try:
                await asyncio.wait_for(client.ping(), timeout=self.config.connect_timeout)
            except asyncio.TimeoutError as e:
                await client.aclose()
                raise RedisTimeoutError(
                    f"Redis did not answer within {self.config.connect_timeout}s",
                    operation="connect",
                    timeout=self.config.connect_timeout,
                    cause=e,
                ) from e
            except RedisLibraryError as e:
                await client.aclose()
                raise RedisConnectionError(
                    f"Failed to connect to Redis: {e}", connection=target, cause=e
                ) from e

            logger.info("🔌 Redis connected", **target)
            self._client = client
            return client

    @asynccontextmanager
    async def _command(self, name: str):
        client = self._client or await self._connect()
        try:
            yield client
        except RedisLibraryTimeout as e:
            raise RedisTimeoutError(
                f"Redis {name} timed out",
                operation=name,
                timeout=self.config.command_timeout,
                cause=e,
            ) from e
        except RedisLibraryError as e:
            raise RedisConnectionError(
                f"Redis {name} failed: {e}", connection=self.config.describe(), cause=e
            ) from e

    async def ping(self) -> bool:
        async with self._command("ping") as client:
            return await client.ping()

    async def hincrby(self, key: str, field: str, amount: int = 1) -> int:
        async with self._command("hincrby") as client:
            return await client.hincrby(key, field, amount)

    async def hgetall(self, key: str) -> Dict[str, str]:
        async with self._command("hgetall") as client:
            return await client.hgetall(key)

    async def disconnect(self) -> None:
        async with self._lock:
            client, self._client = self._client, None
            if client is None:
                return
            try:
                await client.aclose()
                logger.info("Redis connection closed")
            except RedisLibraryError as e:
                logger.warning("Error closing Redis connection", error=str(e))


_redis_client: Optional[RedisClient] = None


def get_redis_client_instance() -> RedisClient:
    """Process-wide client, created on first use"""
    global _redis_client
    if _redis_client is None:
        _redis_client = RedisClient()
    return _redis_client


async def close_redis_client() -> None:
    global _redis_client
    if _redis_client is not None:
        await _redis_client.disconnect()
        _redis_client = None
