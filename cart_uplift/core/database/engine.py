"""
Process-wide async engine

The engine is created on first use. The first connection is retried with
exponential backoff; afterwards the engine is re-validated at most every
DATABASE_HEALTH_CHECK_INTERVAL seconds and rebuilt if it stopped answering.
"""

import asyncio
import time
from typing import Optional

from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from cart_uplift.core.config.settings import settings
from cart_uplift.core.exceptions import DatabaseConnectionError
from cart_uplift.core.logging import get_logger

logger = get_logger(__name__)

ASYNC_SCHEMES = {
    "postgres://": "postgresql+asyncpg://",
    "postgresql://": "postgresql+asyncpg://",
}


def get_database_url() -> str:
    """DATABASE_URL with the asyncpg driver filled in"""
    url = settings.database.DATABASE_URL
    for scheme, async_scheme in ASYNC_SCHEMES.items():
        if url.startswith(scheme):
            return async_scheme + url[len(scheme):]
    return url


def _build_engine() -> AsyncEngine:
    engine = create_async_engine(
        get_database_url(),
        echo=settings.database.SQLALCHEMY_ECHO,
        echo_pool=settings.database.SQLALCHEMY_ECHO_POOL,
        poolclass=NullPool,
        connect_args={
            "command_timeout": settings.DATABASE_QUERY_TIMEOUT,
            "server_settings": {"application_name": "cart-uplift-worker"},
        },
    )

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection, connection_record):
        logger.debug("New database connection opened")

    return engine


async def _ping(engine: AsyncEngine) -> bool:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.debug("Database ping failed", error=str(e))
        return False
    return True


class _EngineState:
    def __init__(self):
        self.engine: Optional[AsyncEngine] = None
        self.checked_at = 0.0
        self.lock = asyncio.Lock()

    def fresh(self) -> bool:
        age = time.monotonic() - self.checked_at
        return self.engine is not None and age < settings.DATABASE_HEALTH_CHECK_INTERVAL

    async def dispose(self) -> None:
        engine, self.engine = self.engine, None
        self.checked_at = 0.0
        if engine is not None:
            await engine.dispose()

    async def connect(self) -> AsyncEngine:
        attempts = settings.MAX_RETRIES
        for attempt in range(1, attempts + 1):
            engine = _build_engine()
            try:
                ok = await asyncio.wait_for(
                    _ping(engine), timeout=settings.DATABASE_CONNECT_TIMEOUT
                )
            except asyncio.TimeoutError:
                ok = False

            if ok:
                return engine

            await engine.dispose()
            logger.error("Database not reachable", attempt=attempt, attempts=attempts)
            if attempt < attempts:
                await asyncio.sleep(
                    settings.RETRY_DELAY * settings.RETRY_BACKOFF ** (attempt - 1)
                )

        raise DatabaseConnectionError(
            "Failed to create database engine", details={"attempts": attempts}
        )


_state = _EngineState()


async def get_engine() -> AsyncEngine:
    if _state.fresh():
        return _state.engine

    async with _state.lock:
        if _state.engine is not None and not await _ping(_state.engine):
            logger.warning("Database engine unhealthy, recreating")
            await _state.dispose()
        if _state.engine is None:
            _state.engine = await _state.connect()
        _state.checked_at = time.monotonic()
        return _state.engine


async def close_engine() -> None:
    async with _state.lock:
        await _state.dispose()


async def check_engine_health() -> bool:
    """True when the database answers within HEALTH_CHECK_TIMEOUT"""
    try:
        engine = await get_engine()
        return await asyncio.wait_for(_ping(engine), timeout=settings.HEALTH_CHECK_TIMEOUT)
    except (DatabaseConnectionError, asyncio.TimeoutError) as e:
        logger.warning("Database health check failed", error=str(e))
        return False
