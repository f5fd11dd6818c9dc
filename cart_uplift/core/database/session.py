"""
Session factory and the two session scopes services use

``get_session_context`` is for reads: the caller decides whether to commit.
``get_transaction_context`` commits on a clean exit. Both roll back and
re-raise when the body fails.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cart_uplift.core.logging import get_logger
from .engine import get_engine

logger = get_logger(__name__)

_session_factory: Optional[async_sessionmaker] = None
_factory_lock = asyncio.Lock()


async def get_session_factory() -> async_sessionmaker:
    global _session_factory
    async with _factory_lock:
        if _session_factory is None:
            _session_factory = async_sessionmaker(
                await get_engine(), class_=AsyncSession, expire_on_commit=False
            )
    return _session_factory


def reset_session_factory() -> None:
    global _session_factory
    _session_factory = None


@asynccontextmanager
async def _scoped_session(commit: bool) -> AsyncIterator[AsyncSession]:
    factory = await get_session_factory()
    async with factory() as session:
        try:
            yield session
            if commit:
                await session.commit()
        except Exception as e:
            logger.error(
                "Rolling back database session", error_type=type(e).__name__, error=str(e)
            )
            await session.rollback()
            raise


def get_session_context():
    return _scoped_session(commit=False)


def get_transaction_context():
    return _scoped_session(commit=True)
