"""
Async SQLAlchemy access for the Cart Uplift worker
"""

from .engine import check_engine_health, close_engine, get_engine, get_database_url
from .session import (
    get_session_context,
    get_session_factory,
    get_transaction_context,
    reset_session_factory,
)


async def close_database() -> None:
    """Dispose the engine and drop the cached session factory"""
    reset_session_factory()
    await close_engine()


__all__ = [
    "get_engine",
    "close_engine",
    "check_engine_health",
    "get_database_url",
    "get_session_factory",
    "get_session_context",
    "get_transaction_context",
    "reset_session_factory",
    "close_database",
]
