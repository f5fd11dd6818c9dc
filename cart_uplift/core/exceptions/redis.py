"""
Redis errors
"""

from typing import Any, Dict, Optional

from .base import CartUpliftException


class RedisError(CartUpliftException):
    code = "REDIS_ERROR"


class RedisConnectionError(RedisError):
    """Connecting or running a command failed"""

    code = "REDIS_CONNECTION_ERROR"

    def __init__(self, message: str, connection: Optional[Dict[str, Any]] = None, **kwargs):
        super().__init__(message, **kwargs)
        if connection:
            self.details["connection"] = connection


class RedisTimeoutError(RedisError):
    code = "REDIS_TIMEOUT_ERROR"

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        timeout: Optional[float] = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.details.update(operation=operation, timeout=timeout)
