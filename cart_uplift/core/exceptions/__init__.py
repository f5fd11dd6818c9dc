"""
Custom exceptions for the Cart Uplift worker
"""

from .base import CartUpliftException
from .config import ConfigurationError
from .database import (
    DatabaseError,
    DatabaseConnectionError,
    DatabaseQueryError,
    DataStorageError,
)
from .redis import RedisError, RedisConnectionError, RedisTimeoutError
from .validation import ValidationError, DataValidationError

__all__ = [
    "CartUpliftException",
    "ConfigurationError",
    "DatabaseError",
    "DatabaseConnectionError",
    "DatabaseQueryError",
    "RedisError",
    "RedisConnectionError",
    "RedisTimeoutError",
    "ValidationError",
    "DataValidationError",
    "DataStorageError",
]
