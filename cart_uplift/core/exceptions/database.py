"""
Database and storage errors
"""

from typing import Optional

from .base import CartUpliftException


class DatabaseError(CartUpliftException):
    code = "DATABASE_ERROR"


class DatabaseConnectionError(DatabaseError):
    """The engine could not reach Postgres"""

    code = "DATABASE_CONNECTION_ERROR"


class DatabaseQueryError(DatabaseError):
    """A statement failed; ``query`` names the repository operation"""

    code = "DATABASE_QUERY_ERROR"

    def __init__(self, message: str, query: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        if query:
            self.details.setdefault("query", query)


class DataStorageError(CartUpliftException):
    """A write the caller needed did not happen"""

    code = "DATA_STORAGE_ERROR"

    def __init__(
        self,
        message: str,
        operation: str = "unknown",
        data_type: str = "unknown",
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.data_type = data_type
        self.details.update(operation=operation, data_type=data_type)
