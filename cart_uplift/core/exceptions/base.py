"""
Root of the worker's exception hierarchy
"""

from typing import Any, Dict, Optional


class CartUpliftException(Exception):
    """
    Every error the worker raises on purpose.

    Subclasses pick a ``code``. Context worth reporting goes in ``details``
    and the underlying exception, if any, in ``cause``; both come back out
    of to_dict() for logs and API bodies.
    """

    code = "CART_UPLIFT_ERROR"

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
        error_code: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.code
        self.details = dict(details or {})
        self.cause = cause

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "error_code": self.error_code,
            "message": self.message,
            "exception_type": type(self).__name__,
        }
        if self.details:
            payload["details"] = self.details
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload
